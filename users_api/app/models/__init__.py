from users_api.app.models.user import Gender, User

__all__ = ["Gender", "User"]
