from users_api.app.schemas.user import RegisterRequest
from users_api.app.services.login import LoginOutcome, LoginService

from tests.helpers import registration


async def _service_with_user(repository, **overrides) -> LoginService:
    result = await repository.create_user(RegisterRequest(**registration("Ivan01", **overrides)), "Admin")
    assert result.ok
    return LoginService(repository)


async def test_unknown_login(repository):
    result = await LoginService(repository).try_login("Nobody", "Pass123")

    assert result.outcome is LoginOutcome.UNKNOWN_LOGIN
    assert result.claims is None


async def test_wrong_password(repository):
    service = await _service_with_user(repository)

    result = await service.try_login("Ivan01", "WrongPass1")

    assert result.outcome is LoginOutcome.WRONG_PASSWORD
    assert result.claims is None


async def test_deactivated_account_reported_before_password_check(repository):
    service = await _service_with_user(repository)
    await repository.deactivate_user("Ivan01", revoked_by="Admin")

    correct = await service.try_login("Ivan01", "Pass123")
    wrong = await service.try_login("Ivan01", "WrongPass1")

    assert correct.outcome is LoginOutcome.ACCOUNT_DEACTIVATED
    assert wrong.outcome is LoginOutcome.ACCOUNT_DEACTIVATED


async def test_successful_login_returns_claims(repository):
    service = await _service_with_user(repository, admin=True)

    result = await service.try_login("Ivan01", "Pass123")

    assert result.outcome is LoginOutcome.SUCCESS
    assert result.claims.login == "Ivan01"
    assert result.claims.is_admin is True
    assert result.claims.id == result.user.id
