# users_api/main.py
# ASGI entrypoint: uvicorn users_api.main:app
from users_api.app.main import app  # noqa: F401
