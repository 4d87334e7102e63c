import asyncio
import logging

from users_api.app.core.config import settings
from users_api.app.core.logging import configure_logging
from users_api.app.db.init_db import init_models, seed_admin
from users_api.app.db.session import AsyncSessionLocal, engine


async def main():
    await init_models(engine)
    await seed_admin(AsyncSessionLocal, settings)
    await engine.dispose()


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(main())
    logging.getLogger(__name__).info("Database initialised")
