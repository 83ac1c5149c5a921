"""Entry point: load config, set up logging, start the services and report their state."""

import asyncio

import structlog

from tasknest.app import App
from tasknest.config import Config
from tasknest.logging import setup_logging

logger = structlog.get_logger(__name__)


async def run(app: App) -> None:
    async with app.lifespan():
        user = app.get_current_user()
        logger.info(
            "tasknest_started",
            access=app.resolve_access(),
            user_id=user.id if user else None,
            task_count=len(app.board().tasks),
        )


def main() -> None:
    config = Config()
    setup_logging(config.debug, config.log_level)
    asyncio.run(run(App(config)))


if __name__ == "__main__":
    main()
