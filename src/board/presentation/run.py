"""CLI entry point for launching the board server with uvicorn."""

import uvicorn

from src.setup.api_config import get_board_settings
from src.setup.logging_config import setup_logging


def main() -> None:
    settings = get_board_settings()
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "src.board.presentation.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
