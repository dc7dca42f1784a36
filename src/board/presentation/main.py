from contextlib import asynccontextmanager

import inject
from fastapi import FastAPI

from src.board.presentation.routes import router as api_router
from src.board.presentation.websockets import BoardConnectionManager, build_ws_router
from src.setup.api_config import BoardSettings, get_board_settings
from src.setup.app_config import configure_di


def create_app(settings: BoardSettings | None = None) -> FastAPI:
    settings = settings or get_board_settings()
    configure_di(outbox_size=settings.OUTBOX_SIZE)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        await inject.instance(BoardConnectionManager).close_all()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Shared task board with live full-snapshot sync over WebSocket",
        lifespan=lifespan,
    )
    app.include_router(api_router, prefix="")
    app.include_router(build_ws_router(settings.BOARD_WS_PATH), prefix="")
    return app


app = create_app()
