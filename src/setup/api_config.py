from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class BoardSettings(BaseSettings):
    APP_NAME: str = "task-board"
    APP_VERSION: str = "0.1.0"
    BOARD_WS_PATH: str = "/ws/board"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    OUTBOX_SIZE: int = 100

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_board_settings() -> BoardSettings:
    return BoardSettings()
