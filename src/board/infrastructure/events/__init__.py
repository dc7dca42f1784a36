from src.board.infrastructure.events.router import EventRouter
from src.board.infrastructure.events.serializers import decode_message

__all__ = [
    "EventRouter",
    "decode_message",
]
