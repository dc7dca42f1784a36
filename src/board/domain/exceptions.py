class InvalidMutationError(Exception):
    """Raised when an inbound mutation payload cannot become a command."""

    def __init__(self, event: str, reason: str) -> None:
        super().__init__(f"Invalid '{event}' payload: {reason}")
        self.event = event
        self.reason = reason


class MessageDecodeError(ValueError):
    """Raised when a frame received from a client is not a valid board message."""
