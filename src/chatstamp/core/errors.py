"""Exceptions raised by chatstamp."""


class InvalidOrderError(ValueError):
    """Raised when a later message carries an earlier timestamp.

    This is a caller bug (messages handed over out of order), not a
    condition to recover from.
    """

    def __init__(self, previous: int, next_timestamp: int):
        self.previous = previous
        self.next_timestamp = next_timestamp
        super().__init__(
            f"next timestamp {next_timestamp} is earlier than previous {previous}"
        )


class UnknownLocaleError(ValueError):
    """Raised when no built-in locale matches the requested name."""
