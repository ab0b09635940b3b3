"""Exceptions raised by the library."""


class VTFLibError(Exception):
    """Base error carrying a text description of what went wrong."""

    default_message = ""

    def __init__(self, message=None):
        self.message = self.default_message if message is None else str(message)
        super().__init__(self.message)

    def __str__(self):
        return self.message


class EndOfStreamError(VTFLibError):
    """Raised when a read or write runs past the end of a stream."""

    default_message = "End of stream."


class StreamNotOpenError(VTFLibError):
    """Raised when a stream is used before it has been opened."""

    default_message = "Stream is not open."