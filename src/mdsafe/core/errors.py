"""Render pipeline error types"""


class RenderError(Exception):
    """Base class for request-level failures raised by the pipeline."""


class InputTooLarge(RenderError):
    """Input byte length exceeds the configured maximum."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"input exceeds maximum size of {limit} bytes")


class ConversionFailed(RenderError):
    """The markdown to HTML converter reported an error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"render failed: {message}")
