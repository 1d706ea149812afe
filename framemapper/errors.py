"""
Exceptions raised by the comparison pipeline.
"""

from typing import List, Sequence, Tuple


class FrameMapperError(Exception):
    """Base class for all FrameMapper failures."""


class ValidationFailure(FrameMapperError):
    """One or more form fields failed validation."""

    def __init__(self, errors: Sequence[Tuple[str, str]]):
        self.errors: List[Tuple[str, str]] = list(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors))


class GenerationFailure(FrameMapperError):
    """The structured generation call failed or returned unparseable output."""

    DEFAULT_MESSAGE = "AI model failed to generate a comparison. Please try again."

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(self.DEFAULT_MESSAGE)


class IncompleteOutput(FrameMapperError):
    """The model output was well-formed but missing required content."""

    DEFAULT_MESSAGE = "AI output is incomplete. Missing content or explanation."

    def __init__(self, fields: Sequence[str]):
        self.fields: List[str] = list(fields)
        message = self.DEFAULT_MESSAGE
        if self.fields:
            message += f" ({', '.join(self.fields)})"
        super().__init__(message)


class ImageGenerationFailure(FrameMapperError):
    """An illustration could not be generated. Always recovered per side."""
