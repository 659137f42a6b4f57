"""Exception hierarchy raised by the conversion pipeline."""
from __future__ import annotations


class ConversionError(Exception):
    """Base error for a pipeline stage that aborts the whole run."""

    stage = "conversion"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class LoadError(ConversionError):
    """An input table is missing, unreadable or lacks required columns."""

    stage = "load"


class EmptyKeySpaceError(ConversionError):
    """The target table provides no regions or no years."""

    stage = "key-space"


class InvalidFormatError(ConversionError, ValueError):
    """A supplysector label does not carry a recognised transport prefix."""

    stage = "naming"


class NoDataError(ConversionError):
    """A required join produced zero rows."""

    stage = "coefficients"


class InvalidValueError(ConversionError, ValueError):
    """A joined row would produce an infinite or undefined coefficient."""

    stage = "coefficients"


class SerializationError(ConversionError):
    """The output document could not be built or written."""

    stage = "document"


__all__ = [
    "ConversionError",
    "EmptyKeySpaceError",
    "InvalidFormatError",
    "InvalidValueError",
    "LoadError",
    "NoDataError",
    "SerializationError",
]
