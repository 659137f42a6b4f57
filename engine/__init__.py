"""Conversion engine utilities."""

from .errors import (
    ConversionError,
    EmptyKeySpaceError,
    InvalidFormatError,
    InvalidValueError,
    LoadError,
    NoDataError,
    SerializationError,
)

__all__ = [
    "ConversionError",
    "EmptyKeySpaceError",
    "InvalidFormatError",
    "InvalidValueError",
    "LoadError",
    "NoDataError",
    "SerializationError",
]
