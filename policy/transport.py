"""Transport category classification and EV target naming conventions."""
from __future__ import annotations

from enum import Enum
from typing import Iterable

from engine.errors import InvalidFormatError

FREIGHT_PREFIX = "trn_freight"
PASSENGER_PREFIX = "trn_pass"
NAME_PREFIX = "EVTarget"

DEFAULT_POLICY_YEARS: tuple[int, ...] = (2025, 2030, 2035, 2040, 2045, 2050, 2055, 2060)


class TransportCategory(Enum):
    """Transport category encoded in a supplysector label."""

    FREIGHT = "freight"
    PASSENGER = "pass"
    UNRECOGNIZED = None

    @property
    def label(self) -> str | None:
        """Return the suffix used in EV target names, ``None`` if unrecognised."""

        return self.value


def classify_supplysector(supplysector: object) -> TransportCategory:
    """Return the :class:`TransportCategory` for ``supplysector`` by prefix."""

    text = str(supplysector)
    if text.startswith(FREIGHT_PREFIX):
        return TransportCategory.FREIGHT
    if text.startswith(PASSENGER_PREFIX):
        return TransportCategory.PASSENGER
    return TransportCategory.UNRECOGNIZED


def policy_name(year: int, category: TransportCategory) -> str:
    """Return ``EVTarget<year>_<category>`` for a recognised category."""

    if category is TransportCategory.UNRECOGNIZED:
        raise InvalidFormatError("cannot name a policy for an unrecognised transport category")
    return f"{NAME_PREFIX}{int(year)}_{category.label}"


def derive_energy_input_name(supplysector: str, year: int) -> str:
    """Return the minicam-energy-input name for ``supplysector`` in ``year``.

    Unrecognised supplysector prefixes are fatal here.

    Raises
    ------
    InvalidFormatError
        If ``supplysector`` starts with neither ``trn_freight`` nor ``trn_pass``.
    """

    category = classify_supplysector(supplysector)
    if category is TransportCategory.UNRECOGNIZED:
        raise InvalidFormatError(f"Invalid supplysector format: {supplysector}")
    return policy_name(year, category)


def categories_present(supplysectors: Iterable[object]) -> list[TransportCategory]:
    """Return recognised categories in first-occurrence order.

    Unrecognised supplysectors are filtered out rather than raised.
    """

    seen: list[TransportCategory] = []
    for sector in supplysectors:
        category = classify_supplysector(sector)
        if category is TransportCategory.UNRECOGNIZED:
            continue
        if category not in seen:
            seen.append(category)
    return seen


__all__ = [
    "DEFAULT_POLICY_YEARS",
    "TransportCategory",
    "categories_present",
    "classify_supplysector",
    "derive_energy_input_name",
    "policy_name",
]
