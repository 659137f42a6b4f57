"""Transport policy naming for the EV target scenario."""

from .transport import (
    DEFAULT_POLICY_YEARS,
    TransportCategory,
    categories_present,
    classify_supplysector,
    derive_energy_input_name,
    policy_name,
)

__all__ = [
    "DEFAULT_POLICY_YEARS",
    "TransportCategory",
    "categories_present",
    "classify_supplysector",
    "derive_energy_input_name",
    "policy_name",
]
