"""Scenario XML document grouping and serialisation."""

from .builder import build_document, format_number, write_document
from .grouping import PeriodEntry, RegionGroup, ResourceOutput, group_periods

__all__ = [
    "PeriodEntry",
    "RegionGroup",
    "ResourceOutput",
    "build_document",
    "format_number",
    "group_periods",
    "write_document",
]
