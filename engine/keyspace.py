"""Canonical (region, year, technology) row set shared by the output tables."""
from __future__ import annotations

import logging

import pandas as pd

from engine.errors import EmptyKeySpaceError
from inputs.frames_api import REGION, SECTOR, SUBSECTOR, TECHNOLOGY, YEAR

LOGGER = logging.getLogger(__name__)

KEY_COLUMNS = [REGION, YEAR, SECTOR, SUBSECTOR, TECHNOLOGY]
TECHNOLOGY_KEY = [SECTOR, SUBSECTOR, TECHNOLOGY]


def distinct_values(series: pd.Series) -> list:
    """Return the distinct non-null values of ``series`` in first-occurrence order."""

    return list(pd.unique(series.dropna()))


def technology_triples(assumptions: pd.DataFrame) -> pd.DataFrame:
    """Return distinct (supplysector, tranSubsector, stub.technology) triples."""

    return assumptions[TECHNOLOGY_KEY].drop_duplicates().reset_index(drop=True)


def build_key_space(targets: pd.DataFrame, assumptions: pd.DataFrame) -> pd.DataFrame:
    """Return the Cartesian product of target (region, year) pairs and technology triples.

    Every combination is a candidate output row whether or not data exists for it,
    so the result always has ``len(regions) * len(years) * len(triples)`` rows.

    Raises
    ------
    EmptyKeySpaceError
        If ``targets`` yields no regions or no years.
    """

    regions = distinct_values(targets[REGION])
    years = distinct_values(targets[YEAR])
    if not regions or not years:
        raise EmptyKeySpaceError("Missing regions or years in input data")

    region_years = pd.MultiIndex.from_product([regions, years], names=[REGION, YEAR]).to_frame(
        index=False
    )
    triples = technology_triples(assumptions)
    combined = pd.merge(region_years, triples, how="cross")

    LOGGER.info(
        "Key space: %d regions x %d years x %d technologies = %d rows",
        len(regions),
        len(years),
        len(triples),
        len(combined),
    )
    return combined[KEY_COLUMNS]


__all__ = ["KEY_COLUMNS", "TECHNOLOGY_KEY", "build_key_space", "distinct_values", "technology_triples"]
