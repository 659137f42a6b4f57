"""Assembly of the StubTranTechCoef output table."""
from __future__ import annotations

import logging

import pandas as pd

from engine.coefficients import COEFFICIENT, ENERGY_INPUT, energy_input_names
from inputs.frames_api import REGION, SECTOR, SUBSECTOR, TECHNOLOGY, YEAR

LOGGER = logging.getLogger(__name__)

MARKET_NAME = "market_name"

COEF_TABLE_COLUMNS = [
    REGION,
    YEAR,
    SECTOR,
    SUBSECTOR,
    TECHNOLOGY,
    COEFFICIENT,
    ENERGY_INPUT,
    MARKET_NAME,
]
SORT_COLUMNS = [REGION, SECTOR, SUBSECTOR, TECHNOLOGY, YEAR]
MERGE_KEYS = [REGION, YEAR, SECTOR, SUBSECTOR]


def assemble_coefficient_table(key_space: pd.DataFrame, coefficients: pd.DataFrame) -> pd.DataFrame:
    """Left-join the canonical rows to the BEV coefficients.

    The join is on (region, year, supplysector, tranSubsector), so every
    technology of a matched subsector carries the coefficient. Unmatched rows are
    kept with a null ``coefficient``; ``minicam_energy_input`` is re-derived for
    every row since it depends only on supplysector and year.
    """

    merged = pd.merge(
        key_space,
        coefficients[MERGE_KEYS + [COEFFICIENT]],
        how="left",
        on=MERGE_KEYS,
    )
    merged[COEFFICIENT] = merged[COEFFICIENT].astype(float)
    merged[ENERGY_INPUT] = energy_input_names(merged)
    merged[MARKET_NAME] = merged[REGION]

    table = merged.sort_values(SORT_COLUMNS, kind="mergesort").reset_index(drop=True)
    matched = int(table[COEFFICIENT].notna().sum())
    LOGGER.info(
        "StubTranTechCoef: %d rows, %d with a coefficient, %d without",
        len(table),
        matched,
        len(table) - matched,
    )
    return table[COEF_TABLE_COLUMNS]


__all__ = ["COEF_TABLE_COLUMNS", "MARKET_NAME", "SORT_COLUMNS", "assemble_coefficient_table"]
