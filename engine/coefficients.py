"""BEV energy-input coefficients and resource output ratios."""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from engine.errors import InvalidValueError, NoDataError
from inputs.frames_api import (
    ANNUAL_TRAVEL,
    ASSUMPTION_COLUMNS,
    LOAD_FACTOR,
    REGION,
    SECTOR,
    SUBSECTOR,
    TARGET_COLUMNS,
    TARGET_SHARE,
    TECHNOLOGY,
    YEAR,
)
from policy.transport import derive_energy_input_name

LOGGER = logging.getLogger(__name__)

JOIN_KEYS = [SECTOR, SUBSECTOR, YEAR]

COEFFICIENT = "coefficient"
ENERGY_INPUT = "minicam_energy_input"
RES_OUTPUT = "res.secondary.output"
OUTPUT_RATIO = "output.ratio"
P_MULTIPLIER = "pMultiplier"

COEFFICIENT_COLUMNS = [REGION, YEAR, SECTOR, SUBSECTOR, COEFFICIENT, ENERGY_INPUT]
RESOURCE_COLUMNS = [
    REGION,
    SECTOR,
    SUBSECTOR,
    TECHNOLOGY,
    YEAR,
    RES_OUTPUT,
    OUTPUT_RATIO,
    P_MULTIPLIER,
]

DEFAULT_COEFFICIENT_SCALE = 1_000_000.0
DEFAULT_P_MULTIPLIER = 1_000_000_000.0


def join_bev_targets(
    targets: pd.DataFrame, assumptions: pd.DataFrame, bev_technology: str = "BEV"
) -> pd.DataFrame:
    """Inner-join targets to the ``bev_technology`` assumptions on sector, subsector and year.

    Rows without a partner on either side are dropped; only BEV assumptions
    interact with adoption targets.
    """

    bev = assumptions.loc[assumptions[TECHNOLOGY] == bev_technology, ASSUMPTION_COLUMNS]
    joined = pd.merge(targets[TARGET_COLUMNS], bev, how="inner", on=JOIN_KEYS)
    LOGGER.debug("BEV join matched %d target rows", len(joined))
    return joined.reset_index(drop=True)


def energy_input_names(df: pd.DataFrame) -> pd.Series:
    """Return the strict EV target name for every row of ``df``."""

    names = [
        derive_energy_input_name(sector, year) for sector, year in zip(df[SECTOR], df[YEAR])
    ]
    return pd.Series(names, index=df.index, dtype=object)


def _guard_non_finite(
    df: pd.DataFrame, column: str, *, allow_non_finite: bool, label: str
) -> None:
    """Raise or warn when ``column`` holds infinite or undefined values."""

    bad = ~np.isfinite(df[column].to_numpy(dtype=float))
    if not bad.any():
        return
    keys = df.loc[bad, [REGION, SECTOR, SUBSECTOR, YEAR]].drop_duplicates()
    detail = ", ".join(
        f"({row.region}, {row.supplysector}, {row.tranSubsector}, {row.year})"
        for row in keys.head(5).itertuples(index=False)
    )
    message = (
        f"{int(bad.sum())} {label} value(s) are infinite or undefined; check for zero or missing "
        f"travel, load factor or target values at {detail}"
    )
    if not allow_non_finite:
        raise InvalidValueError(message, stage=label)
    LOGGER.warning(message)


def compute_coefficients(
    targets: pd.DataFrame,
    assumptions: pd.DataFrame,
    *,
    bev_technology: str = "BEV",
    coefficient_scale: float = DEFAULT_COEFFICIENT_SCALE,
    allow_non_finite: bool = False,
) -> pd.DataFrame:
    """Return BEV coefficient rows.

    ``coefficient = 1 / annual travel * EV sale target * coefficient_scale``

    Raises
    ------
    NoDataError
        If no target row matches a BEV assumption.
    InvalidValueError
        If a coefficient is infinite or undefined and ``allow_non_finite`` is false.
    """

    joined = join_bev_targets(targets, assumptions, bev_technology)
    if joined.empty:
        raise NoDataError("No BEV data generated. Please check input data.", stage="coefficients")

    with np.errstate(divide="ignore", invalid="ignore"):
        joined[COEFFICIENT] = 1.0 / joined[ANNUAL_TRAVEL] * joined[TARGET_SHARE] * coefficient_scale
    _guard_non_finite(joined, COEFFICIENT, allow_non_finite=allow_non_finite, label="coefficients")
    joined[ENERGY_INPUT] = energy_input_names(joined)

    LOGGER.info("Computed %d BEV coefficient rows", len(joined))
    return joined[COEFFICIENT_COLUMNS]


def compute_resource_outputs(
    targets: pd.DataFrame,
    assumptions: pd.DataFrame,
    *,
    bev_technology: str = "BEV",
    coefficient_scale: float = DEFAULT_COEFFICIENT_SCALE,
    p_multiplier: float = DEFAULT_P_MULTIPLIER,
    allow_non_finite: bool = False,
) -> pd.DataFrame:
    """Return BEV resource-output rows (output table 2).

    ``output.ratio = 1 / annual travel / load factor * coefficient_scale / p_multiplier``

    Raises
    ------
    NoDataError
        If no target row matches a BEV assumption.
    InvalidValueError
        If a ratio is infinite or undefined and ``allow_non_finite`` is false.
    """

    joined = join_bev_targets(targets, assumptions, bev_technology)
    if joined.empty:
        raise NoDataError("No RES data generated. Please check input data.", stage="resources")

    joined[TECHNOLOGY] = bev_technology
    with np.errstate(divide="ignore", invalid="ignore"):
        joined[OUTPUT_RATIO] = (
            1.0 / joined[ANNUAL_TRAVEL] / joined[LOAD_FACTOR] * coefficient_scale / p_multiplier
        )
    _guard_non_finite(joined, OUTPUT_RATIO, allow_non_finite=allow_non_finite, label="resources")
    joined[P_MULTIPLIER] = float(p_multiplier)
    joined[RES_OUTPUT] = energy_input_names(joined)

    LOGGER.info("Computed %d BEV resource output rows", len(joined))
    return joined[RESOURCE_COLUMNS]


__all__ = [
    "COEFFICIENT",
    "COEFFICIENT_COLUMNS",
    "ENERGY_INPUT",
    "OUTPUT_RATIO",
    "P_MULTIPLIER",
    "RESOURCE_COLUMNS",
    "RES_OUTPUT",
    "compute_coefficients",
    "compute_resource_outputs",
    "energy_input_names",
    "join_bev_targets",
]
