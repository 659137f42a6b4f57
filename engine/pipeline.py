"""End-to-end conversion from validated input frames to the scenario outputs."""
from __future__ import annotations

import logging
from typing import Iterable

from document.builder import DEFAULT_POLICY_TYPE, build_document
from document.grouping import group_periods
from engine.coefficients import (
    DEFAULT_COEFFICIENT_SCALE,
    DEFAULT_P_MULTIPLIER,
    compute_coefficients,
    compute_resource_outputs,
)
from engine.keyspace import build_key_space
from engine.outputs import ConversionOutputs
from engine.tables import assemble_coefficient_table
from inputs.frames_api import Frames
from policy.transport import DEFAULT_POLICY_YEARS

LOGGER = logging.getLogger(__name__)


def run_conversion(
    frames: Frames,
    *,
    bev_technology: str = "BEV",
    coefficient_scale: float = DEFAULT_COEFFICIENT_SCALE,
    p_multiplier: float = DEFAULT_P_MULTIPLIER,
    allow_non_finite: bool = False,
    policy_years: Iterable[int] = DEFAULT_POLICY_YEARS,
    policy_type: str = DEFAULT_POLICY_TYPE,
) -> ConversionOutputs:
    """Build both output tables and the scenario document from ``frames``.

    Nothing is written here; every stage must succeed before the caller
    persists the returned :class:`ConversionOutputs`.
    """

    targets = frames.targets()
    assumptions = frames.assumptions()

    key_space = build_key_space(targets, assumptions)
    coefficients = compute_coefficients(
        targets,
        assumptions,
        bev_technology=bev_technology,
        coefficient_scale=coefficient_scale,
        allow_non_finite=allow_non_finite,
    )
    coef_table = assemble_coefficient_table(key_space, coefficients)
    resources = compute_resource_outputs(
        targets,
        assumptions,
        bev_technology=bev_technology,
        coefficient_scale=coefficient_scale,
        p_multiplier=p_multiplier,
        allow_non_finite=allow_non_finite,
    )

    groups = group_periods(coef_table, resources, bev_technology=bev_technology)
    document = build_document(groups, policy_years=policy_years, policy_type=policy_type)

    LOGGER.info(
        "Conversion complete: %d coefficient rows, %d resource rows",
        len(coef_table),
        len(resources),
    )
    return ConversionOutputs(coefficients=coef_table, resources=resources, document=document)


__all__ = ["run_conversion"]
