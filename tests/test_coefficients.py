"""Tests for the BEV coefficient and resource output calculators."""

from __future__ import annotations

import importlib
import logging
import math

import pytest

pd = pytest.importorskip("pandas")

from engine.coefficients import (
    COEFFICIENT_COLUMNS,
    RESOURCE_COLUMNS,
    compute_coefficients,
    compute_resource_outputs,
    join_bev_targets,
)
from engine.errors import InvalidValueError, NoDataError

fixtures = importlib.import_module("tests.fixtures.ev_minimal")


def _single_pair(travel: float, target: float, load_factor: float = 2.0):
    targets = pd.DataFrame(
        [
            {
                "region": "USA",
                "year": 2030,
                "supplysector": "trn_pass_road",
                "tranSubsector": "Car",
                "EV_Sale_Target(%)": target,
            }
        ]
    )
    assumptions = pd.DataFrame(
        [
            {
                "supplysector": "trn_pass_road",
                "tranSubsector": "Car",
                "stub.technology": "BEV",
                "year": 2030,
                "assumptions on annual travel per vehicle": travel,
                "load factors": load_factor,
            }
        ]
    )
    return targets, assumptions


def test_coefficient_formula() -> None:
    targets, assumptions = _single_pair(travel=10.0, target=0.05)

    result = compute_coefficients(targets, assumptions)

    assert list(result.columns) == COEFFICIENT_COLUMNS
    assert result.loc[0, "coefficient"] == pytest.approx(5000.0)
    assert result.loc[0, "minicam_energy_input"] == "EVTarget2030_pass"


def test_output_ratio_formula() -> None:
    targets, assumptions = _single_pair(travel=10.0, target=0.05, load_factor=2.0)

    result = compute_resource_outputs(targets, assumptions)

    assert list(result.columns) == RESOURCE_COLUMNS
    row = result.iloc[0]
    assert row["output.ratio"] == pytest.approx(0.00005)
    assert row["pMultiplier"] == pytest.approx(1_000_000_000.0)
    assert row["stub.technology"] == "BEV"
    assert row["res.secondary.output"] == "EVTarget2030_pass"


def test_join_keeps_only_bev_rows_with_matching_targets() -> None:
    joined = join_bev_targets(fixtures.targets_frame(), fixtures.assumptions_frame())

    keys = set(zip(joined["region"], joined["supplysector"], joined["year"]))
    assert keys == {
        ("USA", "trn_pass_road", 2025),
        ("USA", "trn_pass_road", 2030),
        ("USA", "trn_freight_road", 2025),
        ("China", "trn_pass_road", 2025),
        ("China", "trn_pass_road", 2030),
    }
    assert set(joined["stub.technology"]) == {"BEV"}


def test_coefficients_for_baseline_inputs() -> None:
    result = compute_coefficients(fixtures.targets_frame(), fixtures.assumptions_frame())

    values = {
        (row.region, row.supplysector, row.year): row.coefficient
        for row in result.itertuples(index=False)
    }
    assert values[("USA", "trn_freight_road", 2025)] == pytest.approx(400.0)
    assert values[("China", "trn_pass_road", 2030)] == pytest.approx(10_000.0)


def test_no_matching_bev_rows_raise_no_data() -> None:
    targets, assumptions = _single_pair(travel=10.0, target=0.05)
    assumptions["stub.technology"] = "Liquids"

    with pytest.raises(NoDataError, match="No BEV data"):
        compute_coefficients(targets, assumptions)
    with pytest.raises(NoDataError, match="No RES data"):
        compute_resource_outputs(targets, assumptions)


def test_custom_bev_technology_label() -> None:
    targets, assumptions = _single_pair(travel=10.0, target=0.05)
    assumptions["stub.technology"] = "BEV_LDV"

    result = compute_coefficients(targets, assumptions, bev_technology="BEV_LDV")

    assert len(result) == 1


def test_zero_travel_is_a_data_error() -> None:
    targets, assumptions = _single_pair(travel=0.0, target=0.05)

    with pytest.raises(InvalidValueError, match="infinite or undefined"):
        compute_coefficients(targets, assumptions)


def test_zero_load_factor_is_a_data_error_for_resources_only() -> None:
    targets, assumptions = _single_pair(travel=10.0, target=0.05, load_factor=0.0)

    assert len(compute_coefficients(targets, assumptions)) == 1
    with pytest.raises(InvalidValueError):
        compute_resource_outputs(targets, assumptions)


def test_non_finite_values_propagate_when_allowed(caplog) -> None:
    targets, assumptions = _single_pair(travel=0.0, target=0.05)

    with caplog.at_level(logging.WARNING, logger="engine.coefficients"):
        result = compute_coefficients(targets, assumptions, allow_non_finite=True)

    assert math.isinf(result.loc[0, "coefficient"])
    assert "infinite or undefined" in caplog.text


def test_unrecognised_supplysector_fails_naming() -> None:
    targets, assumptions = _single_pair(travel=10.0, target=0.05)
    targets["supplysector"] = "trn_aviation"
    assumptions["supplysector"] = "trn_aviation"

    with pytest.raises(ValueError, match="Invalid supplysector format"):
        compute_coefficients(targets, assumptions)
