"""Tests for the canonical key space."""

from __future__ import annotations

import importlib

import pytest

pd = pytest.importorskip("pandas")

from engine.errors import EmptyKeySpaceError
from engine.keyspace import KEY_COLUMNS, build_key_space

fixtures = importlib.import_module("tests.fixtures.ev_minimal")


def test_key_space_is_full_cartesian_product() -> None:
    targets = fixtures.targets_frame()
    assumptions = fixtures.assumptions_frame()

    key_space = build_key_space(targets, assumptions)

    regions = targets["region"].nunique()
    years = targets["year"].nunique()
    triples = len(assumptions[["supplysector", "tranSubsector", "stub.technology"]].drop_duplicates())
    assert len(key_space) == regions * years * triples == 16
    assert list(key_space.columns) == KEY_COLUMNS
    assert not key_space.duplicated().any()


def test_key_space_ignores_which_pairs_have_targets() -> None:
    """China has no freight targets but still receives freight rows."""

    key_space = build_key_space(fixtures.targets_frame(), fixtures.assumptions_frame())

    china_freight = key_space[
        (key_space["region"] == "China") & (key_space["supplysector"] == "trn_freight_road")
    ]
    assert set(china_freight["year"]) == {2025, 2030}
    assert set(china_freight["stub.technology"]) == {"BEV", "Liquids"}


def test_key_space_uses_target_years_only() -> None:
    assumptions = fixtures.assumptions_frame()
    extra = assumptions.iloc[[0]].assign(year=2050)

    key_space = build_key_space(fixtures.targets_frame(), pd.concat([assumptions, extra]))

    assert set(key_space["year"]) == {2025, 2030}


def test_empty_targets_raise_empty_key_space() -> None:
    targets = fixtures.targets_frame().iloc[0:0]

    with pytest.raises(EmptyKeySpaceError, match="Missing regions or years"):
        build_key_space(targets, fixtures.assumptions_frame())
