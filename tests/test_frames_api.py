"""Tests for the :mod:`inputs.frames_api` helpers."""

from __future__ import annotations

import importlib

import pytest

pd = pytest.importorskip("pandas")

from engine.errors import LoadError
from inputs.frames_api import Frames, load_frames

fixtures = importlib.import_module("tests.fixtures.ev_minimal")


def test_load_frames_reads_both_tables(tmp_path) -> None:
    fixtures.write_inputs(tmp_path)

    frames = load_frames(tmp_path / fixtures.TARGET_FILE, tmp_path / fixtures.ASSUMPTIONS_FILE)

    targets = frames.targets()
    assumptions = frames.assumptions()
    assert len(targets) == 6
    assert len(assumptions) == 6
    assert targets["year"].dtype.kind == "i"
    assert assumptions["load factors"].dtype.kind == "f"


def test_missing_file_raises_load_error(tmp_path) -> None:
    fixtures.write_inputs(tmp_path)

    with pytest.raises(LoadError, match="does not exist"):
        load_frames(tmp_path / "missing.csv", tmp_path / fixtures.ASSUMPTIONS_FILE)


def test_empty_file_raises_load_error(tmp_path) -> None:
    fixtures.write_inputs(tmp_path)
    (tmp_path / fixtures.TARGET_FILE).write_text("")

    with pytest.raises(LoadError, match="unable to read"):
        load_frames(tmp_path / fixtures.TARGET_FILE, tmp_path / fixtures.ASSUMPTIONS_FILE)


def test_missing_column_raises_load_error() -> None:
    targets = fixtures.targets_frame().drop(columns=["EV_Sale_Target(%)"])
    frames = Frames({"targets": targets, "assumptions": fixtures.assumptions_frame()})

    with pytest.raises(LoadError, match=r"missing required columns: EV_Sale_Target\(%\)"):
        frames.targets()


def test_non_numeric_values_raise_load_error() -> None:
    assumptions = fixtures.assumptions_frame().astype({"load factors": object})
    assumptions.loc[0, "load factors"] = "two"
    frames = Frames({"targets": fixtures.targets_frame(), "assumptions": assumptions})

    with pytest.raises(LoadError, match="non-numeric values: 'two'"):
        frames.assumptions()


@pytest.mark.parametrize(
    ("frame", "column"),
    [
        ("targets", "region"),
        ("targets", "supplysector"),
        ("assumptions", "tranSubsector"),
        ("assumptions", "stub.technology"),
    ],
)
def test_blank_key_cells_raise_load_error(frame, column) -> None:
    tables = {"targets": fixtures.targets_frame(), "assumptions": fixtures.assumptions_frame()}
    tables[frame] = tables[frame].astype({column: object})
    tables[frame].loc[1, column] = None
    frames = Frames(tables)

    with pytest.raises(LoadError, match=rf"column '{column}' has blank values at rows: 1"):
        getattr(frames, frame)()


def test_blank_region_in_file_is_rejected_before_conversion(tmp_path) -> None:
    targets = fixtures.targets_frame().assign(region=None)
    fixtures.write_inputs(tmp_path, targets=targets)

    with pytest.raises(LoadError, match="'region' has blank values"):
        load_frames(tmp_path / fixtures.TARGET_FILE, tmp_path / fixtures.ASSUMPTIONS_FILE)


def test_whitespace_only_key_cell_is_blank() -> None:
    targets = fixtures.targets_frame()
    targets.loc[0, "supplysector"] = "   "
    frames = Frames({"targets": targets, "assumptions": fixtures.assumptions_frame()})

    with pytest.raises(LoadError, match="'supplysector' has blank values at rows: 0"):
        frames.targets()


def test_extra_columns_are_passed_through() -> None:
    targets = fixtures.targets_frame().assign(source="IEA")
    frames = Frames({"targets": targets, "assumptions": fixtures.assumptions_frame()})

    assert "source" in frames.targets().columns


def test_frames_return_copies() -> None:
    frames = fixtures.baseline_frames()

    targets = frames.targets()
    targets.loc[0, "region"] = "changed"

    assert frames.targets().loc[0, "region"] == "USA"


def test_missing_frame_raises_load_error() -> None:
    frames = Frames({"targets": fixtures.targets_frame()})

    with pytest.raises(LoadError, match="assumptions"):
        frames.assumptions()
