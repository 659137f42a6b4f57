"""Centralised access to validated scenario input frames."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Dict, Iterable

import pandas as pd

from engine.errors import LoadError

LOGGER = logging.getLogger(__name__)

_TARGETS_KEY = "targets"
_ASSUMPTIONS_KEY = "assumptions"

REGION = "region"
YEAR = "year"
SECTOR = "supplysector"
SUBSECTOR = "tranSubsector"
TECHNOLOGY = "stub.technology"
TARGET_SHARE = "EV_Sale_Target(%)"
ANNUAL_TRAVEL = "assumptions on annual travel per vehicle"
LOAD_FACTOR = "load factors"

TARGET_COLUMNS = [REGION, YEAR, SECTOR, SUBSECTOR, TARGET_SHARE]
ASSUMPTION_COLUMNS = [SECTOR, SUBSECTOR, TECHNOLOGY, YEAR, ANNUAL_TRAVEL, LOAD_FACTOR]


def _normalize_name(name: str) -> str:
    """Normalise frame identifiers to a consistent string key."""

    if not isinstance(name, str):  # pragma: no cover
        name = str(name)
    return name.lower()


def _ensure_dataframe(name: str, value: object) -> pd.DataFrame:
    """Return a deep copy of ``value`` ensuring it is a DataFrame."""

    if not isinstance(value, pd.DataFrame):
        raise TypeError(f'frame "{name}" must be provided as a pandas DataFrame')
    return value.copy(deep=True)


def _validate_columns(frame: str, df: pd.DataFrame, required: Iterable[str]) -> pd.DataFrame:
    """Ensure ``df`` contains the ``required`` columns, returning a copy."""

    missing = [column for column in required if column not in df.columns]
    if missing:
        columns = ", ".join(missing)
        raise LoadError(f"{frame} frame is missing required columns: {columns}")
    return df.copy(deep=True)


def _require_numeric(frame: str, column: str, series: pd.Series) -> pd.Series:
    """Return ``series`` coerced to numeric values ensuring no missing data."""

    numeric = pd.to_numeric(series, errors="coerce")
    if numeric.isna().any():
        raise LoadError(f"{frame} frame column '{column}' must contain numeric values")
    return numeric


def _coerce_numeric(frame: str, column: str, series: pd.Series) -> pd.Series:
    """Return ``series`` as floats, allowing blanks but rejecting unparseable text."""

    numeric = pd.to_numeric(series, errors="coerce")
    blank = series.isna() | series.astype(str).str.strip().eq("")
    invalid = numeric.isna() & ~blank
    if invalid.any():
        examples = ", ".join(repr(value) for value in series[invalid].unique()[:3])
        raise LoadError(
            f"{frame} frame column '{column}' contains non-numeric values: {examples}"
        )
    return numeric.astype(float)


def _require_text(frame: str, column: str, series: pd.Series) -> pd.Series:
    """Return key column ``series`` as strings, rejecting blank cells."""

    blank = series.isna() | series.astype(str).str.strip().eq("")
    if blank.any():
        rows = ", ".join(str(idx) for idx in series.index[blank][:3])
        raise LoadError(f"{frame} frame column '{column}' has blank values at rows: {rows}")
    return series.astype(str)


class Frames(Mapping[str, pd.DataFrame]):
    """Light-weight container offering validated access to the two input tables."""

    def __init__(self, frames: Mapping[str, pd.DataFrame] | None = None):
        self._frames: Dict[str, pd.DataFrame] = {}
        if frames:
            for name, df in frames.items():
                key = _normalize_name(name)
                self._frames[key] = _ensure_dataframe(name, df)

    # ------------------------------------------------------------------
    # Mapping interface
    # ------------------------------------------------------------------
    def __getitem__(self, key: str) -> pd.DataFrame:
        normalized = _normalize_name(key)
        if normalized not in self._frames:
            raise KeyError(f"frame {key!r} is not present")
        return self._frames[normalized].copy(deep=True)

    def __iter__(self) -> Iterator[str]:
        return iter(self._frames)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._frames)

    def with_frame(self, name: str, df: pd.DataFrame) -> "Frames":
        """Return a new container with ``name`` replaced by ``df``."""

        updated = dict(self._frames)
        updated[_normalize_name(name)] = _ensure_dataframe(name, df)
        return Frames(updated)

    # ------------------------------------------------------------------
    # Accessors with schema validation
    # ------------------------------------------------------------------
    def targets(self) -> pd.DataFrame:
        """Return EV sale targets with typed key and share columns.

        Extra columns are passed through untouched.
        """

        try:
            df = self[_TARGETS_KEY]
        except KeyError as exc:
            raise LoadError("a 'targets' frame is required") from exc
        df = _validate_columns("targets", df, TARGET_COLUMNS)
        for column in (REGION, SECTOR, SUBSECTOR):
            df[column] = _require_text("targets", column, df[column])
        df[YEAR] = _require_numeric("targets", YEAR, df[YEAR]).astype(int)
        df[TARGET_SHARE] = _coerce_numeric("targets", TARGET_SHARE, df[TARGET_SHARE])
        return df.reset_index(drop=True)

    def assumptions(self) -> pd.DataFrame:
        """Return per-technology travel and load factor assumptions."""

        try:
            df = self[_ASSUMPTIONS_KEY]
        except KeyError as exc:
            raise LoadError("an 'assumptions' frame is required") from exc
        df = _validate_columns("assumptions", df, ASSUMPTION_COLUMNS)
        for column in (SECTOR, SUBSECTOR, TECHNOLOGY):
            df[column] = _require_text("assumptions", column, df[column])
        df[YEAR] = _require_numeric("assumptions", YEAR, df[YEAR]).astype(int)
        for column in (ANNUAL_TRAVEL, LOAD_FACTOR):
            df[column] = _coerce_numeric("assumptions", column, df[column])
        return df.reset_index(drop=True)


def read_table(path: str | Path) -> pd.DataFrame:
    """Read one delimited input table, raising :class:`LoadError` on any failure."""

    csv_path = Path(path)
    if not csv_path.is_file():
        raise LoadError(f"input file does not exist: {csv_path}")
    try:
        df = pd.read_csv(csv_path, dtype={REGION: str, SECTOR: str, SUBSECTOR: str, TECHNOLOGY: str})
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise LoadError(f"unable to read {csv_path}: {exc}") from exc
    LOGGER.info("Read %d rows from %s", len(df), csv_path)
    return df


def load_frames(target_path: str | Path, assumptions_path: str | Path) -> Frames:
    """Read both input tables and return them validated as :class:`Frames`."""

    frames = Frames(
        {
            _TARGETS_KEY: read_table(target_path),
            _ASSUMPTIONS_KEY: read_table(assumptions_path),
        }
    )
    # both tables must validate before any processing starts
    frames.targets()
    frames.assumptions()
    return frames


__all__ = [
    "ANNUAL_TRAVEL",
    "ASSUMPTION_COLUMNS",
    "Frames",
    "LOAD_FACTOR",
    "REGION",
    "SECTOR",
    "SUBSECTOR",
    "TARGET_COLUMNS",
    "TARGET_SHARE",
    "TECHNOLOGY",
    "YEAR",
    "load_frames",
    "read_table",
]
