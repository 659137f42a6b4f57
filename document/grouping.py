"""Grouping pass turning the coefficient table into an ordered nested mapping.

The mapping mirrors the document hierarchy
``region -> supplysector -> tranSubsector -> stub-technology -> year`` and keeps
first-occurrence order at every level, so a table sorted by those keys yields
a sorted document. Rendering lives in :mod:`document.builder`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

import pandas as pd

from engine.coefficients import COEFFICIENT, ENERGY_INPUT, OUTPUT_RATIO, P_MULTIPLIER, RES_OUTPUT
from inputs.frames_api import REGION, SECTOR, SUBSECTOR, TECHNOLOGY, YEAR
from policy.transport import TransportCategory, categories_present

LOGGER = logging.getLogger(__name__)

ResourceKey = Tuple[str, str, str, int]


@dataclass(frozen=True)
class ResourceOutput:
    """Values of one ``res-secondary-output`` node."""

    name: str
    output_ratio: float
    p_multiplier: float


@dataclass(frozen=True)
class PeriodEntry:
    """Values of one ``period`` node."""

    year: int
    energy_input: str
    coefficient: float | None
    market: str
    resource: ResourceOutput | None = None


TechnologyPeriods = Dict[int, PeriodEntry]
SubsectorTechnologies = Dict[str, TechnologyPeriods]
SectorSubsectors = Dict[str, SubsectorTechnologies]


@dataclass
class RegionGroup:
    """All period entries of one region plus its transport categories."""

    name: str
    sectors: Dict[str, SectorSubsectors] = field(default_factory=dict)
    categories: list[TransportCategory] = field(default_factory=list)

    def periods(self):
        """Yield ``(sector, subsector, technology, entry)`` in document order."""

        for sector, subsectors in self.sectors.items():
            for subsector, technologies in subsectors.items():
                for technology, periods in technologies.items():
                    for entry in periods.values():
                        yield sector, subsector, technology, entry


def _optional_float(value: object) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)


def index_resources(resources: pd.DataFrame) -> Dict[ResourceKey, ResourceOutput]:
    """Index resource rows by (region, supplysector, tranSubsector, year), first row wins."""

    index: Dict[ResourceKey, ResourceOutput] = {}
    if resources is None or resources.empty:
        return index
    columns = zip(
        resources[REGION],
        resources[SECTOR],
        resources[SUBSECTOR],
        resources[YEAR],
        resources[RES_OUTPUT],
        resources[OUTPUT_RATIO],
        resources[P_MULTIPLIER],
    )
    for region, sector, subsector, year, name, ratio, multiplier in columns:
        key = (str(region), str(sector), str(subsector), int(year))
        if key in index:
            continue
        index[key] = ResourceOutput(
            name=str(name), output_ratio=float(ratio), p_multiplier=float(multiplier)
        )
    return index


def group_periods(
    coefficients: pd.DataFrame,
    resources: pd.DataFrame | None = None,
    *,
    bev_technology: str = "BEV",
) -> Dict[str, RegionGroup]:
    """Group ``coefficients`` into :class:`RegionGroup` objects keyed by region.

    BEV periods pick up the matching resource row when one exists; a BEV period
    without one simply has no resource output.
    """

    resource_index = index_resources(resources)
    groups: Dict[str, RegionGroup] = {}
    duplicates = 0

    columns = zip(
        coefficients[REGION],
        coefficients[SECTOR],
        coefficients[SUBSECTOR],
        coefficients[TECHNOLOGY],
        coefficients[YEAR],
        coefficients[ENERGY_INPUT],
        coefficients[COEFFICIENT],
    )
    for region, sector, subsector, technology, year, energy_input, coefficient in columns:
        region, sector, subsector, technology = (
            str(region),
            str(sector),
            str(subsector),
            str(technology),
        )
        year = int(year)

        group = groups.get(region)
        if group is None:
            group = groups[region] = RegionGroup(name=region)
        periods = (
            group.sectors.setdefault(sector, {})
            .setdefault(subsector, {})
            .setdefault(technology, {})
        )
        if year in periods:
            duplicates += 1
            continue

        resource = None
        if technology == bev_technology:
            resource = resource_index.get((region, sector, subsector, year))
        periods[year] = PeriodEntry(
            year=year,
            energy_input=str(energy_input),
            coefficient=_optional_float(coefficient),
            market=region,
            resource=resource,
        )

    for group in groups.values():
        group.categories = categories_present(group.sectors)

    if duplicates:
        LOGGER.warning("Ignored %d duplicate period rows; the first occurrence was kept", duplicates)
    LOGGER.debug("Grouped coefficient table into %d regions", len(groups))
    return groups


__all__ = [
    "PeriodEntry",
    "RegionGroup",
    "ResourceOutput",
    "group_periods",
    "index_resources",
]
