"""Serialisation of grouped period entries into the scenario XML document."""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable, Mapping

from lxml import etree as ET

from document.grouping import PeriodEntry, RegionGroup
from engine.errors import SerializationError
from policy.transport import DEFAULT_POLICY_YEARS, policy_name

_logger = logging.getLogger(__name__)

DEFAULT_POLICY_TYPE = "RES"
CONSTRAINT_VALUE = "1"
CONSTRAINT_FILLOUT = "1"


def format_number(value: float) -> str:
    """Render ``value`` for an XML text node; integral values drop the ``.0``."""

    number = float(value)
    if math.isfinite(number) and number.is_integer() and abs(number) < 1e15:
        return str(int(number))
    return repr(number)


def _text_child(parent, tag: str, text: str, attrib: Mapping[str, str] | None = None):
    elt = ET.SubElement(parent, tag, attrib=dict(attrib or {}))
    elt.text = text
    return elt


def _add_period(techElt, entry: PeriodEntry) -> None:
    periodElt = ET.SubElement(techElt, "period", attrib={"year": str(entry.year)})

    inputElt = ET.SubElement(periodElt, "minicam-energy-input", attrib={"name": entry.energy_input})
    # unmatched rows omit <coefficient> instead of writing NA text for GCAM to parse
    if entry.coefficient is not None:
        _text_child(inputElt, "coefficient", format_number(entry.coefficient))
    _text_child(inputElt, "market-name", entry.market)

    resource = entry.resource
    if resource is not None:
        outputElt = ET.SubElement(periodElt, "res-secondary-output", attrib={"name": resource.name})
        _text_child(outputElt, "output-ratio", format_number(resource.output_ratio))
        _text_child(outputElt, "pMultiplier", format_number(resource.p_multiplier))


def _add_policies(regionElt, group: RegionGroup, policy_years: Iterable[int], policy_type: str) -> None:
    for year in policy_years:
        for category in group.categories:
            policyElt = ET.SubElement(
                regionElt, "policy-portfolio-standard", attrib={"name": policy_name(year, category)}
            )
            _text_child(policyElt, "market", group.name)
            _text_child(policyElt, "policyType", policy_type)
            _text_child(
                policyElt,
                "constraint",
                CONSTRAINT_VALUE,
                attrib={"fillout": CONSTRAINT_FILLOUT, "year": str(int(year))},
            )


def build_document(
    groups: Mapping[str, RegionGroup],
    *,
    policy_years: Iterable[int] = DEFAULT_POLICY_YEARS,
    policy_type: str = DEFAULT_POLICY_TYPE,
):
    """Return an ``lxml`` ElementTree rooted at ``<scenario><world>`` for ``groups``.

    Each region holds its supplysector hierarchy followed by one
    ``policy-portfolio-standard`` per policy year and transport category.

    Raises
    ------
    SerializationError
        If an element cannot be constructed (e.g. a name holds characters XML forbids).
    """

    years = [int(year) for year in policy_years]
    try:
        scenarioElt = ET.Element("scenario")
        worldElt = ET.SubElement(scenarioElt, "world")
        for group in groups.values():
            regionElt = ET.SubElement(worldElt, "region", attrib={"name": group.name})
            for sector, subsectors in group.sectors.items():
                sectorElt = ET.SubElement(regionElt, "supplysector", attrib={"name": sector})
                for subsector, technologies in subsectors.items():
                    subsectElt = ET.SubElement(sectorElt, "tranSubsector", attrib={"name": subsector})
                    for technology, periods in technologies.items():
                        techElt = ET.SubElement(
                            subsectElt, "stub-technology", attrib={"name": technology}
                        )
                        for entry in periods.values():
                            _add_period(techElt, entry)
            _add_policies(regionElt, group, years, policy_type)
    except (ValueError, TypeError) as exc:
        raise SerializationError(f"Error creating XML document: {exc}") from exc

    _logger.info("Built scenario document for %d regions", len(groups))
    return ET.ElementTree(scenarioElt)


def write_document(tree, path: str | Path) -> Path:
    """Write ``tree`` to ``path`` with an XML declaration, raising :class:`SerializationError`."""

    xml_path = Path(path)
    _logger.info("Writing '%s'", xml_path)
    try:
        tree.write(str(xml_path), xml_declaration=True, encoding="utf-8", pretty_print=True)
    except (OSError, ET.LxmlError) as exc:
        raise SerializationError(f"Error writing XML file {xml_path}: {exc}", stage="write") from exc
    return xml_path


__all__ = ["DEFAULT_POLICY_TYPE", "build_document", "format_number", "write_document"]
