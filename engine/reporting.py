"""Validation summary printed after a successful conversion."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from engine.keyspace import distinct_values
from engine.outputs import ConversionOutputs
from engine.tables import MARKET_NAME
from inputs.frames_api import REGION, SECTOR, TECHNOLOGY, YEAR, Frames
from policy.transport import categories_present

LOGGER = logging.getLogger(__name__)


def build_validation_summary(
    frames: Frames,
    outputs: ConversionOutputs,
    written: Mapping[str, Path] | None = None,
) -> dict[str, Any]:
    """Return counts and distinct values for manual review of a conversion.

    Parameters
    ----------
    frames:
        Input frames the conversion ran on.
    outputs:
        Tables and document produced by :func:`engine.pipeline.run_conversion`.
    written:
        Paths returned by :meth:`ConversionOutputs.to_files`, if already written.
    """

    targets = frames.targets()
    assumptions = frames.assumptions()
    coef_table = outputs.coefficients

    market_pairs = coef_table[[REGION, MARKET_NAME]].drop_duplicates()
    categories = {
        str(region): [category.label for category in categories_present(group[SECTOR].unique())]
        for region, group in coef_table.groupby(REGION, sort=False)
    }

    files = dict(written or {})
    output_dirs = {str(path.parent) for path in files.values()}

    return {
        "output_dir": output_dirs.pop() if len(output_dirs) == 1 else None,
        "files": [path.name for path in files.values()],
        "assumption_technologies": [str(value) for value in distinct_values(assumptions[TECHNOLOGY])],
        "table_technologies": [str(value) for value in distinct_values(coef_table[TECHNOLOGY])],
        "market_names": [
            (str(region), str(market))
            for region, market in zip(market_pairs[REGION], market_pairs[MARKET_NAME])
        ],
        "transport_categories": categories,
        "region_count": len(distinct_values(targets[REGION])),
        "year_count": len(distinct_values(targets[YEAR])),
        "technology_count": len(distinct_values(assumptions[TECHNOLOGY])),
        "coefficient_rows": len(coef_table),
        "resource_rows": len(outputs.resources),
    }


def format_validation_summary(summary: Mapping[str, Any]) -> list[str]:
    """Render ``summary`` as human-readable lines."""

    lines: list[str] = []
    if summary.get("output_dir"):
        lines.append(f"All files have been generated in directory: {summary['output_dir']}")
    if summary.get("files"):
        lines.append("Generated files include:")
        lines.extend(f"{idx}. {name}" for idx, name in enumerate(summary["files"], start=1))

    lines.append("")
    lines.append("Data Validation:")
    lines.append("Unique stub.technology categories in Assumptions file:")
    lines.append("  " + ", ".join(summary["assumption_technologies"]))
    lines.append("Unique stub.technology categories in generated StubTranTechCoef.csv:")
    lines.append("  " + ", ".join(summary["table_technologies"]))
    lines.append("Validation of market_name settings:")
    lines.extend(f"  {region} -> {market}" for region, market in summary["market_names"])
    lines.append("Transport categories by region:")
    lines.extend(
        f"  {region}: {', '.join(labels) if labels else '(none)'}"
        for region, labels in summary["transport_categories"].items()
    )

    lines.append("")
    lines.append("Additional Validation Checks:")
    lines.append(f"Number of regions: {summary['region_count']}")
    lines.append(f"Number of years: {summary['year_count']}")
    lines.append(f"Number of technology types: {summary['technology_count']}")
    lines.append(f"Number of records in StubTranTechCoef.csv: {summary['coefficient_rows']}")
    lines.append(f"Number of records in StubTranTechRES.csv: {summary['resource_rows']}")

    for line in lines:
        if line:
            LOGGER.info(line)
    return lines


__all__ = ["build_validation_summary", "format_validation_summary"]
