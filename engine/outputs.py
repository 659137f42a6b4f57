"""Structured container for the converter outputs and their serialisation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from document.builder import write_document
from engine.errors import SerializationError

DEFAULT_COEF_FILENAME = 'StubTranTechCoef.csv'
DEFAULT_RES_FILENAME = 'StubTranTechRES.csv'
DEFAULT_XML_FILENAME = 'new_RPS_BEV2.xml'


@dataclass(frozen=True)
class ConversionOutputs:
    """Container bundling the two output tables and the scenario document."""

    coefficients: pd.DataFrame
    resources: pd.DataFrame
    document: Any

    def to_files(
        self,
        outdir: str | Path,
        *,
        coef_filename: str = DEFAULT_COEF_FILENAME,
        res_filename: str = DEFAULT_RES_FILENAME,
        xml_filename: str = DEFAULT_XML_FILENAME,
        na_rep: str = 'NA',
    ) -> Mapping[str, Path]:
        """Persist both tables and the document to ``outdir``.

        Returns
        -------
        Mapping[str, Path]
            Mapping of output label to the written path, in write order.
        """

        output_dir = Path(outdir)
        written: dict[str, Path] = {}
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            coef_path = output_dir / coef_filename
            self.coefficients.to_csv(coef_path, index=False, na_rep=na_rep)
            written['coefficients'] = coef_path

            res_path = output_dir / res_filename
            self.resources.to_csv(res_path, index=False, na_rep=na_rep)
            written['resources'] = res_path
        except OSError as exc:
            raise SerializationError(f'Failed to write output tables: {exc}', stage='write') from exc

        written['document'] = write_document(self.document, output_dir / xml_filename)
        return written


__all__ = [
    'ConversionOutputs',
    'DEFAULT_COEF_FILENAME',
    'DEFAULT_RES_FILENAME',
    'DEFAULT_XML_FILENAME',
]
