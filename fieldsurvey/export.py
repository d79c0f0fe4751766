"""
Design (export.py)
- Purpose: Serialize the record collection to CSV text and package it as a downloadable
           artifact (bytes + suggested filename + MIME type).
- Inputs: Record collection; export date; quoting mode.
- Outputs: ExportArtifact; write_export() returns the written path.
- Side effects: write_export() writes one file; nothing else is persisted or sent.

Quoting modes:
- "legacy" (default): Remarks is always wrapped in double quotes, no other field is quoted
  or escaped. A comma inside any other text field shifts that row's columns, and a double
  quote inside Remarks is written as-is. Kept for compatibility with earlier exports.
- "rfc4180": the csv module quotes fields holding a comma, quote or line break and doubles
  inner quotes; Remarks stays always-quoted. Opt-in: it changes the bytes of the output.
"""

import csv
import io
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Sequence

from .config import CSV_HEADERS, CSV_MIME_TYPE, CSV_TIMESTAMP_FORMAT, EXPORT_PREFIX
from .logs import get_logger
from .models import BeneficiaryRecord
from .utils import format_coordinate, format_timestamp

log = get_logger(__name__)

QUOTING_MODES = ("legacy", "rfc4180")
REMARKS_INDEX = CSV_HEADERS.index("Remarks")


@dataclass(frozen=True)
class ExportArtifact:
    data: bytes
    filename: str
    mime_type: str = CSV_MIME_TYPE


def record_values(record: BeneficiaryRecord) -> List[str]:
    """Column values for one record, in CSV_HEADERS order, unquoted."""
    return [
        record.serial_number,
        record.block_name,
        record.gp_name,
        record.village,
        record.beneficiary_id,
        record.beneficiary_name,
        record.status.value,
        record.remarks or "",
        format_coordinate(record.latitude),
        format_coordinate(record.longitude),
        record.superior_name,
        record.superior_designation,
        record.superior_id_srh,
        format_timestamp(record.timestamp, CSV_TIMESTAMP_FORMAT),
    ]


def _legacy_row(values: List[str]) -> str:
    cells = list(values)
    cells[REMARKS_INDEX] = f'"{cells[REMARKS_INDEX]}"'
    return ",".join(cells)


def _csv_cell(value: str, quoting: int) -> str:
    """One cell written by the csv module (quotes and doubles inner quotes as needed)."""
    if value == "" and quoting == csv.QUOTE_MINIMAL:
        # csv writes a lone empty field as '""'; an empty cell stays bare in a row
        return ""
    buf = io.StringIO()
    csv.writer(buf, quoting=quoting, lineterminator="\r\n").writerow([value])
    return buf.getvalue()[: -len("\r\n")]


def _rfc4180_row(values: List[str]) -> str:
    return ",".join(
        _csv_cell(v, csv.QUOTE_ALL if i == REMARKS_INDEX else csv.QUOTE_MINIMAL)
        for i, v in enumerate(values)
    )


def build_csv(records: Sequence[BeneficiaryRecord], quoting: str = "legacy") -> str:
    """
    Purpose: Header line plus one line per record, joined with '\\n' (no trailing newline).
    Inputs: records in collection order; quoting ('legacy' or 'rfc4180').
    Raises: ValueError for an unknown quoting mode.
    """
    if quoting not in QUOTING_MODES:
        raise ValueError(f"Unknown quoting mode {quoting!r}; expected one of {QUOTING_MODES}")
    make_row = _legacy_row if quoting == "legacy" else _rfc4180_row
    lines = [",".join(CSV_HEADERS)]
    lines.extend(make_row(record_values(r)) for r in records)
    return "\n".join(lines)


def export_filename(today: date) -> str:
    """beneficiary_data_YYYY-MM-DD.csv, dated by the export day."""
    return f"{EXPORT_PREFIX}{today.isoformat()}.csv"


def export_csv(
    records: Sequence[BeneficiaryRecord],
    today: date | None = None,
    quoting: str = "legacy",
) -> ExportArtifact:
    """Build the downloadable CSV artifact for the whole collection."""
    today = today or date.today()
    text = build_csv(records, quoting=quoting)
    return ExportArtifact(data=text.encode("utf-8"), filename=export_filename(today))


def write_export(artifact: ExportArtifact, target: Path) -> Path:
    """
    Write the artifact. target may be a directory (suggested filename is used) or a file path.
    Raises OSError; the UI reports it.
    """
    path = target / artifact.filename if target.is_dir() else target
    path.write_bytes(artifact.data)
    log.info("Exported %d bytes to %s", len(artifact.data), path)
    return path
