"""
Normalization of alumni records into three related tables.

Responsibilities:
- validate rows, accepting both source and already-normalized headers
- assign alumni ids by row position (1-based)
- deduplicate campus names into ids by first sighting
- link every alumni row to its campus
- serialize the tables and bundle them into one ZIP
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from .cleaning import clean_records, resolve_field
from .logging_config import get_logger
from .models import (
    Alumni,
    AlumniCampus,
    Campus,
    NormalizedTables,
    OutputFile,
    PipelineResult,
)
from .parsing import read_records
from .rules import (
    ALUMNI_CAMPUS_FILENAME,
    ALUMNI_FILENAME,
    CAMPUS_FILENAME,
    COLUMN_ALIASES,
    MIN_BATCH_YEAR,
    NORMALIZED_FILENAME,
    ZIP_MEDIA_TYPE,
)
from .serialize import rows_to_csv, zip_files

logger = get_logger(name=__name__)


def normalize_rows(rows: Iterable[Mapping]) -> NormalizedTables:
    """
    Split flat alumni rows into alumni, campus and alumni_campus tables.

    Campus names are matched exactly (case-sensitive, after trimming); an
    empty name is a campus like any other. Ids depend only on row order.
    """
    tables = NormalizedTables()
    campus_ids: Dict[str, int] = {}

    for i, row in enumerate(rows):
        alumni_id = i + 1
        campus_name = resolve_field(row, *COLUMN_ALIASES["campus"])

        campus_id = campus_ids.get(campus_name)
        if campus_id is None:
            campus_id = len(campus_ids) + 1
            campus_ids[campus_name] = campus_id
            tables.campuses.append(Campus(campus_id=campus_id, campus_name=campus_name))

        tables.alumni.append(
            Alumni(
                alumni_id=alumni_id,
                last_name=resolve_field(row, *COLUMN_ALIASES["last_name"]),
                first_name=resolve_field(row, *COLUMN_ALIASES["first_name"]),
                batch_year=resolve_field(row, *COLUMN_ALIASES["batch_year"]),
            )
        )
        tables.alumni_campus.append(AlumniCampus(alumni_id=alumni_id, campus_id=campus_id))

    return tables


def tables_to_csv(tables: NormalizedTables) -> Dict[str, str]:
    """Render each table to CSV text, keyed by its archive entry name."""
    return {
        ALUMNI_FILENAME: rows_to_csv(
            [a.model_dump() for a in tables.alumni],
            fieldnames=list(Alumni.model_fields),
        ),
        CAMPUS_FILENAME: rows_to_csv(
            [c.model_dump() for c in tables.campuses],
            fieldnames=list(Campus.model_fields),
        ),
        ALUMNI_CAMPUS_FILENAME: rows_to_csv(
            [link.model_dump() for link in tables.alumni_campus],
            fieldnames=list(AlumniCampus.model_fields),
        ),
    }


def normalize_csv_bytes(
    raw: bytes,
    *,
    current_year: int,
    min_year: int = MIN_BATCH_YEAR,
) -> PipelineResult:
    """Parse, clean and normalize an upload into a ZIP of three CSV tables."""
    cleaned = clean_records(
        read_records(raw),
        current_year,
        columns=COLUMN_ALIASES,
        min_year=min_year,
    )
    tables = normalize_rows(row.model_dump() for row in cleaned.rows)
    archive = zip_files(tables_to_csv(tables))

    logger.info(
        "normalized {accepted}/{received} rows into {campuses} campuses",
        accepted=cleaned.accepted,
        received=cleaned.received,
        campuses=len(tables.campuses),
    )
    return PipelineResult(
        output=OutputFile(
            filename=NORMALIZED_FILENAME,
            media_type=ZIP_MEDIA_TYPE,
            content=archive,
        ),
        summary=cleaned.summary(),
    )
