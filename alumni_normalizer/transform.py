"""Flat transform: cleaned rows out as ``pisay_transformed.csv``."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .cleaning import clean_records
from .logging_config import get_logger
from .models import CleanRow, OutputFile, PipelineResult
from .parsing import read_records
from .rules import (
    CSV_MEDIA_TYPE,
    MIN_BATCH_YEAR,
    OUTPUT_ENCODING,
    SOURCE_COLUMNS,
    TRANSFORMED_FILENAME,
)
from .serialize import rows_to_csv

logger = get_logger(name=__name__)


def transform_rows(rows: Iterable[CleanRow]) -> List[Dict[str, Any]]:
    return [
        {
            "last_name": row.last_name,
            "first_name": row.first_name,
            "campus": row.campus,
            "batch_year": row.batch_year,
        }
        for row in rows
    ]


def transform_csv_bytes(
    raw: bytes,
    *,
    current_year: int,
    campus_aliases: Optional[Mapping[str, str]] = None,
    min_year: int = MIN_BATCH_YEAR,
) -> PipelineResult:
    """Parse, clean and flatten an upload into a single CSV file."""
    cleaned = clean_records(
        read_records(raw),
        current_year,
        columns=SOURCE_COLUMNS,
        campus_aliases=campus_aliases,
        min_year=min_year,
    )
    text = rows_to_csv(transform_rows(cleaned.rows))

    logger.info(
        "transformed {accepted}/{received} rows ({dropped} dropped)",
        accepted=cleaned.accepted,
        received=cleaned.received,
        dropped=cleaned.dropped,
    )
    return PipelineResult(
        output=OutputFile(
            filename=TRANSFORMED_FILENAME,
            media_type=CSV_MEDIA_TYPE,
            content=text.encode(OUTPUT_ENCODING),
        ),
        summary=cleaned.summary(),
    )
