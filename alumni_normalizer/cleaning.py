"""
Row validation and cleaning.

A record is accepted when its last name, first name, campus and batch are all
present after trimming, and the batch is a whole year between
``MIN_BATCH_YEAR`` and the current year. Anything else is dropped without
being reported back to the client.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from .logging_config import get_logger
from .models import CleanRow, CleaningResult
from .rules import MIN_BATCH_YEAR, SOURCE_COLUMNS

logger = get_logger(name=__name__)

_BATCH_RE = re.compile(r"[0-9]+")

ColumnAliases = Mapping[str, Sequence[str]]


def resolve_field(record: Mapping, *aliases: str) -> str:
    """Trimmed value of the first alias holding a non-empty value, else ``""``."""
    for alias in aliases:
        value = record.get(alias)
        if value is not None and value != "":
            return value.strip()
    return ""


def parse_batch_year(value: str) -> Optional[int]:
    value = value.strip()
    if not _BATCH_RE.fullmatch(value):
        return None
    # years have at most four significant digits
    digits = value.lstrip("0") or "0"
    if len(digits) > 4:
        return None
    return int(digits)


def campus_alias_map(aliases: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """Freeze an alias table so a request can't mutate shared configuration."""
    return MappingProxyType(dict(aliases or {}))


def clean_record(
    record: Mapping,
    current_year: int,
    *,
    columns: ColumnAliases = SOURCE_COLUMNS,
    campus_aliases: Optional[Mapping[str, str]] = None,
    min_year: int = MIN_BATCH_YEAR,
) -> Optional[CleanRow]:
    """
    Validate and trim a single record.

    Returns ``None`` for rejected records. When ``campus_aliases`` is given the
    trimmed campus name is remapped by exact match; unmapped names pass through.
    """
    values = {name: resolve_field(record, *aliases) for name, aliases in columns.items()}
    if not all(values.values()):
        return None

    batch = parse_batch_year(values["batch_year"])
    if batch is None or not min_year <= batch <= current_year:
        return None

    if campus_aliases:
        values["campus"] = campus_aliases.get(values["campus"], values["campus"])

    return CleanRow(**values)


def clean_records(
    records: Iterable[Mapping],
    current_year: int,
    *,
    columns: ColumnAliases = SOURCE_COLUMNS,
    campus_aliases: Optional[Mapping[str, str]] = None,
    min_year: int = MIN_BATCH_YEAR,
) -> CleaningResult:
    result = CleaningResult()
    for i, record in enumerate(records):
        result.received += 1
        row = clean_record(
            record,
            current_year,
            columns=columns,
            campus_aliases=campus_aliases,
            min_year=min_year,
        )
        if row is None:
            logger.debug("dropped record {index}", index=i + 1)
            continue
        result.rows.append(row)
    return result
