"""
Upload decoding and CSV parsing.

The parser is deliberately lenient: short rows get ``None`` for the missing
columns, long rows keep their extras under the ``None`` key, and blank lines
are skipped. Whether a row is usable is decided later, by the cleaner.
"""

from __future__ import annotations

import csv
import io
from typing import Dict, List, Optional

from charset_normalizer import from_bytes

from .errors import UnreadableUploadError

RawRecord = Dict[Optional[str], Optional[str]]


def decode_upload(raw: bytes) -> str:
    """
    Decode uploaded bytes to text.

    Rules:
    - Valid UTF-8 wins; a leading BOM is dropped.
    - Otherwise use charset-normalizer's best guess.
    - Bytes no encoding explains (binary uploads) are a processing failure.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise UnreadableUploadError("Upload is not readable as text")

    try:
        return raw.decode(match.encoding)
    except (LookupError, UnicodeDecodeError) as exc:
        raise UnreadableUploadError(
            f"Upload could not be decoded as {match.encoding}"
        ) from exc


def parse_records(text: str) -> List[RawRecord]:
    reader = csv.DictReader(io.StringIO(text, newline=""))
    return [dict(row) for row in reader]


def read_records(raw: bytes) -> List[RawRecord]:
    return parse_records(decode_upload(raw))
