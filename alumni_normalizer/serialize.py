"""CSV serialization and ZIP packaging."""

from __future__ import annotations

import csv
import hashlib
import io
import zipfile
from typing import Any, Mapping, Optional, Sequence

from .rules import LINE_TERMINATOR, OUTPUT_ENCODING

# Fixed entry timestamp so identical tables always zip to identical bytes.
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def rows_to_csv(
    rows: Sequence[Mapping[str, Any]],
    fieldnames: Optional[Sequence[str]] = None,
) -> str:
    """
    Serialize records to CSV text.

    The header is ``fieldnames`` when given, else the first record's keys in
    order. With no rows and no fieldnames the result is empty.
    """
    if fieldnames is None:
        if not rows:
            return ""
        fieldnames = list(rows[0].keys())

    outp = io.StringIO(newline="")
    writer = csv.DictWriter(outp, fieldnames=fieldnames, lineterminator=LINE_TERMINATOR)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return outp.getvalue()


def zip_files(files: Mapping[str, str]) -> bytes:
    """Pack named text files into a deflated ZIP, in the mapping's order."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, text in files.items():
            info = zipfile.ZipInfo(name, date_time=_ZIP_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            zf.writestr(info, text.encode(OUTPUT_ENCODING))
    return buf.getvalue()
