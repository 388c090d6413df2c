"""
Deterministic cleaning and output rules.

Everything a request depends on besides its own bytes lives here, so the
pipelines stay reproducible for a fixed input file and calendar year.
"""

from types import MappingProxyType

MIN_BATCH_YEAR = 1964

# Transform path reads the source export header only.
SOURCE_COLUMNS = {
    "last_name": ("LastName",),
    "first_name": ("FirstName",),
    "campus": ("Campus",),
    "batch_year": ("Batch",),
}

# Normalize path also accepts already-transformed headers; first alias wins.
COLUMN_ALIASES = {
    "last_name": ("LastName", "last_name"),
    "first_name": ("FirstName", "first_name"),
    "campus": ("Campus", "campus"),
    "batch_year": ("Batch", "batch_year"),
}

DEFAULT_CAMPUS_ALIASES = MappingProxyType({
    "Pisay Main": "MAIN",
})

OUTPUT_ENCODING = "utf-8"
LINE_TERMINATOR = "\n"

CSV_MEDIA_TYPE = "text/csv"
ZIP_MEDIA_TYPE = "application/zip"

TRANSFORMED_FILENAME = "pisay_transformed.csv"
NORMALIZED_FILENAME = "normalized_output.zip"

ALUMNI_FILENAME = "alumni.csv"
CAMPUS_FILENAME = "campus.csv"
ALUMNI_CAMPUS_FILENAME = "alumni_campus.csv"
