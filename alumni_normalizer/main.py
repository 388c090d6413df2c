from datetime import date
from typing import Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .cleaning import campus_alias_map
from .errors import AlumniCsvError, MissingFileError, ProcessingError
from .logging_config import configure_logging, get_logger
from .middleware import RequestLoggingMiddleware
from .models import ErrorResponse, HealthResponse, PipelineResult
from .normalize import normalize_csv_bytes
from .serialize import sha256_hex
from .settings import Settings, get_settings
from .transform import transform_csv_bytes

configure_logging(get_settings().log_level)
logger = get_logger(name=__name__)

app = FastAPI(
    title="alumni-csv-normalizer",
    description="Cleans alumni CSV exports and splits them into normalized tables",
    version="0.1.0",
)
app.add_middleware(RequestLoggingMiddleware)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "No file uploaded"},
    500: {"model": ErrorResponse, "description": "Processing failed"},
}


@app.exception_handler(AlumniCsvError)
async def alumni_csv_error_handler(request: Request, exc: AlumniCsvError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """The only request input is the upload, so a malformed form means no usable file."""
    logger.warning("rejected {path}: {errors}", path=request.url.path, errors=exc.errors())
    return JSONResponse(
        status_code=MissingFileError.status_code,
        content=ErrorResponse(error="No file uploaded").model_dump(),
    )


def get_current_year() -> int:
    return date.today().year


def _file_response(result: PipelineResult) -> Response:
    output = result.output
    summary = result.summary
    return Response(
        content=output.content,
        headers={
            "Content-Type": output.media_type,
            "Content-Disposition": f'attachment; filename="{output.filename}"',
            "X-Content-SHA256": sha256_hex(output.content),
            "X-Rows-Received": str(summary.rows_received),
            "X-Rows-Accepted": str(summary.rows_accepted),
            "X-Rows-Dropped": str(summary.rows_dropped),
        },
    )


def _require_file(file: Optional[UploadFile]) -> UploadFile:
    if file is None or not file.filename:
        raise MissingFileError("No file uploaded")
    return file


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/transform", response_class=Response, responses=_ERROR_RESPONSES)
async def transform_csv(
    file: Optional[UploadFile] = File(None),
    current_year: int = Depends(get_current_year),
    settings: Settings = Depends(get_settings),
):
    upload = _require_file(file)
    aliases = campus_alias_map(settings.campus_aliases) if settings.apply_campus_aliases else None

    try:
        raw = await upload.read()
        result = transform_csv_bytes(
            raw,
            current_year=current_year,
            campus_aliases=aliases,
            min_year=settings.min_batch_year,
        )
    except Exception as exc:
        logger.exception("transform failed for {filename}", filename=upload.filename)
        raise ProcessingError("Transformation failed") from exc

    return _file_response(result)


@app.post("/normalize", response_class=Response, responses=_ERROR_RESPONSES)
async def normalize_csv(
    file: Optional[UploadFile] = File(None),
    current_year: int = Depends(get_current_year),
    settings: Settings = Depends(get_settings),
):
    upload = _require_file(file)

    try:
        raw = await upload.read()
        result = normalize_csv_bytes(
            raw,
            current_year=current_year,
            min_year=settings.min_batch_year,
        )
    except Exception as exc:
        logger.exception("normalize failed for {filename}", filename=upload.filename)
        raise ProcessingError("Failed to normalize file") from exc

    return _file_response(result)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
