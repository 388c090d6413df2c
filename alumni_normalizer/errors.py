"""Error taxonomy surfaced at the HTTP boundary."""


class AlumniCsvError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFileError(AlumniCsvError):
    """No upload part was supplied."""

    status_code = 400


class ProcessingError(AlumniCsvError):
    """Anything that went wrong between parsing and serialization."""

    status_code = 500


class UnreadableUploadError(ProcessingError):
    pass
