from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class CleanRow(BaseModel):
    last_name: str
    first_name: str
    campus: str
    batch_year: str


class Alumni(BaseModel):
    alumni_id: int = Field(ge=1)
    last_name: str
    first_name: str
    batch_year: str


class Campus(BaseModel):
    campus_id: int = Field(ge=1)
    campus_name: str


class AlumniCampus(BaseModel):
    alumni_id: int = Field(ge=1)
    campus_id: int = Field(ge=1)


class NormalizedTables(BaseModel):
    alumni: List[Alumni] = Field(default_factory=list)
    campuses: List[Campus] = Field(default_factory=list)
    alumni_campus: List[AlumniCampus] = Field(default_factory=list)


class OutputFile(BaseModel):
    filename: str
    media_type: str
    content: bytes


class PipelineSummary(BaseModel):
    rows_received: int = 0
    rows_accepted: int = 0
    rows_dropped: int = 0


class CleaningResult(BaseModel):
    rows: List[CleanRow] = Field(default_factory=list)
    received: int = 0

    @property
    def accepted(self) -> int:
        return len(self.rows)

    @property
    def dropped(self) -> int:
        return self.received - self.accepted

    def summary(self) -> PipelineSummary:
        return PipelineSummary(
            rows_received=self.received,
            rows_accepted=self.accepted,
            rows_dropped=self.dropped,
        )


class PipelineResult(BaseModel):
    output: OutputFile
    summary: PipelineSummary


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    ok: bool = True
