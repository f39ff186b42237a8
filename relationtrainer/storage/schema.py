from __future__ import annotations

"""Schema constants and Pydantic model for the Parquet-backed session history."""

import json
from datetime import datetime, timezone
from typing import Optional

import pandas as pd
from pydantic import BaseModel, Field, field_validator, model_validator

from ..results.schema import HistoryRecord

# --- Constants ---

DTYPES = {
    "session_id": "string",
    # timezone-aware UTC timestamps
    "timestamp": pd.DatetimeTZDtype(tz="UTC"),
    "score": "UInt32",
    "accuracy": "float32",
    "questions": "UInt16",
    "correct": "UInt16",
    "highest_depth": "UInt8",
    "avg_rt_s": "float32",
    "duration_s": "UInt32",
    # JSON object {depth: mean seconds}
    "depth_rt": "string",
    # comma-joined lists
    "modes": "string",
    "modifiers": "string",
}


def _join(values) -> str:
    return ",".join(str(v) for v in values)


def _split(value: Optional[str]) -> tuple:
    if not value:
        return ()
    return tuple(v for v in str(value).split(",") if v)


# --- Pydantic models ---

class HistoryRow(BaseModel):
    session_id: str
    timestamp: datetime
    score: int = Field(ge=0, le=4294967295)
    accuracy: float = Field(ge=0.0, le=100.0)
    questions: int = Field(ge=0, le=65535)
    correct: int = Field(ge=0, le=65535)
    highest_depth: int = Field(ge=2, le=255)
    avg_rt_s: Optional[float] = Field(default=None, ge=0.0)
    duration_s: int = Field(ge=0, le=4294967295)
    depth_rt: str = "{}"
    modes: str = ""
    modifiers: str = ""

    @field_validator("timestamp")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("depth_rt")
    @classmethod
    def _depth_rt_json(cls, v: str) -> str:
        data = json.loads(v)
        if not isinstance(data, dict):
            raise ValueError("depth_rt must be a JSON object")
        return v

    @model_validator(mode="after")
    def _correct_le_questions(self) -> "HistoryRow":
        if self.correct > self.questions:
            raise ValueError("correct must be <= questions")
        return self

    @classmethod
    def from_record(cls, record: HistoryRecord, session_id: str) -> "HistoryRow":
        return cls(
            session_id=session_id,
            timestamp=record.timestamp,
            score=record.score,
            accuracy=record.accuracy,
            questions=record.questions,
            correct=record.correct,
            highest_depth=record.highest_depth,
            avg_rt_s=record.avg_rt_s,
            duration_s=record.duration_s,
            depth_rt=json.dumps({str(k): v for k, v in sorted(record.depth_rt_s.items())}),
            modes=_join(record.modes),
            modifiers=_join(record.modifiers),
        )

    def to_record(self) -> HistoryRecord:
        depth_rt = {int(k): float(v) for k, v in json.loads(self.depth_rt).items()}
        return HistoryRecord(
            timestamp=self.timestamp,
            score=self.score,
            accuracy=self.accuracy,
            questions=self.questions,
            correct=self.correct,
            highest_depth=self.highest_depth,
            avg_rt_s=self.avg_rt_s,
            duration_s=self.duration_s,
            depth_rt_s=depth_rt,
            modes=_split(self.modes),
            modifiers=_split(self.modifiers),
        )
