from __future__ import annotations

"""Parquet-backed store for session history using pandas + pyarrow.

Unit of data: one row per finished session. The store is append-only; past
rows are never rewritten except to drop exact duplicates.
"""

import sys
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

import pandas as pd
from pydantic import ValidationError

from ..results.schema import HistoryRecord
from .schema import DTYPES, HistoryRow

HISTORY_FILE = "history.parquet"


def _warn(msg: str) -> None:
    print(f"WARNING: {msg}", file=sys.stderr)


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def init_store(data_dir: Path) -> None:
    """Ensure data directory and an empty Parquet file with the right schema exist."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / HISTORY_FILE
    if not path.exists():
        _empty_df().to_parquet(path, engine="pyarrow", compression="zstd", index=False)


def validate_records(records: List[HistoryRow]) -> pd.DataFrame:
    """Validate HistoryRow objects (or dicts) and return a DataFrame with proper dtypes."""
    if not isinstance(records, list):
        raise TypeError("records must be a list[HistoryRow]")
    rows = [r if isinstance(r, HistoryRow) else HistoryRow.model_validate(r) for r in records]
    df = pd.DataFrame([r.model_dump() for r in rows])
    if df.empty:
        return _empty_df()
    return _fix_dtypes(df)


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        if col not in df.columns:
            df[col] = pd.Series(pd.NA, index=df.index)
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def append_history(df_new: pd.DataFrame, data_dir: Path) -> None:
    """Append rows to the history table, dropping exact duplicates."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    f = data_dir / HISTORY_FILE
    df_old = load_history(data_dir)
    combined = pd.concat([df_old, _fix_dtypes(df_new.copy())], ignore_index=True)
    combined = _fix_dtypes(combined).drop_duplicates()
    combined.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def store_record(record: HistoryRecord, data_dir: Path, session_id: Optional[str] = None) -> str:
    """Validate and append one finished session; returns its session id."""
    sid = session_id or str(uuid4())
    append_history(validate_records([HistoryRow.from_record(record, sid)]), data_dir)
    return sid


def load_history(data_dir: Path) -> pd.DataFrame:
    """Load the full history; a missing or unreadable file yields an empty frame."""
    f = Path(data_dir) / HISTORY_FILE
    if not f.exists():
        return _empty_df()
    try:
        df = pd.read_parquet(f, engine="pyarrow")
        return _fix_dtypes(df)
    except (OSError, ValueError, TypeError) as exc:
        _warn(f"History file {f} is unreadable ({exc}); starting with an empty history.")
        return _empty_df()


def records_from_frame(df: pd.DataFrame) -> List[HistoryRecord]:
    """Rows back to HistoryRecords; rows failing validation are skipped."""
    out: List[HistoryRecord] = []
    for row in df.to_dict(orient="records"):
        clean = {k: (None if pd.isna(v) else v) for k, v in row.items()}
        try:
            out.append(HistoryRow.model_validate(clean).to_record())
        except ValidationError as exc:
            _warn(f"Skipping malformed history row {clean.get('session_id')!r} ({exc.error_count()} errors)")
    return out


def query_trend(df: pd.DataFrame, *, last_n: Optional[int] = None) -> pd.DataFrame:
    """Time-ordered (date, accuracy, score) series, optionally the most recent N sessions."""
    g = df.sort_values("timestamp", kind="stable")
    if last_n is not None:
        if last_n < 1:
            raise ValueError("last_n must be positive")
        g = g.tail(last_n)
    out = pd.DataFrame(
        {
            "session_id": g["session_id"].astype("string"),
            "date": g["timestamp"].dt.strftime("%Y-%m-%d"),
            "timestamp": g["timestamp"],
            "accuracy": g["accuracy"].astype("float32"),
            "score": g["score"].astype("UInt32"),
        }
    )
    return out.reset_index(drop=True)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso")
