from .schema import DTYPES, HistoryRow
from .store import (
    append_history,
    export_ndjson,
    init_store,
    load_history,
    query_trend,
    records_from_frame,
    store_record,
    validate_records,
)

__all__ = [
    "DTYPES",
    "HistoryRow",
    "append_history",
    "export_ndjson",
    "init_store",
    "load_history",
    "query_trend",
    "records_from_frame",
    "store_record",
    "validate_records",
]
