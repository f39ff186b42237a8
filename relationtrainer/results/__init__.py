from .schema import HistoryRecord, TrialLogEntry

__all__ = ["HistoryRecord", "TrialLogEntry"]
