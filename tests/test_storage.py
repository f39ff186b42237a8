import contextlib
import io
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from relationtrainer.analytics.config import AnalyticsConfig
from relationtrainer.analytics.metrics import compute_metrics, depth_reaction_frame, mode_usage
from relationtrainer.analytics.report import build_report
from relationtrainer.analytics.smoothing import ewma_by_session
from relationtrainer.results.schema import HistoryRecord
from relationtrainer.storage import (
    HistoryRow,
    export_ndjson,
    init_store,
    load_history,
    query_trend,
    records_from_frame,
    store_record,
)
from relationtrainer.storage.store import HISTORY_FILE


def _record(day: int, accuracy: float, score: int, modes=("linear",)) -> HistoryRecord:
    return HistoryRecord(
        timestamp=datetime(2026, 3, day, 12, 0, tzinfo=timezone.utc),
        score=score,
        accuracy=accuracy,
        questions=4,
        correct=int(accuracy / 25),
        highest_depth=3,
        avg_rt_s=1.5,
        duration_s=120,
        depth_rt_s={2: 1.25, 3: 2.0},
        modes=tuple(modes),
        modifiers=("cipher",),
    )


class HistoryStoreTests(unittest.TestCase):
    def test_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            init_store(data_dir)
            self.assertTrue(load_history(data_dir).empty)
            original = _record(2, 75.0, 90)
            store_record(original, data_dir)
            restored = records_from_frame(load_history(data_dir))
            self.assertEqual(restored, [original])

    def test_trend_is_time_ordered(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            store_record(_record(5, 100.0, 120), data_dir)
            store_record(_record(1, 50.0, 40), data_dir)
            store_record(_record(3, 75.0, 80), data_dir)
            trend = query_trend(load_history(data_dir))
            self.assertEqual(list(trend["date"]), ["2026-03-01", "2026-03-03", "2026-03-05"])
            self.assertEqual([float(a) for a in trend["accuracy"]], [50.0, 75.0, 100.0])
            last = query_trend(load_history(data_dir), last_n=1)
            self.assertEqual(int(last["score"].iloc[0]), 120)

    def test_unreadable_file_gives_empty_history(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            (data_dir / HISTORY_FILE).write_bytes(b"not a parquet file")
            with contextlib.redirect_stderr(io.StringIO()):
                self.assertTrue(load_history(data_dir).empty)

    def test_row_validation(self) -> None:
        with self.assertRaises(ValueError):
            HistoryRow.from_record(
                HistoryRecord(
                    timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
                    score=0,
                    accuracy=0.0,
                    questions=1,
                    correct=2,
                    highest_depth=2,
                    avg_rt_s=None,
                    duration_s=0,
                ),
                "s1",
            )

    def test_export_ndjson(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            store_record(_record(2, 75.0, 90), data_dir)
            out = data_dir / "out" / "history.ndjson"
            export_ndjson(load_history(data_dir), out)
            self.assertEqual(len(out.read_text(encoding="utf-8").strip().splitlines()), 1)


class AnalyticsTests(unittest.TestCase):
    def test_metrics_and_usage(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            store_record(_record(1, 50.0, 40, modes=("linear", "spatial2d")), data_dir)
            store_record(_record(2, 100.0, 120), data_dir)
            df = compute_metrics(load_history(data_dir), AnalyticsConfig())
            self.assertTrue(((df["mark"] >= 0) & (df["acc"] <= 1)).all())
            usage = mode_usage(df)
            self.assertEqual(int(usage["linear"]), 2)
            self.assertEqual(int(usage["spatial2d"]), 1)
            long = depth_reaction_frame(df)
            self.assertEqual(len(long), 4)

    def test_grouped_smoothing(self) -> None:
        df = pd.DataFrame(
            {
                "session_idx": [0, 1, 2, 3],
                "mode": ["linear", "spatial2d", "linear", "spatial2d"],
                "accuracy": [0.0, 100.0, 100.0, 100.0],
            }
        )
        out = ewma_by_session(df, value_col="accuracy", span=2, group_cols=["mode"])
        by_idx = dict(zip(out["session_idx"], out["accuracy_smooth"]))
        self.assertAlmostEqual(float(by_idx[1]), 100.0)
        self.assertAlmostEqual(float(by_idx[3]), 100.0)
        self.assertLess(float(by_idx[2]), 100.0)
        self.assertGreater(float(by_idx[2]), 0.0)

    def test_report_writes_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp) / "data"
            out = Path(tmp) / "reports"
            for day in (1, 2, 3):
                store_record(_record(day, 75.0, 60 + day), data_dir)
            self.assertEqual(build_report(data_dir, out), 3)
            self.assertTrue((out / "trend_accuracy.png").exists())
            self.assertTrue((out / "history_snapshot.csv").exists())

    def test_report_on_empty_store(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(build_report(Path(tmp), Path(tmp) / "reports"), 0)


if __name__ == "__main__":
    unittest.main()
