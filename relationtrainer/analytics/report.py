from __future__ import annotations

"""Report builder for the session history.

Loads the Parquet history, computes metrics, smooths trends and writes
basic plots plus a CSV snapshot into an output directory.
"""

from pathlib import Path

from .config import AnalyticsConfig
from .metrics import depth_reaction_frame, mode_usage
from .plots import plot_depth_reaction, plot_mode_usage, plot_trend
from .prepare import load_and_prepare
from .smoothing import ewma_by_session

SNAPSHOT_COLUMNS = [
    "session_id",
    "timestamp",
    "score",
    "accuracy",
    "questions",
    "correct",
    "highest_depth",
    "avg_rt_s",
    "duration_s",
    "modes",
    "modifiers",
    "score_per_q",
    "rt_factor",
    "mark",
]


def build_report(data_dir: Path, outdir: Path, cfg: AnalyticsConfig | None = None) -> int:
    """Write report files; returns the number of sessions covered."""
    cfg = cfg or AnalyticsConfig()
    df = load_and_prepare(Path(data_dir), cfg)
    if df.empty:
        return 0

    for col in ["accuracy", "score", "mark"]:
        df = ewma_by_session(df, value_col=col, span=cfg.smoothing_span)

    outdir = Path(outdir)
    outdir.mkdir(exist_ok=True, parents=True)
    plot_trend(df, value_col="accuracy", save_path=outdir / "trend_accuracy.png")
    plot_trend(df, value_col="score", save_path=outdir / "trend_score.png")
    plot_trend(df, value_col="mark", save_path=outdir / "trend_mark.png")
    plot_depth_reaction(depth_reaction_frame(df), save_path=outdir / "depth_reaction.png")
    plot_mode_usage(mode_usage(df), save_path=outdir / "mode_usage.png")

    df[[c for c in SNAPSHOT_COLUMNS if c in df.columns]].to_csv(outdir / "history_snapshot.csv", index=False)
    return len(df)


def main() -> int:
    count = build_report(Path("storage/data"), Path("reports"))
    if count == 0:
        print("No session history found.")
        return 2
    print(f"Reports for {count} sessions saved to: {Path('reports').resolve()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
