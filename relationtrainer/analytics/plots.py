from __future__ import annotations

"""Matplotlib plots for score/accuracy trends, per-depth reaction time and mode usage."""

from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402


def plot_trend(
    df: pd.DataFrame,
    *,
    value_col: str = "accuracy",
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> None:
    if df.empty:
        return
    g = df.sort_values("session_idx")
    plt.figure()
    plt.plot(g["session_idx"], g[value_col].astype("float64"), marker="o", linestyle="", label=value_col)
    smooth_col = f"{value_col}_smooth"
    if smooth_col in g.columns:
        plt.plot(g["session_idx"], g[smooth_col].astype("float64"), linewidth=2, label=f"{value_col} (EWMA)")
    plt.xlabel("Session")
    plt.ylabel(value_col)
    plt.title(f"Trend: {value_col}")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()


def plot_depth_reaction(
    depth_rt: pd.DataFrame,
    *,
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> None:
    """Mean reaction time per depth across all sessions."""
    if depth_rt.empty:
        return
    prof = depth_rt.groupby("depth")["rt_s"].mean().sort_index()
    x = np.arange(len(prof))
    plt.figure()
    plt.bar(x, prof.to_numpy())
    plt.xticks(ticks=x, labels=prof.index.astype(str))
    plt.xlabel("Depth")
    plt.ylabel("Mean reaction time (s)")
    plt.title("Reaction time by depth")
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()


def plot_mode_usage(
    usage: pd.Series,
    *,
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> None:
    if usage.empty:
        return
    plt.figure()
    plt.barh(usage.index.astype(str), usage.to_numpy(dtype="int64"))
    plt.xlabel("Sessions")
    plt.title("Mode usage")
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
