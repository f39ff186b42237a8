from __future__ import annotations

"""Metric computations over the session history table."""

import json

import numpy as np
import pandas as pd

from .config import AnalyticsConfig


def compute_metrics(df: pd.DataFrame, cfg: AnalyticsConfig) -> pd.DataFrame:
    """Compute per-session factors and a composite mark.

    Returns a copy with added columns:
    - acc (0..1), score_per_q, rt_factor, depth_factor, mark
    """
    out = df.copy()
    out["acc"] = (out["accuracy"].astype("float32") / 100.0).astype("float32")
    q = out["questions"].astype("float32")
    out["score_per_q"] = (out["score"].astype("float32") / q.where(q > 0, other=1.0)).astype("float32")

    # Sessions without answers have no reaction time; treat them as neutral
    rt = out["avg_rt_s"].astype("float32").fillna(0.0)
    out["rt_factor"] = np.exp(-float(cfg.alpha) * (rt / float(cfg.T_ref_s))).astype("float32")

    depth = out["highest_depth"].astype("float32")
    out["depth_factor"] = (1.0 + float(cfg.depth_bonus) * (depth - 2.0).clip(lower=0)).astype("float32")

    out["mark"] = (out["acc"] * out["rt_factor"] * out["depth_factor"]).clip(0, None).astype("float32")
    return out


def depth_reaction_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Long frame (session_id, depth, rt_s) from the per-depth JSON column."""
    rows = []
    for sid, raw in zip(df["session_id"], df["depth_rt"]):
        if raw is None or raw is pd.NA:
            continue
        for depth, rt in json.loads(str(raw)).items():
            rows.append({"session_id": sid, "depth": int(depth), "rt_s": float(rt)})
    out = pd.DataFrame(rows, columns=["session_id", "depth", "rt_s"])
    return out.astype({"depth": "int16", "rt_s": "float32"})


def mode_usage(df: pd.DataFrame) -> pd.Series:
    """How many sessions used each mode, most frequent first."""
    modes = df["modes"].astype("string").fillna("").str.split(",").explode()
    modes = modes[modes != ""]
    return modes.value_counts().rename("sessions")
