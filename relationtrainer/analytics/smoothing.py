from __future__ import annotations

"""Smoothing utilities (EWMA by session)."""

import pandas as pd


def ewma_by_session(
    df: pd.DataFrame,
    value_col: str,
    span: int,
    group_cols: list[str] | None = None,
) -> pd.DataFrame:
    """Apply EWMA smoothing over session order, optionally per group.

    Returns a copy of df with a new column f"{value_col}_smooth" and rows sorted by session_idx.
    """
    g = df.sort_values("session_idx").copy()
    if not group_cols:
        g[f"{value_col}_smooth"] = g[value_col].astype("float32").ewm(span=span).mean().astype("float32")
        return g
    # SeriesGroupBy.apply to avoid DataFrameGroupBy.apply warning
    smooth = g.groupby(group_cols, observed=True)[value_col].apply(lambda s: s.ewm(span=span).mean())
    if isinstance(smooth.index, pd.MultiIndex):
        smooth = smooth.reset_index(level=group_cols, drop=True)
    g[f"{value_col}_smooth"] = smooth.reindex(g.index).astype("float32")
    return g
