from __future__ import annotations

"""Analytics configuration (hyperparameters) using Pydantic."""

from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Hyperparameters for analytics computations and smoothing.

    - alpha: RT penalty scale (>0)
    - T_ref_s: reference reaction time in seconds (>0)
    - depth_bonus: extra mark weight per depth level above 2 (>=0)
    - smoothing_span: EWMA span in sessions (>1)
    """

    alpha: float = Field(0.6, gt=0)
    T_ref_s: float = Field(5.0, gt=0)
    depth_bonus: float = Field(0.1, ge=0)
    smoothing_span: int = Field(5, gt=1)
