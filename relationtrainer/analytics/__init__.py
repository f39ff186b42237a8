from .config import AnalyticsConfig
from .metrics import compute_metrics, depth_reaction_frame, mode_usage
from .prepare import load_and_prepare
from .smoothing import ewma_by_session
from .plots import plot_depth_reaction, plot_mode_usage, plot_trend

__all__ = [
    "AnalyticsConfig",
    "compute_metrics",
    "depth_reaction_frame",
    "mode_usage",
    "load_and_prepare",
    "ewma_by_session",
    "plot_depth_reaction",
    "plot_mode_usage",
    "plot_trend",
]
