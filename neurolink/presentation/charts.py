"""
Trend chart export

Draws the dashboard's "Biometric Trends" line chart from the session history.
"""

import logging
import os
from typing import Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from ..core.data_types import HistoryPoint
from ..processing.history import series_of

# Series name -> (label, colour) as on the dashboard
TREND_LINES = {
    "focus": ("Focus", "#3B82F6"),
    "stress": ("Stress", "#EF4444"),
    "heart_rate": ("Heart Rate", "#EC4899"),
}


def save_trend_chart(history: Sequence[HistoryPoint], out_path: str,
                     title: str = "Biometric Trends") -> str:
    """
    Create and save the trend line chart

    Args:
        history: Ordered history points, oldest first
        out_path: Path of the image to write
        title: Chart title

    Returns:
        str: The path written
    """
    if not history:
        raise ValueError("Cannot draw a trend chart from an empty history")

    series = series_of(history)
    x = np.arange(len(series["timestamp"]))

    fig, ax = plt.subplots(figsize=(10, 4))
    for name, (label, color) in TREND_LINES.items():
        ax.plot(x, series[name], color=color, linewidth=2, label=label)

    ax.set_xticks(x)
    ax.set_xticklabels(series["timestamp"], rotation=45, ha="right", fontsize=8)
    ax.grid(True, linestyle="--", alpha=0.5)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(loc="upper left")

    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig.tight_layout()
    fig.savefig(out_path, dpi=100)
    plt.close(fig)

    logging.info(f"Trend chart saved to: {out_path}")
    return out_path
