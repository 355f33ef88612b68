"""Chart adapter - turns the history into XY line-chart input."""

from typing import Any

from vaultsize.core.types import ChartPoint, SizeHistory

CHART_TITLE = "Vault size"
X_LABEL = "Date"
Y_LABEL = "Number of files"

DEFAULT_CHART_OPTIONS: dict[str, Any] = {
    "xTickCount": 10,
    "yTickCount": 10,
    "dotSize": 0.5,
    "showLine": True,
    "timeFormat": "MM-DD-YYYY",
}


def to_chart_points(history: SizeHistory) -> list[ChartPoint]:
    """One (day, size) point per datapoint, in chronological order."""
    return [ChartPoint(x=dp.day, y=dp.size) for dp in history.datapoints]


def build_chart_config(history: SizeHistory, vault_name: str) -> dict[str, Any]:
    """
    Build a complete XY chart description for the history.

    Axis scaling and drawing are left to the renderer.

    Args:
        history: Size history to plot
        vault_name: Dataset label

    Returns:
        Dict with title, axis labels, one dataset and render options
    """
    return {
        "title": CHART_TITLE,
        "xLabel": X_LABEL,
        "yLabel": Y_LABEL,
        "data": {
            "datasets": [
                {
                    "label": vault_name,
                    "data": [p.model_dump() for p in to_chart_points(history)],
                }
            ],
        },
        "options": dict(DEFAULT_CHART_OPTIONS),
    }
