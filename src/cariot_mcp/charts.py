"""Chart.js configuration generation."""

from typing import Any

from .exceptions import ChartDataError
from .models import ChartDataset, ChartType

AXIS_CHART_TYPES = ("bar", "line", "radar")


def _dataset_config(dataset: ChartDataset) -> dict[str, Any]:
    config: dict[str, Any] = {"label": dataset.label or "", "data": dataset.data}
    if dataset.background_color is not None:
        config["backgroundColor"] = dataset.background_color
    if dataset.border_color is not None:
        config["borderColor"] = dataset.border_color
    if dataset.border_width is not None:
        config["borderWidth"] = dataset.border_width
    return config


def _axis(label: str | None) -> dict[str, Any]:
    return {"display": True, "title": {"display": bool(label), "text": label or ""}}


def build_chart_config(
    chart_type: ChartType,
    labels: list[str],
    datasets: list[ChartDataset],
    title: str | None = None,
    x_axis_label: str | None = None,
    y_axis_label: str | None = None,
) -> dict[str, Any]:
    """Build a Chart.js ``ChartConfiguration`` object.

    Axis titles are only emitted for chart types that have cartesian or
    radial scales (bar, line, radar).

    Raises:
        ChartDataError: If labels or datasets are empty, or a dataset's data
            length differs from the number of labels.
    """
    if not labels:
        raise ChartDataError("At least one label is required")
    if not datasets:
        raise ChartDataError("At least one dataset is required")

    mismatched = [
        dataset.label or f"#{index}"
        for index, dataset in enumerate(datasets)
        if len(dataset.data) != len(labels)
    ]
    if mismatched:
        raise ChartDataError(
            "Data length must match labels length for all datasets",
            errors=[f"Dataset {name} does not have {len(labels)} values" for name in mismatched],
            suggestions=["Provide exactly one data value per label in every dataset"],
            context={"label_count": len(labels)},
        )

    options: dict[str, Any] = {
        "responsive": True,
        "plugins": {
            "legend": {"display": True, "position": "top"},
            "title": {"display": bool(title), "text": title or ""},
        },
    }
    if chart_type in AXIS_CHART_TYPES:
        options["scales"] = {"x": _axis(x_axis_label), "y": _axis(y_axis_label)}

    return {
        "type": chart_type,
        "data": {
            "labels": labels,
            "datasets": [_dataset_config(dataset) for dataset in datasets],
        },
        "options": options,
    }
