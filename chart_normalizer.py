"""
Chart normalization for visualization payloads found in AI responses.
Infers which chart-data shape a JSON value has and converts it into one
render-ready plotting configuration with the fixed dark theme applied.
"""

import logging
from numbers import Number
from typing import Any, Dict, List, Optional

from error_handler import ChartNormalizationError, ErrorSeverity, fail_safe

logger = logging.getLogger('response_visualizer.chart_normalizer')


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class ChartNormalizer:
    """Turns arbitrary chart-like data into a plotting configuration."""

    # Dark theme defaults
    COLORS = {
        'background': 'transparent',
        'text': '#ccc',
        'label': '#aaa',
        'axis_line': '#555',
        'split_line': '#333',
    }

    # Series palette for charts that name no colors of their own
    CHART_PALETTE = [
        '#49CAE4',
        '#BCDF59',
        '#A093E2',
        '#FFCA58',
        '#FF7272',
        '#AEE8F4',
        '#64D2E8',
        '#C6E472',
    ]

    PREBUILT_KEYS = ("xAxis", "series", "dataset")
    ROTATE_LABELS_OVER = 8

    def normalize(self, raw: Any) -> Dict[str, Any]:
        """
        Convert chart data of any supported shape into a plotting configuration.

        Args:
            raw: Any JSON-like value

        Returns:
            A plotting configuration; a placeholder chart when the shape is unknown
        """
        try:
            return self._infer(raw)
        except Exception as e:
            logger.warning("Error normalizing chart data: %s", e)
            return self._fallback_config(error=True)

    def _infer(self, raw: Any) -> Dict[str, Any]:
        """Ordered shape checks, first match wins."""
        if isinstance(raw, dict) and any(key in raw for key in self.PREBUILT_KEYS):
            return self._from_prebuilt(raw)

        if isinstance(raw, dict) and "labels" in raw and ("datasets" in raw or "series" in raw):
            return self._from_labeled_datasets(raw)

        if self._is_name_value_list(raw):
            return self._from_name_value_records(raw)

        if isinstance(raw, list) and raw and isinstance(raw[0], dict):
            config = self._from_records(raw)
            if config is not None:
                return config

        if self._is_simple_spec(raw):
            return self._from_simple_spec(raw)

        inner = self._unwrap(raw)
        if inner is not None:
            config = self._infer(inner)
            if "title" not in config and isinstance(raw.get("title"), str):
                config["title"] = self._title(raw["title"])
            return config

        logger.debug("Unrecognized chart data shape: %s", type(raw).__name__)
        return self._fallback_config()

    # -- styling -----------------------------------------------------------

    def _axis_style(self) -> Dict[str, Any]:
        return {
            "axisLine": {"lineStyle": {"color": self.COLORS['axis_line']}},
            "axisTick": {"lineStyle": {"color": self.COLORS['axis_line']}},
            "axisLabel": {"color": self.COLORS['label']},
        }

    def _category_axis(self, categories: List[Any]) -> Dict[str, Any]:
        axis = {"type": "category", "data": categories}
        axis.update(self._axis_style())
        return axis

    def _value_axis(self) -> Dict[str, Any]:
        axis = {"type": "value"}
        axis.update(self._axis_style())
        axis["splitLine"] = {"lineStyle": {"color": self.COLORS['split_line']}}
        return axis

    def _base_config(self) -> Dict[str, Any]:
        return {
            "backgroundColor": self.COLORS['background'],
            "textStyle": {"color": self.COLORS['text']},
        }

    def _title(self, text: str) -> Dict[str, Any]:
        return {"text": text, "left": "center", "textStyle": {"color": self.COLORS['text']}}

    def _legend(self, names: List[Any], **extra) -> Dict[str, Any]:
        legend = {"data": names, "textStyle": {"color": self.COLORS['text']}}
        legend.update(extra)
        return legend

    def _style_axis(self, axis: Any) -> Any:
        """Add the default line/tick/label style to an axis without one."""
        if not isinstance(axis, dict):
            return axis
        axis_line = axis.get("axisLine")
        if isinstance(axis_line, dict) and "lineStyle" in axis_line:
            return axis

        styled = dict(axis)
        defaults = self._axis_style()
        styled["axisLine"] = {**(axis_line if isinstance(axis_line, dict) else {}),
                              **defaults["axisLine"]}
        styled.setdefault("axisTick", defaults["axisTick"])
        styled.setdefault("axisLabel", defaults["axisLabel"])
        return styled

    # -- shapes ------------------------------------------------------------

    def _from_prebuilt(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Augment an already-built plotting configuration."""
        config = dict(raw)
        config.setdefault("backgroundColor", self.COLORS['background'])
        config.setdefault("textStyle", {"color": self.COLORS['text']})

        for axis_key in ("xAxis", "yAxis"):
            axis = config.get(axis_key)
            if isinstance(axis, list):
                config[axis_key] = [self._style_axis(item) for item in axis]
            elif isinstance(axis, dict):
                config[axis_key] = self._style_axis(axis)

        if "series" not in config and "dataset" not in config:
            config["series"] = []
        return config

    def _from_labeled_datasets(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Build a chart from {labels, datasets|series} data."""
        datasets = raw.get("datasets") if "datasets" in raw else raw.get("series")
        if not isinstance(datasets, list):
            datasets = []

        series = []
        for idx, dataset in enumerate(datasets):
            if not isinstance(dataset, dict):
                continue
            entry = {
                "name": dataset.get("label", dataset.get("name", f"Series {idx + 1}")),
                "type": dataset.get("type", "bar"),
                "data": dataset.get("data", []),
            }
            color = dataset.get("backgroundColor", dataset.get("color"))
            if isinstance(color, list):
                color = color[0] if color else None
            if color:
                entry["itemStyle"] = {"color": color}
            series.append(entry)

        labels = raw.get("labels")
        config = self._base_config()
        config.update({
            "tooltip": {"trigger": "axis"},
            "xAxis": self._category_axis(list(labels) if isinstance(labels, list) else []),
            "yAxis": self._value_axis(),
            "series": series,
        })
        if len(series) > 1:
            config["legend"] = self._legend([s["name"] for s in series], bottom=0)
        if isinstance(raw.get("title"), str):
            config["title"] = self._title(raw["title"])
        return config

    @staticmethod
    def _is_name_value_list(raw: Any) -> bool:
        return (
            isinstance(raw, list)
            and len(raw) > 0
            and all(
                isinstance(item, dict) and "name" in item and item.get("value") is not None
                for item in raw
            )
        )

    def _from_name_value_records(self, raw: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Build a donut chart with one slice per record."""
        config = self._base_config()
        config.update({
            "tooltip": {"trigger": "item", "formatter": "{b}: {c} ({d}%)"},
            "legend": self._legend([item["name"] for item in raw], orient="vertical", left="left"),
            "series": [{
                "type": "pie",
                "radius": ["50%", "70%"],
                "avoidLabelOverlap": True,
                "label": {"color": self.COLORS['text']},
                "emphasis": {
                    "label": {"show": True, "fontSize": 16, "fontWeight": "bold"},
                    "itemStyle": {
                        "shadowBlur": 10,
                        "shadowOffsetX": 0,
                        "shadowColor": "rgba(0, 0, 0, 0.5)",
                    },
                },
                "data": list(raw),
            }],
        })
        return config

    def _from_records(self, raw: List[Any]) -> Optional[Dict[str, Any]]:
        """Build a bar chart from a list of records; None if no category/metric keys."""
        first = raw[0]
        category_key = next((key for key, value in first.items() if isinstance(value, str)), None)
        metric_keys = [key for key, value in first.items() if _is_number(value)]

        if category_key is None or not metric_keys:
            return None

        records = [item for item in raw if isinstance(item, dict)]
        categories = [item.get(category_key) for item in records]

        x_axis = self._category_axis(categories)
        if len(categories) > self.ROTATE_LABELS_OVER:
            x_axis["axisLabel"] = {**x_axis["axisLabel"], "rotate": 45}

        config = self._base_config()
        config.update({
            "tooltip": {"trigger": "axis"},
            "legend": self._legend(metric_keys, bottom=0),
            "xAxis": x_axis,
            "yAxis": self._value_axis(),
            "series": [
                {
                    "name": key,
                    "type": "bar",
                    "data": [item.get(key) for item in records],
                    "itemStyle": {"color": self.CHART_PALETTE[idx % len(self.CHART_PALETTE)]},
                }
                for idx, key in enumerate(metric_keys)
            ],
        })
        return config

    @staticmethod
    def _is_simple_spec(raw: Any) -> bool:
        return (
            isinstance(raw, dict)
            and "chartType" in raw
            and isinstance(raw.get("data"), list)
            and isinstance(raw.get("xKey"), str)
            and isinstance(raw.get("yKeys"), list)
        )

    def _from_simple_spec(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Build a chart from {chartType, data, xKey, yKeys} generator output."""
        chart_type = raw.get("chartType", "bar")
        records = [item for item in raw["data"] if isinstance(item, dict)]
        x_key = raw["xKey"]
        y_keys = [key for key in raw["yKeys"] if isinstance(key, str)]
        colors = raw.get("colors") if isinstance(raw.get("colors"), list) and raw.get("colors") else self.CHART_PALETTE

        if not y_keys:
            raise ChartNormalizationError("Chart spec has no value keys")

        config = self._base_config()
        config["color"] = list(colors)
        if isinstance(raw.get("title"), str):
            config["title"] = self._title(raw["title"])
            if isinstance(raw.get("subtitle"), str):
                config["title"]["subtext"] = raw["subtitle"]

        if chart_type == "pie":
            slices = [{"name": item.get(x_key), "value": item.get(y_keys[0])} for item in records]
            pie = self._from_name_value_records(slices)["series"][0]
            pie["radius"] = ["40%", "70%"]
            config.update({
                "tooltip": {"trigger": "item", "formatter": "{b}: {c} ({d}%)"},
                "legend": self._legend([s["name"] for s in slices], orient="horizontal", bottom=0),
                "series": [pie],
            })
            return config

        series_type = "line" if chart_type in ("line", "area") else chart_type
        if series_type not in ("bar", "line", "scatter"):
            series_type = "bar"

        series = []
        for key in y_keys:
            entry = {"name": key, "type": series_type, "data": [item.get(key) for item in records]}
            if series_type == "line":
                entry["smooth"] = True
            if chart_type == "area":
                entry["areaStyle"] = {"opacity": 0.3}
            series.append(entry)

        x_axis = self._category_axis([item.get(x_key) for item in records])
        if series_type == "line":
            x_axis["boundaryGap"] = False

        config.update({
            "tooltip": {"trigger": "axis"},
            "legend": self._legend(y_keys, bottom=0),
            "xAxis": x_axis,
            "yAxis": self._value_axis(),
            "series": series,
        })
        return config

    @staticmethod
    def _unwrap(raw: Any) -> Optional[Any]:
        """Return chart data nested under a "chart" or "data" key."""
        if not isinstance(raw, dict):
            return None
        inner = raw.get("chart")
        if isinstance(inner, (dict, list)) and inner:
            return inner
        inner = raw.get("data")
        if isinstance(inner, list) and inner:
            return inner
        return None

    def _fallback_config(self, error: bool = False) -> Dict[str, Any]:
        """Placeholder chart for data that could not be understood."""
        config = self._base_config()
        config.update({
            "title": self._title("Error Processing Chart Data" if error else "Chart Data"),
            "tooltip": {"trigger": "axis"},
            "xAxis": self._category_axis(["No Data"]),
            "yAxis": self._value_axis(),
            "series": [{"name": "No Data", "type": "bar", "data": [0]}],
        })
        return config


_chart_normalizer = ChartNormalizer()


@fail_safe(lambda raw: _chart_normalizer._fallback_config(error=True), ErrorSeverity.CRITICAL)
def normalize_chart_data(raw: Any) -> Dict[str, Any]:
    """
    Convenience function to normalize chart data with the shared normalizer.

    Args:
        raw: Chart data parsed from an AI response

    Returns:
        A plotting configuration dict, never None
    """
    return _chart_normalizer.normalize(raw)
