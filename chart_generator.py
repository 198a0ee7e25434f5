"""
Chart generation from markdown tables found in AI responses.
Analyzes table data and produces simple chart specs of the form
{type: "chart", chartType, data, xKey, yKeys} that the chart normalizer understands.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from chart_data_validator import ChartDataValidator
from content_extractor import parse_markdown_table

logger = logging.getLogger('response_visualizer.chart_generator')

DATE_PATTERN = re.compile(r"^\d{4}[-/]\d{1,2}[-/]\d{1,2}$|^\d{1,2}[-/]\d{1,2}[-/]\d{2,4}$")

PERCENTAGE_PATTERN = re.compile(r"\d+%|\d+\s+percent", re.IGNORECASE)
COMPARISON_PATTERN = re.compile(
    r"more than|less than|higher|lower|increase|decrease|compared to", re.IGNORECASE
)
TIME_PATTERN = re.compile(
    r"(?:in|by|since|from|during)\s+\d{4}|\d{1,2}/\d{1,2}/\d{2,4}|january|february|march|april"
    r"|may|june|july|august|september|october|november|december|q[1-4]",
    re.IGNORECASE,
)
TREND_PATTERN = re.compile(
    r"trend|growth|decline|rise|fall|grew|rising|falling|upward|downward", re.IGNORECASE
)

CHART_COLORS = [
    '#8884d8', '#82ca9d', '#ffc658', '#ff8042', '#a4de6c',
    '#d0ed57', '#83a6ed', '#8dd1e1', '#a4506c', '#6a5ec9',
]

DATA_TIME_SERIES = "time-series"
DATA_NUMERICAL = "numerical"
DATA_CATEGORICAL = "categorical"


@dataclass
class TableChartData:
    """A markdown table loaded into a DataFrame with its metric columns coerced.

    numeric_columns holds the columns where every cell is a number; metric_columns
    holds the value columns (after the first) where at least one cell is.
    """
    headers: List[str]
    frame: pd.DataFrame
    data_type: str = DATA_CATEGORICAL
    numeric_columns: List[str] = field(default_factory=list)
    metric_columns: List[str] = field(default_factory=list)
    has_percentages: bool = False

    @property
    def row_count(self) -> int:
        return len(self.frame.index)


def _unique_headers(headers: List[str]) -> List[str]:
    """Suffix repeated header names so every DataFrame column is distinct."""
    seen = {}
    unique = []
    for idx, header in enumerate(headers):
        name = header or f"Column {idx + 1}"
        if name in seen:
            seen[name] += 1
            name = f"{name} ({seen[name]})"
        else:
            seen[name] = 1
        unique.append(name)
    return unique


def extract_chart_data(table_markdown: str) -> Optional[TableChartData]:
    """
    Extract chart-ready data from a markdown table.

    Args:
        table_markdown: Header row, separator row and data rows

    Returns:
        TableChartData, or None if the table has no data rows
    """
    try:
        parsed = parse_markdown_table(table_markdown)
        if parsed is None:
            return None

        headers, rows = parsed
        if not rows:
            return None

        headers = _unique_headers(headers)
        frame = pd.DataFrame(rows, columns=headers)

        numeric_columns = []
        metric_columns = []
        has_percentages = False
        for idx, column in enumerate(headers):
            values = frame[column].tolist()
            if ChartDataValidator.is_numeric_column(values):
                numeric_columns.append(column)
            elif idx == 0 or not ChartDataValidator.has_numeric_value(values):
                continue

            cleaned, has_pct = ChartDataValidator.validate_numeric_data(values)
            frame[column] = pd.Series(cleaned, index=frame.index, dtype=object)
            if idx > 0:
                metric_columns.append(column)
            has_percentages = has_percentages or has_pct

        first_column = frame[headers[0]].tolist()
        if all(isinstance(value, str) and DATE_PATTERN.match(value) for value in first_column):
            data_type = DATA_TIME_SERIES
        elif any(column in numeric_columns for column in headers[1:]):
            data_type = DATA_NUMERICAL
        else:
            data_type = DATA_CATEGORICAL

        return TableChartData(
            headers, frame, data_type, numeric_columns, metric_columns, has_percentages
        )

    except Exception as e:
        logger.error("Error extracting chart data from table: %s", e)
        return None


def _choose_chart_type(chart_data: TableChartData, y_keys: List[str]) -> Optional[str]:
    """Pick the chart type that best fits the table's shape."""
    rows = chart_data.row_count

    if chart_data.data_type == DATA_TIME_SERIES:
        return "line"

    if chart_data.data_type == DATA_NUMERICAL:
        chart_type = "bar" if rows <= 5 else "line"

        # One metric over a few categories reads best as proportions
        if len(y_keys) == 1 and rows <= 8:
            total = sum(value for value in chart_data.frame[y_keys[0]].tolist()
                        if isinstance(value, (int, float)))
            if 95 <= total <= 105 or rows <= 5:
                chart_type = "pie"
        return chart_type

    if not y_keys:
        return None
    return "bar" if rows <= 10 else "line"


def generate_chart(chart_data: Optional[TableChartData]) -> Optional[Dict[str, Any]]:
    """
    Generate a simple chart spec for table data.

    Args:
        chart_data: Output of extract_chart_data

    Returns:
        Chart spec dict, or None when the data has nothing to plot
    """
    if chart_data is None:
        return None

    try:
        headers = chart_data.headers
        if len(headers) < 2 or chart_data.row_count < 1:
            return None

        x_key = headers[0]
        y_keys = list(chart_data.metric_columns)
        if not y_keys:
            return None

        chart_type = _choose_chart_type(chart_data, y_keys)
        if chart_type is None:
            return None

        if chart_data.data_type == DATA_TIME_SERIES:
            title = f"{', '.join(y_keys)} Over Time"
        else:
            title = f"{', '.join(y_keys)} by {x_key}"

        return {
            "type": "chart",
            "chartType": chart_type,
            "data": chart_data.frame.to_dict(orient="records"),
            "xKey": x_key,
            "yKeys": y_keys,
            "colors": list(CHART_COLORS),
            "width": 600,
            "height": 400,
            "title": title,
        }

    except Exception as e:
        logger.error("Error generating chart config: %s", e)
        return None


def generate_chart_from_table(table_markdown: str) -> Optional[Dict[str, Any]]:
    """Convenience function to go straight from table markdown to a chart spec."""
    return generate_chart(extract_chart_data(table_markdown))


def analyze_text_for_visualization_patterns(text: str) -> Dict[str, bool]:
    """Look for wording that suggests the text would benefit from a chart."""
    text = text or ""
    return {
        "has_percentages": len(PERCENTAGE_PATTERN.findall(text)) >= 3,
        "has_comparisons": len(COMPARISON_PATTERN.findall(text)) >= 2,
        "has_time_data": len(TIME_PATTERN.findall(text)) >= 3,
        "has_trends": len(TREND_PATTERN.findall(text)) >= 2,
    }
