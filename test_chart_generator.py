#!/usr/bin/env python3
"""
Unit tests for table-to-chart generation and numeric cell validation.
"""

import pytest

from chart_data_validator import ChartDataValidator
from chart_generator import (
    DATA_CATEGORICAL,
    DATA_NUMERICAL,
    DATA_TIME_SERIES,
    analyze_text_for_visualization_patterns,
    extract_chart_data,
    generate_chart,
    generate_chart_from_table,
)


class TestChartDataValidator:
    """Test cases for numeric cell parsing."""

    @pytest.mark.parametrize("cell, expected", [
        ("42", 42),
        ("3.5", 3.5),
        ("$1,200", 1200),
        ("45%", 45),
        ("€900", 900),
        ("-7", -7),
        (12, 12),
    ])
    def test_parse_number(self, cell, expected):
        assert ChartDataValidator.parse_number(cell) == expected

    @pytest.mark.parametrize("cell", ["High", "", "   ", "nan", "inf", None, True, "12 apples"])
    def test_parse_number_rejects(self, cell):
        assert ChartDataValidator.parse_number(cell) is None

    def test_whole_numbers_become_ints(self):
        assert isinstance(ChartDataValidator.parse_number("10.0"), int)

    def test_is_numeric_column(self):
        assert ChartDataValidator.is_numeric_column(["1", "$2", "3%"])
        assert not ChartDataValidator.is_numeric_column(["1", "two"])
        assert not ChartDataValidator.is_numeric_column([])

    def test_has_numeric_value(self):
        assert ChartDataValidator.has_numeric_value(["N/A", "7"])
        assert not ChartDataValidator.has_numeric_value(["N/A", "-", ""])

    def test_validate_numeric_data(self):
        values, has_percentages = ChartDataValidator.validate_numeric_data(
            ["33.5%", "Score: 92", "unknown", "-", None]
        )
        assert values == [33.5, 92, 0, 0, 0]
        assert has_percentages is True


class TestExtractChartData:
    """Test cases for loading tables into chart data."""

    def test_numerical_table(self):
        table = "| Product | Units | Revenue |\n|---|---|---|\n| A | 100 | $5,000 |\n| B | 150 | $7,500 |"
        data = extract_chart_data(table)

        assert data.headers == ["Product", "Units", "Revenue"]
        assert data.data_type == DATA_NUMERICAL
        assert data.numeric_columns == ["Units", "Revenue"]
        assert data.frame["Revenue"].tolist() == [5000, 7500]
        assert data.row_count == 2

    def test_time_series_table(self):
        table = "| Date | Visits |\n|---|---|\n| 2024-01-01 | 10 |\n| 2024-01-02 | 12 |"
        assert extract_chart_data(table).data_type == DATA_TIME_SERIES

    def test_categorical_table(self):
        table = "| Name | Role |\n|---|---|\n| Ana | Dev |"
        assert extract_chart_data(table).data_type == DATA_CATEGORICAL

    def test_partially_numeric_column_is_a_metric(self):
        table = "| Item | Score | Note |\n|---|---|---|\n| A | 5 | ok |\n| B | N/A | ok |\n| C | High (85) | ok |"
        data = extract_chart_data(table)

        assert data.data_type == DATA_CATEGORICAL
        assert data.numeric_columns == []
        assert data.metric_columns == ["Score"]
        assert data.frame["Score"].tolist() == [5, 0, 85]
        assert data.frame["Note"].tolist() == ["ok", "ok", "ok"]

    def test_first_column_kept_as_labels(self):
        table = "| Item | Qty |\n|---|---|\n| 1 | 4 |\n| Other | 6 |"
        data = extract_chart_data(table)
        assert data.frame["Item"].tolist() == ["1", "Other"]
        assert data.metric_columns == ["Qty"]

    def test_duplicate_headers_made_unique(self):
        table = "| Item | Qty | Qty |\n|---|---|---|\n| a | 1 | 2 |"
        assert extract_chart_data(table).headers == ["Item", "Qty", "Qty (2)"]

    def test_too_short(self):
        assert extract_chart_data("| A | B |\n|---|---|") is None


class TestGenerateChart:
    """Test cases for picking a chart spec."""

    def test_percentages_become_pie(self):
        table = "| Language | Share |\n|---|---|\n| Python | 50% |\n| Go | 30% |\n| Rust | 20% |"
        chart = generate_chart_from_table(table)

        assert chart["type"] == "chart"
        assert chart["chartType"] == "pie"
        assert chart["xKey"] == "Language"
        assert chart["yKeys"] == ["Share"]
        assert chart["data"][0] == {"Language": "Python", "Share": 50}
        assert chart["title"] == "Share by Language"

    def test_many_rows_become_line(self):
        rows = "\n".join(f"| Item {i} | {i} | {i * 2} |" for i in range(7))
        table = f"| Item | A | B |\n|---|---|---|\n{rows}"
        chart = generate_chart_from_table(table)
        assert chart["chartType"] == "line"
        assert chart["yKeys"] == ["A", "B"]

    def test_few_rows_two_metrics_become_bar(self):
        table = "| Team | Wins | Losses |\n|---|---|---|\n| A | 3 | 1 |\n| B | 2 | 2 |"
        assert generate_chart_from_table(table)["chartType"] == "bar"

    def test_time_series_title(self):
        table = "| Date | Visits |\n|---|---|\n| 2024-01-01 | 10 |\n| 2024-01-02 | 12 |"
        chart = generate_chart_from_table(table)
        assert chart["chartType"] == "line"
        assert chart["title"] == "Visits Over Time"

    def test_no_numbers_no_chart(self):
        table = "| Name | Role |\n|---|---|\n| Ana | Dev |"
        assert generate_chart_from_table(table) is None

    def test_missing_value_table_becomes_bar(self):
        table = "| Item | Score |\n|---|---|\n| A | 5 |\n| B | N/A |\n"
        chart = generate_chart_from_table(table)

        assert chart["chartType"] == "bar"
        assert chart["xKey"] == "Item"
        assert chart["yKeys"] == ["Score"]
        assert chart["data"] == [{"Item": "A", "Score": 5}, {"Item": "B", "Score": 0}]

    def test_none_input(self):
        assert generate_chart(None) is None


class TestTextPatterns:
    """Test cases for visualization wording analysis."""

    def test_rich_text(self):
        text = ("Sales grew 10% in Q1, 15% in Q2 and 20% in Q3 compared to 2023. "
                "The growth trend was higher than expected.")
        flags = analyze_text_for_visualization_patterns(text)
        assert flags["has_percentages"] is True
        assert flags["has_time_data"] is True
        assert flags["has_trends"] is True
        assert flags["has_comparisons"] is True

    def test_plain_text(self):
        flags = analyze_text_for_visualization_patterns("Hello there.")
        assert not any(flags.values())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
