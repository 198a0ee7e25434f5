#!/usr/bin/env python3
"""
Unit tests for the response enhancer.
"""

import json

import pytest
from unittest.mock import patch

import response_enhancer
from response_enhancer import enhance_response


SHARE_TABLE = """Language popularity:

| Language | Share |
| --- | --- |
| Python | 50 |
| Go | 30 |
| Rust | 20 |

That is all."""


def _json_blocks(text):
    blocks = []
    for part in text.split("```json\n")[1:]:
        blocks.append(json.loads(part.split("\n```", 1)[0]))
    return blocks


class TestEnhanceTables:
    """Tables with numbers get a chart block right after them."""

    def test_chart_inserted_after_table(self):
        result = enhance_response(SHARE_TABLE)

        assert len(result.visualizations) == 1
        chart = result.visualizations[0]
        assert chart.kind == "chart"
        assert chart.title == "Share by Language"
        assert chart.payload["series"][0]["type"] == "pie"

        table_end = result.enhanced_text.index("| Rust | 20 |") + len("| Rust | 20 |")
        assert result.enhanced_text[table_end:].startswith("\n\n```json\n")
        assert result.enhanced_text.endswith("That is all.")

        spec = _json_blocks(result.enhanced_text)[0]
        assert spec["chartType"] == "pie"
        assert spec["xKey"] == "Language"

    def test_text_table_untouched(self):
        text = "| Name | Role |\n|---|---|\n| Ana | Dev |"
        result = enhance_response(text)
        assert result.enhanced_text == text
        assert result.visualizations == []


class TestExistingCharts:
    def test_response_with_chart_json_unchanged(self):
        text = SHARE_TABLE + '\n\n```json\n{"type": "chart", "series": []}\n```'
        result = enhance_response(text)
        assert result.enhanced_text == text
        assert result.visualizations == []


class TestEnhancePercentages:
    """Several "N% of X" statements suggest a pie chart."""

    def test_pie_inserted_after_paragraph(self):
        text = "Survey: 60% of developers use Python, 25% of developers use Go.\n\nMore text."
        result = enhance_response(text)

        assert len(result.visualizations) == 1
        assert result.visualizations[0].payload["series"][0]["type"] == "pie"

        before, after = result.enhanced_text.split("\n\n```json\n", 1)
        assert before == "Survey: 60% of developers use Python, 25% of developers use Go."
        assert after.endswith("\n```\n\nMore text.")

        spec = _json_blocks(result.enhanced_text)[0]
        assert spec["data"] == [
            {"category": "developers use Python", "value": 60},
            {"category": "developers use Go", "value": 25},
        ]

    def test_single_statement_ignored(self):
        text = "Only 40% of users logged in."
        assert enhance_response(text).enhanced_text == text

    def test_threshold_from_config(self):
        text = "Only 40% of users logged in."
        with patch.object(response_enhancer.config, "enhancer_min_percentage_points", 1):
            result = enhance_response(text)
        assert len(result.visualizations) == 1


class TestEnhanceCallouts:
    """Callout paragraphs become cards."""

    def test_note_card(self):
        text = "Intro paragraph.\nNote: remember to back up your data first.\n\nOutro."
        result = enhance_response(text)

        assert len(result.visualizations) == 1
        card = result.visualizations[0]
        assert card.kind == "card"
        assert card.payload == {"title": "Info", "description": "remember to back up your data first."}

        block = _json_blocks(result.enhanced_text)[0]
        assert block["type"] == "card"
        assert block["cardType"] == "info"
        assert result.enhanced_text.startswith("Intro paragraph.\n```json")
        assert result.enhanced_text.endswith("\n\nOutro.")

    def test_warning_card(self):
        result = enhance_response("Warning: this will delete every file in the folder.")
        assert result.visualizations[0].payload["title"] == "Warning"

    def test_short_callout_ignored(self):
        text = "Tip: be nice"
        assert enhance_response(text).visualizations == []

    def test_important_is_info(self):
        text = "Important: keep your API keys out of source control."
        result = enhance_response(text)
        assert len(result.visualizations) == 1
        assert result.visualizations[0].title == "Info"
        assert result.enhanced_text.startswith("```json\n")


class TestNeverRaises:
    def test_empty(self):
        result = enhance_response("")
        assert result.enhanced_text == ""
        assert result.visualizations == []

    def test_internal_error_returns_input(self):
        with patch.object(response_enhancer, "_enhance_tables", side_effect=RuntimeError("boom")):
            result = enhance_response(SHARE_TABLE)
        assert result.enhanced_text == SHARE_TABLE
        assert result.visualizations == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
