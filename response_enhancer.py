"""
Response Enhancer
Adds chart and card blocks to AI responses that only contain plain data:
markdown tables, percentage statements and callout paragraphs.
"""

import json
import logging
import re
from typing import List, Tuple

import config
from chart_generator import generate_chart_from_table
from chart_normalizer import normalize_chart_data
from content_extractor import TABLE_PATTERN
from error_handler import ErrorContext, ErrorSeverity, fail_safe
from visualization_models import EnhancedResponse, VisualizationDescriptor

logger = logging.getLogger('response_visualizer.response_enhancer')

EXISTING_CHART_PATTERN = re.compile(r'"type"\s*:\s*"chart"')

PERCENTAGE_STATEMENT = re.compile(r"(\d+)%\s+(?:of|for|in)\s+([^,.\n]+)")

PIE_COLORS = ['#8884d8', '#82ca9d', '#ffc658', '#ff8042', '#a4de6c']

CALLOUT_PATTERNS = [
    (re.compile(r"(?:^|\n)(?:note|important|tip|key insight)[:\s](.+?)(?=\n\n|$)",
                re.IGNORECASE | re.DOTALL), "info"),
    (re.compile(r"(?:^|\n)(?:caution|warning|be careful)[:\s](.+?)(?=\n\n|$)",
                re.IGNORECASE | re.DOTALL), "warning"),
    (re.compile(r"(?:^|\n)(?:success|achievement|accomplishment)[:\s](.+?)(?=\n\n|$)",
                re.IGNORECASE | re.DOTALL), "success"),
    (re.compile(r"(?:^|\n)(?:error|problem|issue|fault)[:\s](.+?)(?=\n\n|$)",
                re.IGNORECASE | re.DOTALL), "error"),
]


def _json_block(data: dict) -> str:
    return "```json\n" + json.dumps(data, indent=2) + "\n```"


def _chart_descriptor(chart_spec: dict) -> VisualizationDescriptor:
    return VisualizationDescriptor.chart(
        normalize_chart_data(chart_spec), title=chart_spec.get("title")
    )


def _already_has_charts(text: str) -> bool:
    return "```json" in text and bool(EXISTING_CHART_PATTERN.search(text))


def _enhance_tables(text: str) -> Tuple[str, List[VisualizationDescriptor]]:
    """Insert a chart block after every markdown table that has numeric data."""
    enhanced_text = text
    visualizations = []

    for match in TABLE_PATTERN.finditer(text):
        table_text = match.group(0)
        with ErrorContext("Error enhancing table to chart", ErrorSeverity.MEDIUM, reraise=False):
            chart_spec = generate_chart_from_table(table_text)
            if not chart_spec:
                continue

            table_end = enhanced_text.find(table_text)
            if table_end < 0:
                continue
            table_end += len(table_text.rstrip("\r\n"))

            enhanced_text = (
                enhanced_text[:table_end]
                + "\n\n" + _json_block(chart_spec)
                + enhanced_text[table_end:]
            )
            visualizations.append(_chart_descriptor(chart_spec))

    return enhanced_text, visualizations


def _enhance_percentages(text: str) -> Tuple[str, List[VisualizationDescriptor]]:
    """Suggest a pie chart when the text lists several "N% of X" statements."""
    percentage_data = []
    first_position = None

    for match in PERCENTAGE_STATEMENT.finditer(text):
        category = match.group(2).strip()
        if not category:
            continue
        if first_position is None:
            first_position = match.start()
        percentage_data.append({"category": category, "value": int(match.group(1))})

    if len(percentage_data) < config.enhancer_min_percentage_points:
        return text, []

    chart_spec = {
        "type": "chart",
        "chartType": "pie",
        "data": percentage_data,
        "xKey": "category",
        "yKeys": ["value"],
        "colors": list(PIE_COLORS),
    }

    paragraph_end = text.find("\n\n", first_position)
    insert_at = paragraph_end if paragraph_end >= 0 else len(text)
    enhanced_text = text[:insert_at] + "\n\n" + _json_block(chart_spec) + text[insert_at:]

    logger.debug("Suggested pie chart for %d percentage statements", len(percentage_data))
    return enhanced_text, [_chart_descriptor(chart_spec)]


def _enhance_callouts(text: str) -> Tuple[str, List[VisualizationDescriptor]]:
    """Replace note/warning/success/error paragraphs with info cards."""
    enhanced_text = text
    visualizations = []

    for pattern, card_type in CALLOUT_PATTERNS:
        for match in pattern.finditer(text):
            content = match.group(1).strip()
            if len(content) <= config.enhancer_min_card_length:
                continue

            matched = match.group(0)
            # An earlier callout pattern may already have claimed this paragraph
            if matched not in enhanced_text:
                continue

            title = card_type.title()
            card = {"type": "card", "title": title, "content": content, "cardType": card_type}
            prefix = "\n" if matched.startswith("\n") else ""
            enhanced_text = enhanced_text.replace(matched, prefix + _json_block(card), 1)
            visualizations.append(VisualizationDescriptor.card(title, content))

    return enhanced_text, visualizations


def _unenhanced(text: str) -> EnhancedResponse:
    return EnhancedResponse(text or "", [])


@fail_safe(_unenhanced, ErrorSeverity.CRITICAL)
def enhance_response(text: str) -> EnhancedResponse:
    """
    Process response text to identify data that could be visualized.

    Args:
        text: The AI response text

    Returns:
        EnhancedResponse with chart/card JSON blocks inserted and their descriptors
    """
    if not text:
        return EnhancedResponse("", [])

    if _already_has_charts(text):
        # Response already contains chart JSON, no need to enhance
        return EnhancedResponse(text, [])

    visualizations = []
    enhanced_text = text
    for step in (_enhance_tables, _enhance_percentages, _enhance_callouts):
        enhanced_text, found = step(enhanced_text)
        visualizations.extend(found)

    if visualizations:
        logger.info("Enhanced response with %d visualization(s)", len(visualizations))
    return EnhancedResponse(enhanced_text, visualizations)
