"""
Visualization extraction for AI responses.
Detects markdown tables, chart-shaped JSON code blocks and markdown images,
pulls them out as descriptors and leaves short placeholders in the text.
"""

import json
import logging
import re
from typing import Any, List, Optional, Tuple

from chart_normalizer import normalize_chart_data
from error_handler import ErrorContext, ErrorSeverity, fail_safe
from visualization_models import ProcessedContent, VisualizationDescriptor

logger = logging.getLogger('response_visualizer.content_extractor')

# Header row, separator row (must contain a dash), then one or more data rows
TABLE_PATTERN = re.compile(
    r"^[ \t]*\|.+\|[ \t]*\r?\n"
    r"[ \t]*\|[ \t:|]*-[ \t\-:|]*\|[ \t]*\r?\n"
    r"(?:[ \t]*\|.+\|[ \t]*(?:\r?\n|$))+",
    re.MULTILINE,
)

CODE_BLOCK_PATTERN = re.compile(r"```(?:json|javascript)?[ \t]*\r?\n?([\s\S]*?)```")

IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")

CHART_INDICATOR_KEYS = ("chart", "labels", "datasets", "series")

PassResult = Tuple[str, List[VisualizationDescriptor]]


def split_table_row(line: str) -> List[str]:
    """Split a pipe-delimited row into trimmed cells.

    Only the empty cells produced by leading/trailing pipes are dropped;
    empty cells in the middle of a row are kept.
    """
    cells = [cell.strip() for cell in line.strip().split("|")]
    if cells and cells[0] == "":
        cells = cells[1:]
    if cells and cells[-1] == "":
        cells = cells[:-1]
    return cells


def parse_markdown_table(table_text: str) -> Optional[Tuple[List[str], List[List[str]]]]:
    """
    Parse a markdown table into headers and rows.

    Args:
        table_text: Header row, separator row and data rows

    Returns:
        (headers, rows) with every row padded/truncated to the header width,
        or None if the text is not a usable table
    """
    lines = [line.strip() for line in table_text.strip().splitlines() if line.strip()]
    if len(lines) < 3:
        return None

    headers = split_table_row(lines[0])
    if not headers:
        return None

    width = len(headers)
    rows = []
    for line in lines[2:]:
        cells = split_table_row(line)
        if not any(cells):
            continue
        rows.append((cells + [""] * width)[:width])

    return headers, rows


@fail_safe(lambda source, clean_text: (clean_text, []))
def extract_tables(source: str, clean_text: str) -> PassResult:
    """Replace markdown tables with "[Table n]" placeholders."""
    descriptors = []

    for match in TABLE_PATTERN.finditer(source):
        table_text = match.group(0)
        with ErrorContext("Failed to parse table", ErrorSeverity.MEDIUM, reraise=False):
            parsed = parse_markdown_table(table_text)
            if parsed is None:
                logger.debug("Skipping table-like block without data rows")
                continue

            headers, rows = parsed
            number = len(descriptors) + 1
            descriptor = VisualizationDescriptor.table(headers, rows, title=f"Table {number}")
            clean_text = clean_text.replace(table_text, f"[Table {number}]\n\n", 1)
            descriptors.append(descriptor)

    if descriptors:
        logger.info("Extracted %d table(s)", len(descriptors))
    return clean_text, descriptors


def is_chart_data(value: Any) -> bool:
    """Check whether parsed JSON looks like chart data."""
    if not isinstance(value, dict):
        return False
    if value.get("type") == "chart":
        return True
    return any(key in value for key in CHART_INDICATOR_KEYS)


def _chart_title(data: dict, number: int) -> str:
    title = data.get("title")
    if isinstance(title, dict):
        title = title.get("text")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return f"Chart {number}"


@fail_safe(lambda source, clean_text: (clean_text, []))
def extract_code_charts(source: str, clean_text: str) -> PassResult:
    """Replace chart-shaped JSON code blocks with "[Chart n]" placeholders."""
    descriptors = []

    for match in CODE_BLOCK_PATTERN.finditer(source):
        try:
            data = json.loads(match.group(1))
        except (ValueError, RecursionError):
            # Not JSON (or nested too deeply to parse), leave the block as it is
            continue

        if not is_chart_data(data):
            continue

        with ErrorContext("Failed to process chart block", ErrorSeverity.MEDIUM, reraise=False):
            number = len(descriptors) + 1
            config = normalize_chart_data(data)
            descriptor = VisualizationDescriptor.chart(config, title=_chart_title(data, number))
            clean_text = clean_text.replace(match.group(0), f"[Chart {number}]\n\n", 1)
            descriptors.append(descriptor)

    if descriptors:
        logger.info("Extracted %d chart(s)", len(descriptors))
    return clean_text, descriptors


@fail_safe(lambda source, clean_text: (clean_text, []))
def extract_images(source: str, clean_text: str) -> PassResult:
    """Replace markdown images with "[Image: title]" placeholders."""
    descriptors = []

    for match in IMAGE_PATTERN.finditer(source):
        with ErrorContext("Failed to process image", ErrorSeverity.MEDIUM, reraise=False):
            alt = match.group(1).strip()
            url = match.group(2).strip()
            title = alt or f"Image {len(descriptors) + 1}"

            descriptor = VisualizationDescriptor.image(url, title=title, description=alt or None)
            clean_text = clean_text.replace(match.group(0), f"[Image: {title}]\n\n", 1)
            descriptors.append(descriptor)

    if descriptors:
        logger.info("Extracted %d image(s)", len(descriptors))
    return clean_text, descriptors


EXTRACTION_PASSES = (extract_tables, extract_code_charts, extract_images)


def _unprocessed(content: Any) -> ProcessedContent:
    return ProcessedContent(content.strip() if isinstance(content, str) else "", [])


@fail_safe(_unprocessed, ErrorSeverity.CRITICAL)
def process_ai_content(content: str) -> ProcessedContent:
    """
    Split an AI response into clean text and structured visualizations.

    Args:
        content: The AI response text

    Returns:
        ProcessedContent whose visualizations are ordered tables, charts, images
    """
    if not content:
        return ProcessedContent("", [])
    if not isinstance(content, str):
        content = str(content)

    clean_text = content
    visualizations = []
    for extraction_pass in EXTRACTION_PASSES:
        clean_text, found = extraction_pass(content, clean_text)
        visualizations.extend(found)

    return ProcessedContent(clean_text.strip(), visualizations)
