"""
Re-serialize extracted visualizations back into markdown-ish text.
"""

import json
import logging
from typing import Any, Dict, Iterable, Optional, Union

from visualization_models import (
    KIND_CHART,
    KIND_IMAGE,
    KIND_TABLE,
    VISUALIZATION_KINDS,
    VisualizationDescriptor,
)

logger = logging.getLogger('response_visualizer.visualization_merger')

VisualLike = Union[VisualizationDescriptor, Dict[str, Any]]


def _as_descriptor(visual: VisualLike) -> Optional[VisualizationDescriptor]:
    if isinstance(visual, VisualizationDescriptor):
        return visual
    if visual.get("type") not in VISUALIZATION_KINDS:
        return None
    return VisualizationDescriptor.from_dict(visual)


def _format_table(payload: Dict[str, Any]) -> str:
    headers = [str(header) for header in payload.get("headers", [])]
    lines = [
        " | ".join(headers),
        " | ".join("---" for _ in headers),
    ]
    lines.extend(" | ".join(str(cell) for cell in row) for row in payload.get("rows", []))
    return "\n".join(lines)


def merge_visualization(text: str, visual: VisualLike) -> str:
    """
    Append one visualization to the end of some text.

    Args:
        text: Text to append to
        visual: A descriptor or its {"type", "data", ...} record

    Returns:
        The text followed by a chart/table fence or an image reference;
        unchanged for kinds that have no text form
    """
    descriptor = _as_descriptor(visual)
    if descriptor is None:
        logger.debug("Skipping visualization record without a known type: %r", visual)
        return text

    if descriptor.kind == KIND_CHART:
        return f"{text}\n\n```chart\n{json.dumps(descriptor.payload, indent=2)}\n```"

    if descriptor.kind == KIND_TABLE:
        return f"{text}\n\n```table\n{_format_table(descriptor.payload)}\n```"

    if descriptor.kind == KIND_IMAGE:
        url = descriptor.payload.get("url")
        if not url:
            logger.debug("Skipping image visualization without a url")
            return text
        return f"{text}\n\n![{descriptor.description or ''}]({url})"

    logger.debug("No text form for %s visualizations, leaving text unchanged", descriptor.kind)
    return text


def merge_visualizations(text: str, visuals: Iterable[VisualLike]) -> str:
    """Append each visualization in order, feeding every result into the next."""
    merged = text
    for visual in visuals:
        merged = merge_visualization(merged, visual)
    return merged
