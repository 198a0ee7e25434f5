"""
Helpers that apply the visualization pipeline to chat messages and notepad entries,
plus light heuristics used to decide how processed content should be displayed.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from content_extractor import process_ai_content
from visualization_models import VisualizationDescriptor

logger = logging.getLogger('response_visualizer.message_utils')

HASHTAG_PATTERN = re.compile(r"#([a-zA-Z0-9_]+)")

VISUAL_INDICATORS = [
    'chart', 'graph', 'plot', 'diagram', 'visualization',
    'table', 'statistics', 'data visualization', 'infographic',
    'figure', 'bar chart', 'pie chart', 'line graph', 'map',
    'dashboard', 'trend', 'comparison', 'timeline', 'histogram',
]

TELEPROMPTER_MARKERS = [
    'SCRIPT', 'TELEPROMPTER', 'READ THIS:', '[Read aloud]',
    'TALKING POINTS', 'HOST:', 'PRESENTER:',
]


@dataclass
class Message:
    """A single chat message."""
    id: str
    role: str  # 'user', 'assistant' or 'system'
    content: str
    timestamp: datetime = field(default_factory=datetime.now)
    visualizations: List[VisualizationDescriptor] = field(default_factory=list)


@dataclass
class NotepadEntry:
    """A saved note, possibly built from AI responses."""
    id: str
    title: str
    content: str
    timestamp: datetime = field(default_factory=datetime.now)
    tags: List[str] = field(default_factory=list)
    visualizations: List[VisualizationDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class RenderingMetadata:
    """How a piece of processed content should be displayed."""
    has_visualizations: bool
    has_visual_indicators: bool
    is_teleprompter: bool

    @property
    def use_card_background(self) -> bool:
        return self.has_visualizations or self.has_visual_indicators or self.is_teleprompter


def process_message_content(message: Message) -> Message:
    """
    Process an AI response message for both content and visualizations.

    Args:
        message: The chat message

    Returns:
        A new Message with clean content and extracted visualizations;
        non-assistant messages are returned unchanged
    """
    if message.role != 'assistant':
        return message

    processed = process_ai_content(message.content)
    logger.debug("Message %s: %d visualization(s)", message.id, len(processed.visualizations))
    return replace(message, content=processed.clean_text, visualizations=processed.visualizations)


def process_notepad_content(note: NotepadEntry) -> NotepadEntry:
    """Process a notepad entry for visualizations."""
    processed = process_ai_content(note.content)
    return replace(note, content=processed.clean_text, visualizations=processed.visualizations)


def extract_note_tags(content: str) -> List[str]:
    """Extract unique #hashtags from note content, in first-seen order."""
    tags = []
    for tag in HASHTAG_PATTERN.findall(content or ""):
        if tag not in tags:
            tags.append(tag)
    return tags


def contains_visual_content(text: str) -> bool:
    """Check whether text talks about charts, tables or other visual material."""
    lowered = (text or "").lower()
    return any(indicator in lowered for indicator in VISUAL_INDICATORS)


def is_teleprompter_content(text: str) -> bool:
    """Check whether text looks like a script meant to be read aloud."""
    text = text or ""
    if any(marker in text for marker in TELEPROMPTER_MARKERS):
        return True
    return 'Introduction' in text and 'Conclusion' in text


def describe_rendering(content: str,
                       visualizations: Optional[List[VisualizationDescriptor]] = None) -> RenderingMetadata:
    """Work out the display treatment for processed content."""
    return RenderingMetadata(
        has_visualizations=bool(visualizations),
        has_visual_indicators=contains_visual_content(content),
        is_teleprompter=is_teleprompter_content(content),
    )
