"""
Data structures shared by the extraction, normalization and merge steps.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

KIND_CHART = "chart"
KIND_TABLE = "table"
KIND_CARD = "card"
KIND_IMAGE = "image"
KIND_AUDIO = "audio"

VISUALIZATION_KINDS = (KIND_CHART, KIND_TABLE, KIND_CARD, KIND_IMAGE, KIND_AUDIO)


@dataclass(frozen=True)
class VisualizationDescriptor:
    """One extracted piece of structured content.

    Payload shapes by kind:
        table: {"headers": [str], "rows": [[str]]}
        chart: normalized plotting configuration
        image / audio: {"url": str}
        card: {"title": str, "description": str}
    """
    kind: str
    payload: Dict[str, Any]
    title: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if self.kind not in VISUALIZATION_KINDS:
            raise ValueError(f"Unknown visualization kind: {self.kind!r}")

    @classmethod
    def table(cls, headers: List[str], rows: List[List[str]], title: Optional[str] = None):
        return cls(KIND_TABLE, {"headers": headers, "rows": rows}, title)

    @classmethod
    def chart(cls, config: Dict[str, Any], title: Optional[str] = None,
              description: Optional[str] = None):
        return cls(KIND_CHART, config, title, description)

    @classmethod
    def image(cls, url: str, title: Optional[str] = None, description: Optional[str] = None):
        return cls(KIND_IMAGE, {"url": url}, title, description)

    @classmethod
    def audio(cls, url: str, title: Optional[str] = None, description: Optional[str] = None):
        return cls(KIND_AUDIO, {"url": url}, title, description)

    @classmethod
    def card(cls, title: str, description: str):
        return cls(KIND_CARD, {"title": title, "description": description}, title, description)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the plain record shape used by rendering code."""
        result = {"type": self.kind, "data": self.payload}
        if self.title is not None:
            result["title"] = self.title
        if self.description is not None:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "VisualizationDescriptor":
        """Build a descriptor from a plain {"type", "data", ...} record."""
        return cls(
            kind=record.get("type"),
            payload=record.get("data") or {},
            title=record.get("title"),
            description=record.get("description"),
        )


@dataclass(frozen=True)
class ProcessedContent:
    """Clean text plus the visualizations pulled out of it."""
    clean_text: str
    visualizations: List[VisualizationDescriptor] = field(default_factory=list)

    @property
    def has_visualizations(self) -> bool:
        return len(self.visualizations) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cleanText": self.clean_text,
            "visualizations": [v.to_dict() for v in self.visualizations],
        }


@dataclass(frozen=True)
class EnhancedResponse:
    """Text with generated chart/card blocks inserted, plus their descriptors."""
    enhanced_text: str
    visualizations: List[VisualizationDescriptor] = field(default_factory=list)
