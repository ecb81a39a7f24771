"""Data models for segmented assistant output.

These models describe how a reply is split for rendering,
independent of the renderer that eventually draws each piece.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SegmentKind(str, Enum):
    """Kind of content carried by a segment."""

    TEXT = "text"
    MATH = "math"


class MathStyle(str, Enum):
    """Layout of a math segment (NONE for text segments)."""

    NONE = "none"
    INLINE = "inline"
    DISPLAY = "display"


# Delimiters stripped from math payloads, keyed by style
MATH_DELIMITERS = {
    MathStyle.INLINE: "$",
    MathStyle.DISPLAY: "$$",
}


class Segment(BaseModel):
    """A contiguous piece of reply text classified as plain text or math."""

    model_config = ConfigDict(frozen=True)

    kind: SegmentKind = Field(description="Whether the payload is plain text or math")
    math_style: MathStyle = Field(
        default=MathStyle.NONE,
        description="Inline or display layout; NONE for text segments"
    )
    payload: str = Field(description="Segment content with math delimiters stripped")

    @model_validator(mode="after")
    def _check_style(self) -> "Segment":
        if self.kind == SegmentKind.TEXT and self.math_style != MathStyle.NONE:
            raise ValueError("Text segments cannot carry a math style")
        if self.kind == SegmentKind.MATH and self.math_style == MathStyle.NONE:
            raise ValueError("Math segments require an inline or display style")
        return self

    @classmethod
    def text(cls, payload: str) -> "Segment":
        """Create a plain text segment."""
        return cls(kind=SegmentKind.TEXT, payload=payload)

    @classmethod
    def math(cls, payload: str, style: MathStyle) -> "Segment":
        """Create a math segment with the given layout."""
        return cls(kind=SegmentKind.MATH, math_style=style, payload=payload)

    @property
    def is_math(self) -> bool:
        return self.kind == SegmentKind.MATH

    @property
    def is_display(self) -> bool:
        return self.math_style == MathStyle.DISPLAY

    @property
    def source(self) -> str:
        """Payload with its original delimiters restored."""
        if not self.is_math:
            return self.payload
        delimiter = MATH_DELIMITERS[self.math_style]
        return f"{delimiter}{self.payload}{delimiter}"
