"""Reply segmentation module for deekseep.

Classifies assistant output into plain text and math segments so that
each piece can be routed to a suitable renderer. Does not render.
"""

from .models import MathStyle, Segment, SegmentKind
from .segmenter import reconstruct, segment_math

__all__ = [
    "MathStyle",
    "Segment",
    "SegmentKind",
    "reconstruct",
    "segment_math",
]
