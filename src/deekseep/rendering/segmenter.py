"""Split reply text into plain text and math segments.

Hides the scanning strategy used to find ``$$...$$`` (display) and
``$...$`` (inline) math in an assistant reply. The scan is a single
left-to-right pass; every closer search starts where the previous one
stopped, so the whole pass stays linear in the input length.
"""

from collections.abc import Iterable

from .models import MATH_DELIMITERS, MathStyle, Segment

DISPLAY_DELIMITER = MATH_DELIMITERS[MathStyle.DISPLAY]
INLINE_DELIMITER = MATH_DELIMITERS[MathStyle.INLINE]


def _find_closer(text: str, start: int, style: MathStyle) -> int:
    """Return the index of the closing delimiter at or after ``start``, or -1."""
    return text.find(MATH_DELIMITERS[style], start)


def segment_math(text: str) -> list[Segment]:
    """Split text into ordered text and math segments.

    At each position the display opener ``$$`` is tested before the inline
    opener ``$``. When a display opener has no ``$$`` closer, its first
    ``$`` is kept as text and the scan resumes at the second one, which is
    then tested as an opener in its own right. A ``$`` with no closer
    before the end of the input is kept verbatim as text, so ``"$$x"`` and
    a bare ``"$$"`` are both plain text.

    Adjacent plain text (including unmatched ``$`` characters) is merged
    into a single text segment, so a string without any math yields at most
    one segment.

    Args:
        text: Raw reply text, possibly empty or with unterminated delimiters

    Returns:
        Segments in input order; empty list for empty input

    Examples:
        >>> [s.payload for s in segment_math("a $$x+1$$ b")]
        ['a ', 'x+1', ' b']
    """
    segments: list[Segment] = []
    buffer: list[str] = []
    length = len(text)
    # Once a display closer search fails, no later opener can find one
    display_closers_left = True
    i = 0

    def flush() -> None:
        if buffer:
            segments.append(Segment.text("".join(buffer)))
            buffer.clear()

    while i < length:
        char = text[i]
        if char != INLINE_DELIMITER:
            # Copy the whole run up to the next delimiter in one slice
            next_dollar = text.find(INLINE_DELIMITER, i)
            end = length if next_dollar == -1 else next_dollar
            buffer.append(text[i:end])
            i = end
            continue

        if text.startswith(DISPLAY_DELIMITER, i):
            start = i + len(DISPLAY_DELIMITER)
            close = _find_closer(text, start, MathStyle.DISPLAY) if display_closers_left else -1
            if close != -1:
                flush()
                segments.append(Segment.math(text[start:close], MathStyle.DISPLAY))
                i = close + len(DISPLAY_DELIMITER)
                continue
            display_closers_left = False
            buffer.append(char)
            i += 1
            continue

        start = i + len(INLINE_DELIMITER)
        close = _find_closer(text, start, MathStyle.INLINE)
        if close != -1:
            flush()
            segments.append(Segment.math(text[start:close], MathStyle.INLINE))
            i = close + len(INLINE_DELIMITER)
        else:
            # Unterminated: keep the opener as ordinary text
            buffer.append(char)
            i += 1

    flush()
    return segments


def reconstruct(segments: Iterable[Segment]) -> str:
    """Join segments back into source text, restoring math delimiters."""
    return "".join(segment.source for segment in segments)
