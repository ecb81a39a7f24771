"""Text formatting utilities for the TUI and CLI.

Hides the details of turning segmented replies into Rich renderables.
Text segments go to the Markdown (or plain text) renderer, math segments
to a LaTeX-to-text renderer, since terminals cannot typeset LaTeX.
"""

import re
from collections.abc import Iterable

from rich.console import RenderableType
from rich.markdown import Markdown
from rich.text import Text

from ..rendering import Segment, segment_math

DISPLAY_MATH_STYLE = "bold"
INLINE_MATH_STYLE = "italic"


def clean_latex(text: str) -> str:
    """Convert LaTeX notation to plain text equivalents.

    Handles common LaTeX patterns that Rich cannot render:
    - \\( ... \\) inline math -> just the content
    - \\[ ... \\] display math -> just the content
    - $...$ inline math -> just the content
    - $$...$$ display math -> just the content
    """
    # Remove \( ... \) inline math delimiters
    text = re.sub(r'\\\(\s*', '', text)
    text = re.sub(r'\s*\\\)', '', text)

    # Remove \[ ... \] display math delimiters
    text = re.sub(r'\\\[\s*', '', text)
    text = re.sub(r'\s*\\\]', '', text)

    # Remove $$ ... $$ display math delimiters (do this before single $)
    text = re.sub(r'\$\$\s*', '', text)

    # Remove $ ... $ inline math delimiters (but not escaped \$)
    text = re.sub(r'(?<!\\)\$([^$]+)(?<!\\)\$', r'\1', text)

    return latex_to_text(text)


def latex_to_text(expression: str) -> str:
    """Rewrite common LaTeX commands in a math expression as plain text."""
    text = expression
    text = re.sub(r'\\frac\{([^}]*)\}\{([^}]*)\}', r'(\1)/(\2)', text)
    text = re.sub(r'\\sqrt\{([^}]*)\}', r'sqrt(\1)', text)
    text = re.sub(r'\\sum', 'sum', text)
    text = re.sub(r'\\prod', 'product', text)
    text = re.sub(r'\\int', 'integral', text)
    text = re.sub(r'\\infty', 'infinity', text)
    text = re.sub(r'\\pi', 'pi', text)
    text = re.sub(r'\\times', 'x', text)
    text = re.sub(r'\\cdot', '*', text)
    text = re.sub(r'\\pm', '+/-', text)
    text = re.sub(r'\\leq', '<=', text)
    text = re.sub(r'\\geq', '>=', text)
    text = re.sub(r'\\neq', '!=', text)
    text = re.sub(r'\\approx', '~=', text)
    text = re.sub(r'\\ldots', '...', text)
    text = re.sub(r'\\cdots', '...', text)
    text = re.sub(r'\\quad', ' ', text)
    text = re.sub(r'\\qquad', '  ', text)
    text = re.sub(r'\\(?:text|textbf|textit|mathrm|mathbf)\{([^}]*)\}', r'\1', text)

    # Remove remaining backslash commands but keep the argument
    text = re.sub(r'\\[a-zA-Z]+\{([^}]*)\}', r'\1', text)

    # Clean up superscripts and subscripts
    text = re.sub(r'\^{([^}]*)}', r'^(\1)', text)
    text = re.sub(r'_{([^}]*)}', r'_(\1)', text)

    return text


def render_math(segment: Segment) -> Text:
    """Render one math segment as styled text.

    Display math is centered on its own line, inline math is italic.
    """
    expression = latex_to_text(segment.payload.strip())
    if segment.is_display:
        return Text(expression, style=DISPLAY_MATH_STYLE, justify="center", overflow="fold")
    return Text(expression, style=INLINE_MATH_STYLE, overflow="fold")


def render_segments(segments: Iterable[Segment], markdown: bool = True) -> list[RenderableType]:
    """Route each segment to its renderer.

    Text and inline math flow together in one block; display math breaks
    the flow into its own centered block.

    Args:
        segments: Output of segment_math()
        markdown: Render text through Markdown instead of as plain text

    Returns:
        Renderables in display order
    """
    blocks: list[RenderableType] = []
    flow: list[Segment] = []

    def flush() -> None:
        if not flow:
            return
        if markdown:
            source = "".join(
                f"`{latex_to_text(seg.payload.strip())}`" if seg.is_math else seg.payload
                for seg in flow
            )
            if source.strip():
                blocks.append(Markdown(source))
        else:
            text = Text(overflow="fold")
            for seg in flow:
                if seg.is_math:
                    text.append_text(render_math(seg))
                else:
                    text.append(seg.payload)
            if text.plain.strip():
                blocks.append(text)
        flow.clear()

    for segment in segments:
        if segment.is_display:
            flush()
            blocks.append(render_math(segment))
        else:
            flow.append(segment)

    flush()
    return blocks


def render_content(
    content: str,
    use_markdown: bool = False,
    render_math_in_markdown: bool = True
) -> list[RenderableType]:
    """Render a message body according to the display settings.

    Modes:
    - Markdown with math: segment first, Markdown for text, math renderer for math
    - Markdown only: the whole body through Markdown, LaTeX flattened inline
    - Default: plain text with math segments rendered as equations

    Args:
        content: Raw message text
        use_markdown: Use the Markdown renderer for text
        render_math_in_markdown: Split math out before Markdown rendering

    Returns:
        Renderables in display order
    """
    if use_markdown and not render_math_in_markdown:
        return [Markdown(clean_latex(content))]
    return render_segments(segment_math(content), markdown=use_markdown)


def render_plain(content: str) -> Text:
    """Render user input verbatim, without markup parsing."""
    return Text(content, overflow="fold")
