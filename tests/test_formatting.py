"""Unit tests for reply rendering."""
from rich.markdown import Markdown
from rich.text import Text

from deekseep.rendering import Segment, MathStyle
from deekseep.ui.formatting import (
    clean_latex,
    latex_to_text,
    render_content,
    render_math,
    render_plain,
    render_segments,
)


class TestLatexToText:
    """Tests for LaTeX flattening."""

    def test_fraction_and_root(self):
        assert latex_to_text(r"\frac{a}{b}") == "(a)/(b)"
        assert latex_to_text(r"\sqrt{x}") == "sqrt(x)"

    def test_symbols(self):
        assert latex_to_text(r"\pi r^2") == "pi r^2"
        assert latex_to_text(r"a \leq b") == "a <= b"

    def test_superscript_group(self):
        assert latex_to_text("e^{i x}") == "e^(i x)"

    def test_clean_latex_strips_delimiters(self):
        assert clean_latex(r"Area: $$\pi r^2$$") == "Area: pi r^2"
        assert clean_latex("if $x$ holds") == "if x holds"
        assert clean_latex(r"\(a\) and \[b\]") == "a and b"


class TestRenderMath:
    """Tests for single math segment rendering."""

    def test_display_is_centered(self):
        text = render_math(Segment.math("x^2", MathStyle.DISPLAY))
        assert isinstance(text, Text)
        assert text.justify == "center"
        assert text.plain == "x^2"

    def test_inline_is_not_centered(self):
        text = render_math(Segment.math(r"\pi", MathStyle.INLINE))
        assert text.justify is None
        assert text.plain == "pi"


class TestRenderSegments:
    """Tests for segment routing."""

    def test_display_math_breaks_flow(self):
        segments = [
            Segment.text("Before "),
            Segment.math("x", MathStyle.DISPLAY),
            Segment.text(" after"),
        ]
        blocks = render_segments(segments, markdown=False)

        assert len(blocks) == 3
        assert blocks[0].plain == "Before "
        assert blocks[1].justify == "center"
        assert blocks[2].plain == " after"

    def test_inline_math_stays_in_flow(self):
        segments = [
            Segment.text("where "),
            Segment.math("r", MathStyle.INLINE),
            Segment.text(" is the radius"),
        ]
        blocks = render_segments(segments, markdown=False)

        assert len(blocks) == 1
        assert blocks[0].plain == "where r is the radius"

    def test_markdown_flow(self):
        segments = [Segment.text("**bold** "), Segment.math("r", MathStyle.INLINE)]
        blocks = render_segments(segments, markdown=True)

        assert len(blocks) == 1
        assert isinstance(blocks[0], Markdown)
        assert blocks[0].markup == "**bold** `r`"

    def test_whitespace_only_flow_is_dropped(self):
        segments = [Segment.math("a", MathStyle.DISPLAY), Segment.text("\n\n")]
        assert len(render_segments(segments, markdown=False)) == 1


class TestRenderContent:
    """Tests for the three rendering modes."""

    def test_plain_mode_splits_math(self, sample_reply):
        blocks = render_content(sample_reply)

        assert all(isinstance(block, Text) for block in blocks)
        assert any(block.justify == "center" for block in blocks)
        assert "$5 to learn." in blocks[-1].plain

    def test_markdown_with_math(self, sample_reply):
        blocks = render_content(sample_reply, use_markdown=True)

        assert isinstance(blocks[0], Markdown)
        assert isinstance(blocks[1], Text)
        assert isinstance(blocks[2], Markdown)

    def test_markdown_only(self):
        blocks = render_content("Area $$A=\\pi r^2$$", use_markdown=True, render_math_in_markdown=False)

        assert len(blocks) == 1
        assert isinstance(blocks[0], Markdown)
        assert blocks[0].markup == "Area A=pi r^2"

    def test_render_plain_keeps_markup(self):
        assert render_plain("[bold]hi[/bold]").plain == "[bold]hi[/bold]"
