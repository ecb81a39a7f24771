"""Settings snapshot model.

Hides which values the application reads from its settings store and
how raw stored values are coerced into typed fields.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ColorScheme(str, Enum):
    """Application color scheme."""

    LIGHT = "light"
    DARK = "dark"


class AppSettings(BaseModel):
    """Immutable snapshot of user settings at one point in time.

    A zero temperature or max-token count means "unset"; RequestConfig
    substitutes the defaults.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", description="User-supplied API key override")
    model_label: str = Field(default="DeekSeep-V3", description="Selected UI model label")
    temperature: float = Field(default=0.0, description="Sampling temperature (0 = unset)")
    max_tokens: int = Field(default=0, description="Maximum reply tokens (0 = unset)")
    system_prompt: str | None = Field(
        default=None,
        description="System prompt; None uses the packaged prompt"
    )
    use_markdown_renderer: bool = Field(default=False, description="Render replies as Markdown")
    render_math_in_markdown: bool = Field(
        default=True,
        description="Split math out of Markdown replies"
    )
    color_scheme: ColorScheme = Field(default=ColorScheme.DARK)
    request_timeout: float | None = Field(
        default=60.0,
        description="Wall-clock deadline per request in seconds, None to disable"
    )

    @field_validator("color_scheme", mode="before")
    @classmethod
    def _normalize_scheme(cls, value: object) -> object:
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            return None
        return value
