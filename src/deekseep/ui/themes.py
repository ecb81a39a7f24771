"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Dark/light mode configuration

To add a new theme, define it here and add it to THEMES.
"""

from textual.theme import Theme

from ..settings import ColorScheme

# Catppuccin Mocha for the dark scheme
CATPPUCCIN_MOCHA = Theme(
    name="catppuccin-mocha",
    primary="#89b4fa",      # Blue - main accent, user bubbles
    secondary="#cba6f7",    # Mauve - secondary accent
    accent="#f9e2af",       # Yellow - math highlights
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",
    warning="#fab387",
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "block-cursor-foreground": "#11111b",
        "block-cursor-background": "#f5e0dc",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#cdd6f4",
        "input-cursor-foreground": "#11111b",
        "input-selection-background": "#89b4fa 30%",
        "border": "#45475a",
        "border-blurred": "#313244",
        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#89b4fa",
        "scrollbar-background": "#181825",
        "footer-foreground": "#bac2de",
        "footer-background": "#11111b",
        "footer-key-foreground": "#f9e2af",
        "footer-key-background": "#313244",
        "text-muted": "#6c7086",
    },
)

# Catppuccin Latte for the light scheme
CATPPUCCIN_LATTE = Theme(
    name="catppuccin-latte",
    primary="#1e66f5",
    secondary="#8839ef",
    accent="#df8e1d",
    foreground="#4c4f69",
    background="#eff1f5",
    success="#40a02b",
    warning="#fe640b",
    error="#d20f39",
    surface="#e6e9ef",
    panel="#dce0e8",
    dark=False,
    variables={
        "block-cursor-foreground": "#eff1f5",
        "block-cursor-background": "#dc8a78",
        "input-cursor-background": "#4c4f69",
        "input-cursor-foreground": "#eff1f5",
        "input-selection-background": "#1e66f5 30%",
        "border": "#9ca0b0",
        "border-blurred": "#bcc0cc",
        "scrollbar": "#bcc0cc",
        "scrollbar-hover": "#9ca0b0",
        "scrollbar-active": "#1e66f5",
        "scrollbar-background": "#dce0e8",
        "footer-foreground": "#5c5f77",
        "footer-background": "#e6e9ef",
        "footer-key-foreground": "#df8e1d",
        "footer-key-background": "#ccd0da",
        "text-muted": "#8c8fa1",
    },
)

THEMES: dict[ColorScheme, Theme] = {
    ColorScheme.DARK: CATPPUCCIN_MOCHA,
    ColorScheme.LIGHT: CATPPUCCIN_LATTE,
}


def theme_for(scheme: ColorScheme) -> Theme:
    """Theme registered for a color scheme."""
    return THEMES[scheme]
