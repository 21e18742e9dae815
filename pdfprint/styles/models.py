from dataclasses import dataclass


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    # Background colors
    bg_primary: str
    bg_secondary: str
    bg_toolbar: str

    # Text colors
    text_primary: str
    text_muted: str

    # Accent colors
    accent_primary: str
    accent_hover: str

    # Border colors
    border_primary: str
