"""
Theme management and styling for the application.
"""
from PyQt5.QtWidgets import QWidget
from .models import ThemeColors


class ThemeManager:
    """Manages application styling."""

    DEFAULT_THEME = ThemeColors(
        # Backgrounds
        bg_primary="#ffffff",
        bg_secondary="#f0f0f0",
        bg_toolbar="#808080",

        # Text
        text_primary="#1e1e1e",
        text_muted="#7A899C",

        # Accent
        accent_primary="#4a9eff",
        accent_hover="#e6f0ff",

        # Borders
        border_primary="#cccccc",
    )

    @classmethod
    def apply_theme(cls, widget: QWidget, theme: ThemeColors = None) -> None:
        """
        Apply a theme to a widget and its children.

        Args:
            widget: Widget to style
            theme: Colors to use, defaults to DEFAULT_THEME
        """
        widget.setStyleSheet(cls._generate_stylesheet(theme or cls.DEFAULT_THEME))

    @classmethod
    def _generate_stylesheet(cls, theme: ThemeColors) -> str:
        """
        Generate a complete stylesheet from theme colors.

        Args:
            theme: Theme colors to use

        Returns:
            Complete CSS stylesheet string
        """
        return f"""
            /* --- GENERAL STYLES --- */
            QMainWindow, QDialog {{
                background-color: {theme.bg_primary};
                color: {theme.text_primary};
            }}

            /* --- TOOLBAR --- */
            QFrame#TopFrame {{
                background-color: {theme.bg_toolbar};
                border: none;
            }}
            QFrame#TopFrame QToolButton {{
                background-color: {theme.bg_primary};
                color: {theme.text_primary};
                border: none;
                border-radius: 8px;
                padding: 6px;
            }}
            QFrame#TopFrame QToolButton:hover {{
                background-color: {theme.accent_hover};
            }}
            QFrame#TopFrame QToolButton:checked {{
                background-color: {theme.accent_primary};
                color: white;
            }}

            /* --- DOCUMENT AREA --- */
            QScrollArea, QWidget#PageContainer {{
                background-color: {theme.bg_secondary};
                border: none;
            }}

            /* --- INPUTS --- */
            QLineEdit {{
                background-color: {theme.bg_primary};
                border: 1px solid {theme.border_primary};
                border-radius: 6px;
                padding: 6px 10px;
                color: {theme.text_primary};
            }}
            QLineEdit:focus {{
                border: 1px solid {theme.accent_primary};
            }}

            /* --- STATUS BAR --- */
            QStatusBar {{
                color: {theme.text_muted};
            }}
        """
