"""
Eitango – Reusable CustomTkinter widgets
=========================================
Shared UI primitives used across the list, quiz and settings screens.
"""

from __future__ import annotations

import customtkinter as ctk


# ---------------------------------------------------------------------------
# Colours / design tokens
# ---------------------------------------------------------------------------
class Theme:
    """Centralised colour palette – dark-mode first."""
    BG_DARK       = "#0f1117"
    BG_CARD       = "#1e2030"
    BG_CARD_HOVER = "#272a3d"
    ACCENT        = "#3b82f6"     # blue accent
    ACCENT_HOVER  = "#2f6bd0"
    SUCCESS       = "#43d9a2"
    SUCCESS_HOVER = "#35b888"
    DANGER        = "#f55a6a"
    DANGER_HOVER  = "#d44454"
    WARNING       = "#f5c842"
    TEXT_PRIMARY   = "#e2e4f0"
    TEXT_SECONDARY = "#8b8fa8"
    TEXT_MUTED     = "#5b5f78"
    BORDER         = "#2a2d40"
    FONT_FAMILY    = "Segoe UI"


def font(size: int = 13, weight: str = "normal") -> ctk.CTkFont:
    return ctk.CTkFont(family=Theme.FONT_FAMILY, size=size, weight=weight)


# ---------------------------------------------------------------------------
# Styled buttons
# ---------------------------------------------------------------------------
class AccentButton(ctk.CTkButton):
    """A consistently-styled accent button."""

    def __init__(self, master, text: str = "", command=None, **kw):
        kw.setdefault("fg_color", Theme.ACCENT)
        kw.setdefault("hover_color", Theme.ACCENT_HOVER)
        kw.setdefault("text_color", "#ffffff")
        kw.setdefault("corner_radius", 8)
        kw.setdefault("font", font(14, "bold"))
        kw.setdefault("height", 36)
        super().__init__(master, text=text, command=command, **kw)


class DangerButton(ctk.CTkButton):
    """Red-toned button for destructive or "incorrect" actions."""

    def __init__(self, master, text: str = "", command=None, **kw):
        kw.setdefault("fg_color", Theme.DANGER)
        kw.setdefault("hover_color", Theme.DANGER_HOVER)
        kw.setdefault("text_color", "#ffffff")
        kw.setdefault("corner_radius", 8)
        kw.setdefault("font", font(13))
        kw.setdefault("height", 32)
        super().__init__(master, text=text, command=command, **kw)


class SuccessButton(ctk.CTkButton):
    def __init__(self, master, text: str = "", command=None, **kw):
        kw.setdefault("fg_color", Theme.SUCCESS)
        kw.setdefault("hover_color", Theme.SUCCESS_HOVER)
        kw.setdefault("text_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 8)
        kw.setdefault("font", font(13, "bold"))
        kw.setdefault("height", 32)
        super().__init__(master, text=text, command=command, **kw)


class GhostButton(ctk.CTkButton):
    """Transparent button (navigation, secondary actions)."""

    def __init__(self, master, text: str = "", command=None, **kw):
        kw.setdefault("fg_color", "transparent")
        kw.setdefault("hover_color", Theme.BG_CARD_HOVER)
        kw.setdefault("text_color", Theme.TEXT_PRIMARY)
        kw.setdefault("border_width", 1)
        kw.setdefault("border_color", Theme.BORDER)
        kw.setdefault("corner_radius", 6)
        kw.setdefault("font", font(13))
        kw.setdefault("height", 32)
        super().__init__(master, text=text, command=command, **kw)


# ---------------------------------------------------------------------------
# Stat card (word count, added today)
# ---------------------------------------------------------------------------
class StatCard(ctk.CTkFrame):
    """Small rounded card that shows a label + large number."""

    def __init__(self, master, label: str = "", value: str = "0", color: str = Theme.ACCENT, **kw):
        kw.setdefault("fg_color", Theme.BG_CARD)
        kw.setdefault("corner_radius", 12)
        super().__init__(master, **kw)

        self._label = ctk.CTkLabel(
            self, text=label.upper(),
            font=font(11, "bold"),
            text_color=Theme.TEXT_MUTED,
        )
        self._label.pack(padx=16, pady=(10, 0), anchor="w")

        self._value = ctk.CTkLabel(
            self, text=value,
            font=font(24, "bold"),
            text_color=color,
        )
        self._value.pack(padx=16, pady=(2, 10), anchor="w")

    def set_value(self, v: str) -> None:
        self._value.configure(text=v)


# ---------------------------------------------------------------------------
# Separator
# ---------------------------------------------------------------------------
class Separator(ctk.CTkFrame):
    def __init__(self, master, **kw):
        kw.setdefault("fg_color", Theme.BORDER)
        kw.setdefault("height", 1)
        super().__init__(master, **kw)
