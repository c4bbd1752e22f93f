"""
Eitango – Settings screen
==========================
Presentation preferences and app information.
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from core.config import settings
from core.preferences import DISPLAY_ORDERS, PreferenceStore
from ui.widgets import Theme, Separator, font

_ORDER_LABELS = {"english": "Alphabetical", "newest": "Newest first"}


class SettingsView(ctk.CTkFrame):
    def __init__(
        self,
        master,
        preferences: PreferenceStore,
        on_change: Callable[[], None] | None = None,
        **kw,
    ):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        self._prefs = preferences
        self._on_change = on_change

        self._section("Study")
        self._jp_first = ctk.BooleanVar(value=preferences.show_japanese_first)
        ctk.CTkSwitch(
            self, text="Show Japanese first", variable=self._jp_first,
            command=self._toggle_japanese_first, font=font(14),
        ).pack(anchor="w", padx=28, pady=6)

        row = ctk.CTkFrame(self, fg_color="transparent")
        row.pack(fill="x", padx=28, pady=6)
        ctk.CTkLabel(row, text="List order", font=font(14)).pack(side="left")
        self._order = ctk.CTkOptionMenu(
            row, values=[_ORDER_LABELS[o] for o in DISPLAY_ORDERS],
            command=self._choose_order,
        )
        self._order.set(_ORDER_LABELS[preferences.display_order])
        self._order.pack(side="right")

        self._section("About")
        ctk.CTkLabel(
            self, text=f"{settings.APP_NAME}  ·  version {settings.APP_VERSION}",
            font=font(14), text_color=Theme.TEXT_SECONDARY,
        ).pack(anchor="w", padx=28, pady=4)
        ctk.CTkLabel(
            self,
            text="A simple English–Japanese vocabulary trainer with a word list, "
                 "a quick test and cloud sync.",
            font=font(13), text_color=Theme.TEXT_MUTED, wraplength=520, justify="left",
        ).pack(anchor="w", padx=28, pady=4)

    def _section(self, title: str) -> None:
        ctk.CTkLabel(
            self, text=title.upper(), font=font(11, "bold"), text_color=Theme.TEXT_MUTED,
        ).pack(anchor="w", padx=28, pady=(22, 4))
        Separator(self).pack(fill="x", padx=28, pady=(0, 6))

    def _toggle_japanese_first(self) -> None:
        self._prefs.show_japanese_first = self._jp_first.get()
        self._changed()

    def _choose_order(self, label: str) -> None:
        order = next(o for o, text in _ORDER_LABELS.items() if text == label)
        self._prefs.display_order = order
        self._changed()

    def _changed(self) -> None:
        if self._on_change:
            self._on_change()
