"""
Eitango – Main application window
==================================
Wires the store, preferences, sync reconciler and remote source into the
List / Quick Test / Settings tabs.
"""

from __future__ import annotations

import customtkinter as ctk
from sqlalchemy.orm import Session

from core.config import settings
from core.preferences import PreferenceStore
from core.remote import RemoteVocabularySource
from core.store import VocabularyStore
from core.sync import SyncReconciler
from ui.widgets import Theme
from ui.list_view import ListView
from ui.quiz_view import QuizView
from ui.settings_view import SettingsView


class EitangoApp(ctk.CTk):
    """Root application window."""

    APP_TITLE = f"{settings.APP_NAME} — English ⇄ Japanese"
    WIDTH = 720
    HEIGHT = 820

    def __init__(self, session: Session, source: RemoteVocabularySource | None = None) -> None:
        super().__init__()

        # ── Window setup ──
        self.title(self.APP_TITLE)
        self.geometry(f"{self.WIDTH}x{self.HEIGHT}")
        self.minsize(520, 640)
        self.configure(fg_color=Theme.BG_DARK)

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # ── Core objects ──
        self._store = VocabularyStore(session)
        self._store.seed_if_empty()
        self._prefs = PreferenceStore(session)
        self._source = source or RemoteVocabularySource()
        self._reconciler = SyncReconciler(self._store, self._prefs)

        # ── Tabs ──
        self._tabs = ctk.CTkTabview(self, fg_color=Theme.BG_DARK, command=self._on_tab)
        self._tabs.pack(fill="both", expand=True, padx=8, pady=8)
        for name in ("List", "Quick Test", "Settings"):
            self._tabs.add(name)

        self._list_view = ListView(
            self._tabs.tab("List"),
            store=self._store,
            preferences=self._prefs,
            reconciler=self._reconciler,
            source=self._source,
        )
        self._list_view.pack(fill="both", expand=True)

        self._quiz_view = QuizView(self._tabs.tab("Quick Test"), store=self._store, preferences=self._prefs)
        self._quiz_view.pack(fill="both", expand=True)

        SettingsView(
            self._tabs.tab("Settings"),
            preferences=self._prefs,
            on_change=self._list_view.refresh,
        ).pack(fill="both", expand=True)

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def _on_tab(self) -> None:
        """Entering the quiz tab starts a fresh session."""
        if self._tabs.get() == "Quick Test":
            self._quiz_view.restart()

    def _on_close(self) -> None:
        self._source.close()
        self._store.session.close()
        self.destroy()
