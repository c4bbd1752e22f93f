"""
Eitango – Vocabulary list screen
=================================
Searchable list of every entry with per-row delete, counters, and the
"sync from cloud" button.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from tkinter import messagebox
from typing import List

import customtkinter as ctk

from core.errors import EitangoError, FetchError, SyncFailed
from core.preferences import PreferenceStore
from core.remote import RemoteVocabularyRecord, RemoteVocabularySource
from core.store import VocabularyStore
from core.sync import SyncReconciler, failure_summary
from db.models import VocabularyItem
from ui.widgets import Theme, AccentButton, DangerButton, StatCard, Separator, font

log = logging.getLogger(__name__)


class ListView(ctk.CTkFrame):
    """List tab: search, delete, sync."""

    def __init__(
        self,
        master,
        store: VocabularyStore,
        preferences: PreferenceStore,
        reconciler: SyncReconciler,
        source: RemoteVocabularySource,
        **kw,
    ):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        self._store = store
        self._prefs = preferences
        self._reconciler = reconciler
        self._source = source
        self._syncing = False

        self._build_header()
        Separator(self).pack(fill="x", padx=20, pady=(12, 0))
        self._rows = ctk.CTkScrollableFrame(self, fg_color="transparent")
        self._rows.pack(fill="both", expand=True, padx=12, pady=8)

        self._unsubscribe = store.subscribe(self.refresh)
        self.refresh()

    def destroy(self):
        self._unsubscribe()
        super().destroy()

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, fg_color="transparent")
        header.pack(fill="x", padx=20, pady=(18, 0))

        sync_row = ctk.CTkFrame(header, fg_color="transparent")
        sync_row.pack(fill="x")
        self._sync_btn = AccentButton(sync_row, text="☁  Sync from cloud", command=self._on_sync)
        self._sync_btn.pack(side="left")
        self._last_sync = ctk.CTkLabel(
            sync_row, text="", font=font(12), text_color=Theme.TEXT_SECONDARY,
        )
        self._last_sync.pack(side="left", padx=12)

        stats = ctk.CTkFrame(header, fg_color="transparent")
        stats.pack(fill="x", pady=(12, 0))
        self._total_card = StatCard(stats, label="Words")
        self._total_card.pack(side="left", padx=(0, 8))
        self._today_card = StatCard(stats, label="Added today", color=Theme.SUCCESS)
        self._today_card.pack(side="left")

        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self.refresh())
        ctk.CTkEntry(
            header, textvariable=self._search_var,
            placeholder_text="Search english or japanese…", height=34,
        ).pack(fill="x", pady=(12, 0))

    def _build_row(self, item: VocabularyItem, japanese_first: bool) -> None:
        row = ctk.CTkFrame(self._rows, fg_color=Theme.BG_CARD, corner_radius=8)
        row.pack(fill="x", pady=3)

        first, second = (item.japanese, item.english) if japanese_first else (item.english, item.japanese)
        ctk.CTkLabel(
            row, text=first, font=font(15, "bold"), text_color=Theme.TEXT_PRIMARY, anchor="w",
        ).pack(side="left", padx=(14, 8), pady=8)
        ctk.CTkLabel(
            row, text=second, font=font(14), text_color=Theme.TEXT_SECONDARY, anchor="w",
        ).pack(side="left", padx=8)
        DangerButton(
            row, text="Delete", width=70, command=lambda i=item.id: self._on_delete(i),
        ).pack(side="right", padx=10, pady=6)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        for w in self._rows.winfo_children():
            w.destroy()

        items = self._ordered(self._store.search(self._search_var.get()))
        japanese_first = self._prefs.show_japanese_first
        if not items:
            ctk.CTkLabel(
                self._rows, text="No vocabulary yet – try syncing from the cloud.",
                font=font(14), text_color=Theme.TEXT_MUTED,
            ).pack(pady=40)
        for item in items:
            self._build_row(item, japanese_first)

        self._total_card.set_value(str(self._store.count()))
        self._today_card.set_value(str(self._store.count_added_on(date.today())))
        last = self._prefs.last_sync_at
        self._last_sync.configure(
            text=f"Last sync: {last.astimezone():%Y-%m-%d %H:%M}" if last else "Never synced",
        )

    def _ordered(self, items: List[VocabularyItem]) -> List[VocabularyItem]:
        if self._prefs.display_order == "newest":
            return sorted(items, key=_created_key, reverse=True)
        return items

    def _on_delete(self, entry_id: str) -> None:
        self._store.delete(entry_id)
        try:
            self._store.save()
        except EitangoError as exc:
            messagebox.showerror("Delete failed", str(exc))

    # ------------------------------------------------------------------
    # Sync: fetch on a worker thread, merge on the Tk thread
    # ------------------------------------------------------------------

    def _on_sync(self) -> None:
        if self._syncing:
            return
        self._syncing = True
        self._sync_btn.configure(state="disabled", text="Syncing…")
        threading.Thread(target=self._fetch, daemon=True).start()

    def _fetch(self) -> None:
        try:
            snapshot = self._source.fetch_snapshot()
        except FetchError as exc:
            message = failure_summary(SyncFailed(exc))
            self.after(0, lambda: self._finish_sync(message, error=True))
            return
        except Exception as exc:
            log.exception("Unexpected error while fetching vocabulary")
            message = f"Sync failed: {exc}"
            self.after(0, lambda: self._finish_sync(message, error=True))
            return
        self.after(0, lambda: self._merge(snapshot))

    def _merge(self, snapshot: List[RemoteVocabularyRecord]) -> None:
        message, error = "Sync failed.", True
        try:
            result = self._reconciler.reconcile(snapshot)
            message, error = result.summary(), False
        except EitangoError as exc:
            message = failure_summary(exc)
        finally:
            self._finish_sync(message, error=error)

    def _finish_sync(self, message: str, error: bool = False) -> None:
        self._syncing = False
        self._sync_btn.configure(state="normal", text="☁  Sync from cloud")
        self.refresh()
        if error:
            log.warning("Cloud sync failed: %s", message)
            messagebox.showerror("Sync failed", message)
        else:
            messagebox.showinfo("Sync", message)


def _created_key(item: VocabularyItem) -> datetime:
    # rows read back from SQLite are naive, freshly added ones are aware
    if item.created_at is None:
        return datetime.min
    return item.created_at.replace(tzinfo=None)
