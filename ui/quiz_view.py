"""
Eitango – Quick test screen
============================
Ten random cards: reveal the answer, mark it right or wrong, see the score.
"""

from __future__ import annotations

import customtkinter as ctk

from core.config import settings
from core.preferences import PreferenceStore
from core.quiz import QuizSession, QuizState
from core.store import VocabularyStore
from ui.widgets import Theme, AccentButton, DangerButton, GhostButton, SuccessButton, font

GRADE_MESSAGES = {
    "perfect": "Perfect! 🎉",
    "excellent": "Excellent!",
    "good": "Well done!",
    "fair": "Keep going, almost there",
    "review": "Time to review",
}

GRADE_COLOURS = {
    "perfect": Theme.SUCCESS,
    "excellent": Theme.SUCCESS,
    "good": Theme.ACCENT,
    "fair": Theme.WARNING,
    "review": Theme.DANGER,
}


class QuizView(ctk.CTkFrame):
    """Quick-test tab driven by a QuizSession."""

    def __init__(self, master, store: VocabularyStore, preferences: PreferenceStore, **kw):
        kw.setdefault("fg_color", Theme.BG_DARK)
        kw.setdefault("corner_radius", 0)
        super().__init__(master, **kw)

        self._store = store
        self._prefs = preferences
        self._session: QuizSession = QuizSession()
        self.restart()

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    def restart(self) -> None:
        self._session.start(self._store.list_all(), settings.QUIZ_MAX_QUESTIONS)
        self._render()

    def _act(self, action) -> None:
        action()
        self._render()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _clear(self) -> None:
        for w in self.winfo_children():
            w.destroy()

    def _render(self) -> None:
        self._clear()
        state = self._session.state
        if state is QuizState.EMPTY:
            self._render_empty()
        elif state is QuizState.COMPLETED:
            self._render_results()
        else:
            self._render_question()

    def _render_empty(self) -> None:
        ctk.CTkLabel(
            self, text="No vocabulary to test",
            font=font(20, "bold"), text_color=Theme.TEXT_PRIMARY,
        ).pack(pady=(120, 8))
        ctk.CTkLabel(
            self, text="Add or sync words from the List tab first.",
            font=font(14), text_color=Theme.TEXT_SECONDARY,
        ).pack()
        GhostButton(self, text="Try again", command=self.restart).pack(pady=20)

    def _render_question(self) -> None:
        s = self._session
        item = s.current

        top = ctk.CTkFrame(self, fg_color="transparent")
        top.pack(fill="x", padx=24, pady=(18, 0))
        ctk.CTkLabel(
            top, text=f"Question {s.cursor + 1} / {s.total}",
            font=font(15, "bold"), text_color=Theme.TEXT_PRIMARY,
        ).pack(side="left")
        ctk.CTkLabel(
            top, text=f"✓ {s.correct_count}", font=font(15, "bold"), text_color=Theme.SUCCESS,
        ).pack(side="right")
        bar = ctk.CTkProgressBar(self, progress_color=Theme.ACCENT)
        bar.set(s.progress)
        bar.pack(fill="x", padx=24, pady=(8, 0))

        if self._prefs.show_japanese_first:
            prompt, answer = item.japanese, item.english
        else:
            prompt, answer = item.english, item.japanese

        card = ctk.CTkFrame(self, fg_color=Theme.BG_CARD, corner_radius=16)
        card.pack(fill="x", padx=24, pady=(24, 12))
        ctk.CTkLabel(
            card, text=prompt, font=font(36, "bold"),
            text_color=Theme.TEXT_PRIMARY, wraplength=560,
        ).pack(padx=20, pady=36)

        answer_box = ctk.CTkFrame(self, fg_color=Theme.BG_CARD, corner_radius=16)
        answer_box.pack(fill="x", padx=24, pady=(0, 12))
        if s.revealed:
            ctk.CTkLabel(
                answer_box, text=answer, font=font(30, "bold"),
                text_color=Theme.SUCCESS, wraplength=560,
            ).pack(padx=20, pady=(24, 12))
            judge = ctk.CTkFrame(answer_box, fg_color="transparent")
            judge.pack(pady=(0, 18))
            SuccessButton(judge, text="Correct", width=140,
                          command=lambda: self._act(s.mark_correct)).pack(side="left", padx=6)
            DangerButton(judge, text="Incorrect", width=140,
                         command=lambda: self._act(s.mark_incorrect_or_next)).pack(side="left", padx=6)
        else:
            AccentButton(answer_box, text="Show answer",
                         command=lambda: self._act(s.reveal)).pack(pady=40)

        nav = ctk.CTkFrame(self, fg_color="transparent")
        nav.pack(fill="x", padx=24, pady=(4, 18))
        back = GhostButton(nav, text="‹ Back", command=lambda: self._act(s.previous))
        back.pack(side="left")
        if s.cursor == 0:
            back.configure(state="disabled")
        nxt = GhostButton(nav, text="Next ›", command=lambda: self._act(s.mark_incorrect_or_next))
        nxt.pack(side="right")
        if not s.revealed:
            nxt.configure(state="disabled")

    def _render_results(self) -> None:
        s = self._session
        grade = s.grade()
        colour = GRADE_COLOURS[grade]

        ctk.CTkLabel(
            self, text="Test complete!", font=font(28, "bold"), text_color=Theme.TEXT_PRIMARY,
        ).pack(pady=(80, 16))
        ctk.CTkLabel(
            self, text=f"{s.score} / {s.total}", font=font(48, "bold"), text_color=colour,
        ).pack()
        ctk.CTkLabel(
            self, text=f"{int(s.percentage * 100)}%", font=font(32), text_color=colour,
        ).pack(pady=(4, 12))
        ctk.CTkLabel(
            self, text=GRADE_MESSAGES[grade], font=font(18), text_color=Theme.TEXT_SECONDARY,
        ).pack()
        AccentButton(self, text="⟳  Test again", command=self.restart).pack(pady=30)
