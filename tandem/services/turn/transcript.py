# tandem/services/turn/transcript.py
from __future__ import annotations

import os


class TranscriptBuffer:
    """
    Running transcript built from speech-recognition events.

    Some platforms resend the whole utterance on every final event, others
    send only the new words. A final event that extends what is already
    committed contributes just its suffix; one that does not (the platform
    reset its utterance) replaces the committed text. Interim events only
    ever touch ``pending`` and are never merged.
    """

    def __init__(self, text: str = "") -> None:
        self.committed = text
        self.pending = ""

    def seed(self, text: str) -> None:
        self.committed = text or ""
        self.pending = ""

    def reset(self) -> None:
        self.seed("")

    def on_segment(self, transcript: str, is_final: bool) -> None:
        transcript = transcript or ""
        if not is_final:
            self.pending = transcript
            return

        self.pending = ""
        if not self.committed:
            self.committed = transcript
            return

        prefix = os.path.commonprefix([self.committed, transcript])
        if prefix == self.committed:
            self.committed += transcript[len(prefix):]
        else:
            self.committed = transcript

    def display(self) -> str:
        if self.pending:
            return f"{self.committed} {self.pending}" if self.committed else self.pending
        return self.committed

    def __repr__(self) -> str:
        return f"TranscriptBuffer(committed={self.committed!r}, pending={self.pending!r})"
