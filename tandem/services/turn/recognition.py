# tandem/services/turn/recognition.py
"""
Speech-recognition capability.

The recognizer itself lives on the client (browser speech API); the server
sees it as a stream of ``(transcript, is_final)`` events. ``PushRecognizer``
is fed those events and dispatches them to subscribers only while the shared
``ListeningCell`` says so. ``NullRecognizer`` stands in when the platform has
no recognition at all.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, List

from tandem.core.errors import RecognitionUnsupported

log = logging.getLogger("recognition")

SegmentHandler = Callable[[str, bool], None]


class ListeningCell:
    """The one place that says whether the microphone is on."""

    def __init__(self) -> None:
        self.value = False

    def __bool__(self) -> bool:
        return self.value


class Recognizer(ABC):
    supported = True

    def __init__(self, cell: ListeningCell | None = None) -> None:
        self.cell = cell or ListeningCell()
        self.lang = ""
        self._handlers: List[SegmentHandler] = []

    def subscribe(self, handler: SegmentHandler) -> None:
        self._handlers.append(handler)

    @property
    def listening(self) -> bool:
        return self.cell.value

    @abstractmethod
    def start(self, lang: str) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...

    @abstractmethod
    def push(self, transcript: str, is_final: bool) -> bool:
        ...


class PushRecognizer(Recognizer):
    """Recognizer fed by client-side recognition events."""

    def start(self, lang: str) -> None:
        self.lang = lang
        self.cell.value = True
        log.debug("listening started lang=%s", lang)

    def stop(self) -> None:
        # flipped before returning so nothing is dispatched after stop
        self.cell.value = False
        log.debug("listening stopped")

    def push(self, transcript: str, is_final: bool) -> bool:
        """Dispatch one event. Returns False when it was dropped."""
        if not self.cell.value:
            return False
        for handler in list(self._handlers):
            handler(transcript, is_final)
        return True


class NullRecognizer(Recognizer):
    supported = False

    def start(self, lang: str) -> None:
        raise RecognitionUnsupported()

    def stop(self) -> None:
        self.cell.value = False

    def push(self, transcript: str, is_final: bool) -> bool:
        return False


def make_recognizer(supported: bool) -> Recognizer:
    return PushRecognizer() if supported else NullRecognizer()
