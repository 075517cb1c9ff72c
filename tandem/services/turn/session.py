# tandem/services/turn/session.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from tandem.core import languages
from tandem.core.errors import InvalidTransition
from tandem.schemas.turn import TurnResult
from tandem.services.turn.recognition import Recognizer, make_recognizer
from tandem.services.turn.transcript import TranscriptBuffer

log = logging.getLogger("session")

MODES = ("native", "target")
DIFFICULTIES = ("beginner", "intermediate", "advanced")


class Step(str, Enum):
    CHOOSING_NATIVE = "choosing-native"
    CONFIGURING = "configuring"
    PRACTICING = "practicing"


class PracticeSession:
    """
    One learner's practice session.

    choosing-native -> configuring -> practicing -> ... -> configuring

    Each successful turn moves to the next set; the last one ends the session
    and returns to configuring. ``epoch`` changes whenever a practice run is
    started or abandoned, so a reply that arrives for an older run can be
    recognised and dropped.
    """

    def __init__(
        self,
        native_language: str = "ko",
        target_language: str = "en",
        total_sets: int = 2,
        difficulty: str = "advanced",
        set_choices: Iterable[int] = (2, 4, 6),
        recognizer: Optional[Recognizer] = None,
    ) -> None:
        self.set_choices = tuple(set_choices)
        self.step = Step.CHOOSING_NATIVE
        self.native_language = self._checked_code(native_language)
        self.target_language = self._checked_code(target_language)
        if self.target_language == self.native_language:
            self.target_language = languages.other_than(self.native_language)
        self.total_sets = self._checked_sets(total_sets)
        self.difficulty = self._checked_difficulty(difficulty)
        self.answer_mode = "native"

        self.current_set_index = 0
        self.current_question_target = ""
        self.current_question_native: Optional[str] = ""
        self.last_turn_result: Optional[TurnResult] = None
        self.foreign_text = ""
        self.pron_display = ""
        self.completed = False
        self.epoch = 0

        self.buffer = TranscriptBuffer()
        self.recognizer = recognizer or make_recognizer(True)
        self.recognizer.subscribe(self.buffer.on_segment)

    # ------------------------------------------------------------------ guards

    def _require(self, *steps: Step) -> None:
        if self.step not in steps:
            allowed = ", ".join(s.value for s in steps)
            raise InvalidTransition(f"not allowed in step {self.step.value!r} (needs {allowed})")

    @staticmethod
    def _checked_code(code: str) -> str:
        if not languages.is_supported(code):
            raise ValueError(f"unsupported language {code!r}")
        return code

    def _checked_sets(self, n: int) -> int:
        if n not in self.set_choices:
            raise ValueError(f"total sets must be one of {list(self.set_choices)}")
        return n

    @staticmethod
    def _checked_difficulty(d: str) -> str:
        if d not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {list(DIFFICULTIES)}")
        return d

    # ------------------------------------------------------------------ setup

    def set_native_language(self, code: str) -> None:
        self._require(Step.CHOOSING_NATIVE, Step.CONFIGURING)
        self.native_language = self._checked_code(code)
        if self.target_language == self.native_language:
            self.target_language = languages.other_than(self.native_language)

    def confirm_native(self, code: Optional[str] = None) -> None:
        self._require(Step.CHOOSING_NATIVE)
        if code is not None:
            self.set_native_language(code)
        self.step = Step.CONFIGURING

    def set_target_language(self, code: str) -> None:
        self._require(Step.CHOOSING_NATIVE, Step.CONFIGURING)
        code = self._checked_code(code)
        if code == self.native_language:
            raise InvalidTransition("target language must differ from native language")
        self.target_language = code

    def set_difficulty(self, difficulty: str) -> None:
        self._require(Step.CHOOSING_NATIVE, Step.CONFIGURING)
        self.difficulty = self._checked_difficulty(difficulty)

    def set_total_sets(self, n: int) -> None:
        self._require(Step.CHOOSING_NATIVE, Step.CONFIGURING)
        self.total_sets = self._checked_sets(n)

    def set_answer_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"answer mode must be one of {list(MODES)}")
        if mode != self.answer_mode:
            # recognition locale follows the answer language
            self.recognizer.stop()
        self.answer_mode = mode

    @property
    def answer_language(self) -> str:
        return self.native_language if self.answer_mode == "native" else self.target_language

    # ------------------------------------------------------------------ practice

    def start(self) -> None:
        self._require(Step.CONFIGURING)
        self.step = Step.PRACTICING
        self.current_set_index = 0
        self.current_question_target = languages.question(self.target_language, 0)
        self.current_question_native = languages.question(self.native_language, 0)
        self.last_turn_result = None
        self.completed = False
        self.epoch += 1
        self._reset_transient()
        log.info("practice started %s->%s sets=%d difficulty=%s",
                 self.native_language, self.target_language, self.total_sets, self.difficulty)

    def apply_turn(self, result: TurnResult, epoch: Optional[int] = None) -> bool:
        """Advance one set. Returns True when this turn completed the session."""
        self._require(Step.PRACTICING)
        if epoch is not None and epoch != self.epoch:
            raise InvalidTransition("reply belongs to an abandoned practice run")

        self.last_turn_result = result
        self.current_question_target = result.next_question_target
        self.current_question_native = result.next_question_native
        self.current_set_index += 1

        if self.current_set_index >= self.total_sets:
            self.step = Step.CONFIGURING
            self.current_set_index = 0
            self.completed = True
            self._reset_transient()
            log.info("practice completed after %d sets", self.total_sets)
            return True

        self.recognizer.stop()
        self.buffer.reset()
        self.foreign_text = result.foreign_sentence
        self.pron_display = result.pron_native
        return False

    def exit_to_setup(self) -> None:
        self._require(Step.PRACTICING)
        self.step = Step.CONFIGURING
        self.current_set_index = 0
        self.epoch += 1
        self._reset_transient()

    def _reset_transient(self) -> None:
        self.recognizer.stop()
        self.buffer.reset()
        self.foreign_text = ""
        self.pron_display = ""

    # ------------------------------------------------------------------ answer box

    @property
    def input_text(self) -> str:
        return self.buffer.display()

    def set_input(self, text: str) -> None:
        self._require(Step.PRACTICING)
        self.buffer.seed(text)

    def start_listening(self, resume: bool = False) -> None:
        self._require(Step.PRACTICING)
        lang = languages.tts_lang(self.answer_language)
        self.recognizer.start(lang)
        if resume:
            self.buffer.seed(self.buffer.display())
        else:
            self.buffer.reset()

    def stop_listening(self) -> None:
        self.recognizer.stop()

    def push_segment(self, transcript: str, is_final: bool) -> bool:
        return self.recognizer.push(transcript, is_final)

    # ------------------------------------------------------------------ view

    def snapshot(self) -> Dict[str, Any]:
        return {
            "step": self.step.value,
            "native_language": self.native_language,
            "target_language": self.target_language,
            "answer_mode": self.answer_mode,
            "answer_language": self.answer_language,
            "difficulty": self.difficulty,
            "total_sets": self.total_sets,
            "current_set_index": self.current_set_index,
            "current_question_target": self.current_question_target,
            "current_question_native": self.current_question_native,
            "last_turn_result": self.last_turn_result,
            "input_text": self.input_text,
            "foreign_text": self.foreign_text,
            "pron_display": self.pron_display,
            "listening": self.recognizer.listening,
            "recognition_supported": self.recognizer.supported,
            "recognition_lang": languages.tts_lang(self.answer_language),
            "completed": self.completed,
        }
