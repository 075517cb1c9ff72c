from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from tandem.schemas.turn import Difficulty, Mode, TurnResult


class SessionCreate(BaseModel):
    # reported once by the client at setup
    recognition_supported: bool = True
    native_language: Optional[str] = Field(None, examples=["ko"])


class SessionOut(BaseModel):
    id: str
    step: str
    native_language: str
    target_language: str
    answer_mode: Mode
    answer_language: str
    difficulty: Difficulty
    total_sets: int
    current_set_index: int
    current_question_target: str
    current_question_native: Optional[str] = None
    last_turn_result: Optional[TurnResult] = None
    input_text: str
    foreign_text: str
    pron_display: str
    listening: bool
    recognition_supported: bool
    recognition_lang: str
    completed: bool


class LanguageReq(BaseModel):
    code: str


class ConfirmNativeReq(BaseModel):
    code: Optional[str] = None


class DifficultyReq(BaseModel):
    difficulty: str


class SetsReq(BaseModel):
    total_sets: int


class AnswerModeReq(BaseModel):
    mode: str


class InputReq(BaseModel):
    text: str = ""


class ListenStartReq(BaseModel):
    resume: bool = False


class SegmentReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transcript: str
    is_final: bool = Field(False, alias="isFinal")


class SegmentOut(BaseModel):
    accepted: bool
    input_text: str


class TurnSubmitReq(BaseModel):
    # defaults to the current answer box
    text: Optional[str] = None


class TurnOut(BaseModel):
    result: TurnResult
    completed: bool
    session: SessionOut


class SpeechOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    audio_content: str = Field(..., alias="audioContent")
    tts_lang: str = Field(..., alias="ttsLang")
    text: str
