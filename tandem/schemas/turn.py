from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Literal, Optional

from tandem.core.languages import LanguageCode

Mode = Literal["native", "target"]
Difficulty = Literal["beginner", "intermediate", "advanced"]


class TurnRequest(BaseModel):
    """Body of POST /conversation. Wire names are camelCase."""
    model_config = ConfigDict(populate_by_name=True)

    mode: Mode
    native_language: LanguageCode = Field(..., alias="nativeLanguage")
    target_language: LanguageCode = Field(..., alias="targetLanguage")
    user_message: str = Field(..., alias="userMessage", examples=["나는 학교에 가요"])
    difficulty: Difficulty = "advanced"

    @field_validator("user_message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("userMessage must not be empty")
        return v

    @model_validator(mode="after")
    def _distinct_languages(self):
        if self.native_language == self.target_language:
            raise ValueError("nativeLanguage and targetLanguage must differ")
        return self


class TurnResult(BaseModel):
    """A validated reply. Fields unused by ``mode`` are None."""
    mode: Mode
    translated_sentence: Optional[str] = None
    original_sentence: Optional[str] = None
    corrected_sentence: Optional[str] = None
    correction_explanation: str = ""
    pronunciation_praise: str = ""
    pron_native: str = ""
    next_question_target: str
    next_question_native: Optional[str] = None

    @property
    def foreign_sentence(self) -> str:
        if self.mode == "native":
            return self.translated_sentence or ""
        return self.corrected_sentence or ""
