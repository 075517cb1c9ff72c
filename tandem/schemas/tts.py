# tandem/schemas/tts.py
from pydantic import BaseModel, ConfigDict, Field


class TTSRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # optional here so the router can answer 400 like the rest of the service API
    text: str | None = Field(None, max_length=2000)
    tts_lang: str | None = Field(None, alias="ttsLang", examples=["en-US", "ko-KR"])


class TTSResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    audio_content: str = Field(..., alias="audioContent", description="base64 MP3")
