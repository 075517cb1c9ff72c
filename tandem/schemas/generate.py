from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    native_text: str | None = Field(None, alias="nativeText")
    native_lang: str | None = Field(None, alias="nativeLang")
    target_lang: str | None = Field(None, alias="targetLang")


class GenerateResponse(BaseModel):
    sentence: str
    pron_native: str
