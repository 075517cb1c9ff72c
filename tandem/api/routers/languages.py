from fastapi import APIRouter

from tandem.core import languages
from tandem.core.config import settings

router = APIRouter(prefix="/languages", tags=["languages"])


@router.get("")
def list_languages():
    return {
        "languages": [
            {"code": code, "label": entry["label"], "tts_lang": entry["tts_lang"]}
            for code, entry in languages.LANGUAGES.items()
        ],
        "set_choices": settings.SET_CHOICES,
        "default_sets": settings.DEFAULT_SETS,
        "difficulties": ["beginner", "intermediate", "advanced"],
    }


@router.get("/{code}/ui")
def ui_texts(code: str):
    # unknown codes get the English copy
    return {
        "code": code if languages.is_supported(code) else languages.FALLBACK,
        "texts": languages.ui_texts(code),
    }
