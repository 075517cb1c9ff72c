# tandem/api/routers/generate.py
import logging

from fastapi import APIRouter, Depends, HTTPException

from tandem.core.errors import InvalidResponse
from tandem.schemas.generate import GenerateRequest, GenerateResponse
from tandem.services.feedback.service import FeedbackService, get_feedback_service
from tandem.services.llm.openai_client import LLMError

router = APIRouter(prefix="/generate", tags=["generate"])
log = logging.getLogger("generate")


@router.post("", response_model=GenerateResponse)
async def generate(req: GenerateRequest, svc: FeedbackService = Depends(get_feedback_service)):
    if not req.native_text or not req.native_lang or not req.target_lang:
        raise HTTPException(status_code=400, detail="Missing nativeText, nativeLang or targetLang")
    try:
        out = await svc.generate_sentence(req.native_text, req.native_lang, req.target_lang)
    except (LLMError, InvalidResponse) as e:
        log.error("Generate API error: %s", e)
        raise HTTPException(status_code=502, detail="Generate API server error")
    return GenerateResponse(**out)
