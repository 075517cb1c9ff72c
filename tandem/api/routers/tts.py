# tandem/api/routers/tts.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from tandem.core.errors import ServiceUnavailable
from tandem.schemas.tts import TTSRequest, TTSResponse
from tandem.services.tts.google_tts import GoogleTTSClient, get_tts_client, synthesize_cached

log = logging.getLogger("tts")
router = APIRouter(prefix="/tts", tags=["tts"])


@router.post("", response_model=TTSResponse)
async def tts(
    req: TTSRequest,
    x_req_id: Optional[str] = Header(None, alias="X-Req-Id"),  # client retry id
    client: GoogleTTSClient = Depends(get_tts_client),
):
    # only these two fields matter
    if not req.text or not req.tts_lang:
        raise HTTPException(status_code=400, detail="Missing text or ttsLang")
    try:
        audio = await synthesize_cached(client, req.text, req.tts_lang, x_req_id)
    except ServiceUnavailable as e:
        log.error("Google TTS error: %s", e.detail)
        raise HTTPException(status_code=502, detail="Google TTS server error")
    return TTSResponse(audio_content=audio)
