# tandem/services/tts/google_tts.py
from __future__ import annotations

import logging
from typing import Optional

import httpx

from tandem.core.config import settings
from tandem.core.errors import ServiceUnavailable
from tandem.utils.idempotency import (
    audio_lookup,
    audio_store,
    idempotency_hit,
    idempotency_store,
)

log = logging.getLogger("tts")


class GoogleTTSClient:
    """
    Google Cloud Text-to-Speech via the REST ``text:synthesize`` endpoint.

    Returns the base64 MP3 string exactly as Google sends it, so the router
    can pass it through without decoding.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.GOOGLE_TTS_API_KEY
        self.url = url or settings.GOOGLE_TTS_URL
        self.timeout = timeout if timeout is not None else settings.TTS_TIMEOUT
        self._transport = transport

    async def synthesize(self, text: str, tts_lang: str) -> str:
        payload = {
            "input": {"text": text},
            "voice": {"languageCode": tts_lang, "ssmlGender": "NEUTRAL"},
            "audioConfig": {"audioEncoding": "MP3"},
        }
        params = {"key": self.api_key} if self.api_key else {}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(self.url, params=params, json=payload)
        except httpx.HTTPError as e:
            raise ServiceUnavailable(f"Google TTS unreachable: {type(e).__name__}") from e

        if r.status_code >= 400:
            log.error("Google TTS HTTP %d: %s", r.status_code, r.text[:300])
            raise ServiceUnavailable("Google TTS server error")
        try:
            data = r.json()
        except ValueError:
            data = None
        audio = data.get("audioContent") if isinstance(data, dict) else None
        if not audio:
            raise ServiceUnavailable("No audio content from Google TTS")
        return audio


_client: Optional[GoogleTTSClient] = None


def get_tts_client() -> GoogleTTSClient:
    global _client
    if _client is None:
        _client = GoogleTTSClient()
    return _client


async def synthesize_cached(
    client: GoogleTTSClient, text: str, tts_lang: str, req_id: Optional[str] = None
) -> str:
    """Synthesize through the request-id and content caches."""
    hit, audio = idempotency_hit(req_id)
    if hit and audio:
        log.info("[TTS] req-id cache hit %s", req_id)
        return audio
    audio = audio_lookup(text, tts_lang)
    if audio is None:
        audio = await client.synthesize(text, tts_lang)
        audio_store(text, tts_lang, audio)
        log.info("[TTS] lang=%s chars=%d audio_b64=%d", tts_lang, len(text), len(audio))
    idempotency_store(req_id, audio)
    return audio
