# tandem/utils/idempotency.py
from __future__ import annotations
import hashlib
from typing import Optional, Tuple
from cachetools import TTLCache

# --- Simple TTL caches (in-memory). For multi-process, swap to Redis. ---

RESP_TTL_SECONDS = 600
RESP_MAX = 2048
_response_cache = TTLCache(maxsize=RESP_MAX, ttl=RESP_TTL_SECONDS)

AUDIO_TTL_SECONDS = 3600
AUDIO_MAX = 512
_audio_by_content = TTLCache(maxsize=AUDIO_MAX, ttl=AUDIO_TTL_SECONDS)

def _sha256(s: str) -> str:
    h = hashlib.sha256()
    h.update(s.encode("utf-8"))
    return h.hexdigest()

def content_key(text: str, tts_lang: str) -> str:
    return _sha256(f"{tts_lang}\x00{text}")

def idempotency_hit(req_id: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Returns (hit, cached_audio) for a client request id (X-Req-Id).
    """
    if not req_id:
        return False, None
    if req_id in _response_cache:
        return True, _response_cache[req_id]
    return False, None

def idempotency_store(req_id: Optional[str], audio_b64: str) -> None:
    if req_id:
        _response_cache[req_id] = audio_b64

def audio_lookup(text: str, tts_lang: str) -> Optional[str]:
    """Same sentence in the same locale synthesizes to the same audio."""
    return _audio_by_content.get(content_key(text, tts_lang))

def audio_store(text: str, tts_lang: str, audio_b64: str) -> None:
    _audio_by_content[content_key(text, tts_lang)] = audio_b64

def clear() -> None:
    _response_cache.clear()
    _audio_by_content.clear()
