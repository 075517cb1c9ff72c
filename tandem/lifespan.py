# tandem/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from tandem.core.config import settings

log = logging.getLogger("lifespan")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # the app still serves language tables and sessions without keys
    if not settings.OPENAI_API_KEY and not settings.FEEDBACK_SERVICE_URL:
        log.warning("[lifespan] OPENAI_API_KEY not set; feedback turns will fail")
    if not settings.GOOGLE_TTS_API_KEY:
        log.warning("[lifespan] GOOGLE_TTS_API_KEY not set; speech playback will fail")
    yield
