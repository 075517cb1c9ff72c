# tandem/main.py

"""
Main FastAPI application entrypoint for the Tandem practice API.

This file is responsible for:
  - Creating the FastAPI app instance.
  - Configuring logging.
  - Enabling CORS so the browser client can call the API.
  - Registering all routers (modular endpoint groups).
  - Exposing a simple root endpoint.
"""

from dotenv import load_dotenv
load_dotenv()  # will read .env in project root

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tandem.core.config import settings
from tandem.core.logging import configure_logging
from tandem.core.version import APP_NAME, APP_VERSION
from tandem.api.routers import (
    health,
    languages,
    conversation,
    generate,
    tts,
    sessions,
)
from tandem.lifespan import lifespan

# ---------------------------------------------------------------------
# 1. Configure logging
# ---------------------------------------------------------------------
# Controlled by settings.LOG_LEVEL (e.g. "INFO", "DEBUG").
configure_logging(settings.LOG_LEVEL)


# ---------------------------------------------------------------------
# 2. Create FastAPI app instance
# ---------------------------------------------------------------------
app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------
# 3. Configure CORS
# ---------------------------------------------------------------------
# Explicit origins only; credentials are not used (no auth).
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------
# 4. Register Routers
# ---------------------------------------------------------------------
# Example final paths:
#   - /health                   (no prefix, good for LB checks)
#   - /api/languages            (language table, UI copy)
#   - /api/conversation         (feedback service: one turn)
#   - /api/generate             (single sentence + pronunciation)
#   - /api/tts                  (speech synthesis passthrough)
#   - /api/sessions/...         (practice session state machine)
# ---------------------------------------------------------------------
app.include_router(health.router)
app.include_router(languages.router,    prefix=settings.API_PREFIX)
app.include_router(conversation.router, prefix=settings.API_PREFIX)
app.include_router(generate.router,     prefix=settings.API_PREFIX)
app.include_router(tts.router,          prefix=settings.API_PREFIX)
app.include_router(sessions.router,     prefix=settings.API_PREFIX)


@app.get("/", include_in_schema=False)
def root():
    return {
        "ok": True,
        "name": APP_NAME,
        "health": "/health",
        "docs": "/docs",
        "api_prefix": settings.API_PREFIX,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tandem.main:app", host="0.0.0.0", port=8000, reload=settings.ENV == "dev")
