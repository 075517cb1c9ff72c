# tandem/services/turn/orchestrator.py
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

import httpx

from tandem.core.config import settings
from tandem.core.errors import EmptyInput, ServiceUnavailable, TurnInFlight
from tandem.schemas.turn import TurnRequest, TurnResult
from tandem.services.feedback.service import FeedbackService, get_feedback_service
from tandem.services.llm.openai_client import LLMError
from tandem.services.turn.contract import parse_body, validate_result
from tandem.services.turn.session import PracticeSession

log = logging.getLogger("orchestrator")

Body = Union[str, bytes]


# --- Transports ------------------------------------------------------------------

class FeedbackTransport(ABC):
    """Delivers a TurnRequest to the feedback service and returns the raw body."""

    @abstractmethod
    async def send(self, req: TurnRequest) -> Body:
        ...


class HttpFeedbackTransport(FeedbackTransport):
    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def send(self, req: TurnRequest) -> Body:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(self.url, json=req.model_dump(by_alias=True))
        except httpx.HTTPError as e:
            raise ServiceUnavailable(f"feedback service unreachable: {type(e).__name__}") from e
        if r.status_code >= 400:
            log.warning("feedback service HTTP %d: %s", r.status_code, r.text[:300])
            raise ServiceUnavailable(f"feedback service returned HTTP {r.status_code}")
        return r.content


class LocalFeedbackTransport(FeedbackTransport):
    """Calls the in-process FeedbackService; same failure mapping as HTTP."""

    def __init__(self, service: Optional[FeedbackService] = None) -> None:
        self.service = service or get_feedback_service()

    async def send(self, req: TurnRequest) -> Body:
        try:
            data = await self.service.respond(req)
        except LLMError as e:
            raise ServiceUnavailable(str(e)) from e
        return json.dumps(data, ensure_ascii=False)


def default_transport() -> FeedbackTransport:
    if settings.FEEDBACK_SERVICE_URL:
        return HttpFeedbackTransport(settings.FEEDBACK_SERVICE_URL, timeout=settings.LLM_TIMEOUT)
    return LocalFeedbackTransport()


# --- Orchestrator ------------------------------------------------------------------

def build_request(session: PracticeSession, user_message: str) -> TurnRequest:
    return TurnRequest(
        mode=session.answer_mode,
        nativeLanguage=session.native_language,
        targetLanguage=session.target_language,
        userMessage=user_message,
        difficulty=session.difficulty,
    )


class FeedbackOrchestrator:
    """
    Runs one turn against the feedback service.

    ``in_flight`` is True from dispatch until the reply is validated or fails;
    a second ``submit_turn`` in that window is refused without a network call.
    The session is only read here; the caller applies the result.
    """

    def __init__(self, transport: Optional[FeedbackTransport] = None) -> None:
        self.transport = transport or default_transport()
        self.in_flight = False

    async def submit_turn(self, session: PracticeSession, user_message: str) -> TurnResult:
        if self.in_flight:
            raise TurnInFlight()
        text = (user_message or "").strip()
        if not text:
            raise EmptyInput()

        req = build_request(session, text)
        self.in_flight = True
        try:
            body = await self.transport.send(req)
            result = validate_result(parse_body(body), req)
        except Exception as e:
            log.warning("turn failed: %s: %s", type(e).__name__, e)
            raise
        finally:
            self.in_flight = False

        log.info("turn ok set=%d/%d mode=%s", session.current_set_index + 1,
                 session.total_sets, result.mode)
        return result
