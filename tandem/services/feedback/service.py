# tandem/services/feedback/service.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from tandem.core.config import settings
from tandem.core.errors import InvalidResponse
from tandem.schemas.turn import TurnRequest
from tandem.services.feedback.prompts import (
    build_generate_prompt,
    build_generate_user,
    build_system_prompt,
)
from tandem.services.llm.openai_client import OpenAIChatClient, loads_reply
from tandem.services.turn.contract import clean_pron, shape_reply

log = logging.getLogger("feedback")


class FeedbackService:
    """
    LLM-backed language feedback: translation or light correction, a
    pronunciation line in the learner's script, praise, and the next question.

    Raises ``LLMError`` when the model endpoint fails and ``InvalidResponse``
    when the model's content is not a JSON object.
    """

    def __init__(self, llm: Optional[OpenAIChatClient] = None) -> None:
        self.llm = llm or OpenAIChatClient()

    async def respond(self, req: TurnRequest) -> Dict[str, Any]:
        system_prompt = build_system_prompt(req.difficulty, req.native_language, req.target_language)
        payload = req.model_dump(by_alias=True)
        content = await self.llm.chat_json(
            system_prompt,
            "Return ONLY JSON. Here is the user input:\n" + json.dumps(payload, ensure_ascii=False),
            max_tokens=settings.OPENAI_MAX_TOKENS,
            temperature=settings.OPENAI_TEMPERATURE,
        )
        parsed = loads_reply(content)
        if parsed is None:
            log.error("feedback reply is not JSON: %r", (content or "")[:300])
            raise InvalidResponse("model reply is not JSON")

        log.info("[TURN] mode=%s %s->%s msg=%r", req.mode, req.native_language,
                 req.target_language, req.user_message[:80])
        return shape_reply(parsed, req.mode)

    async def generate_sentence(self, native_text: str, native: str, target: str) -> Dict[str, str]:
        content = await self.llm.chat_json(
            build_generate_prompt(native, target),
            build_generate_user(native, target, native_text),
        )
        parsed = loads_reply(content)
        if parsed is None:
            log.error("generate reply is not JSON: %r", (content or "")[:300])
            raise InvalidResponse("model reply is not JSON")

        sentence = parsed.get("sentence")
        sentence = sentence.strip() if isinstance(sentence, str) else ""
        return {
            "sentence": sentence,
            "pron_native": clean_pron(parsed.get("pron_native"), sentence),
        }


_service: Optional[FeedbackService] = None


def get_feedback_service() -> FeedbackService:
    global _service
    if _service is None:
        _service = FeedbackService()
    return _service
