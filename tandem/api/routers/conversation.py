# tandem/api/routers/conversation.py
import logging

from fastapi import APIRouter, Depends, HTTPException

from tandem.core.errors import InvalidResponse
from tandem.schemas.turn import TurnRequest
from tandem.services.feedback.service import FeedbackService, get_feedback_service
from tandem.services.llm.openai_client import LLMError

router = APIRouter(prefix="/conversation", tags=["conversation"])
log = logging.getLogger("conversation")


@router.post("")
async def conversation(req: TurnRequest, svc: FeedbackService = Depends(get_feedback_service)):
    """One feedback turn. Unused fields for the mode come back as null."""
    try:
        return await svc.respond(req)
    except LLMError as e:
        log.error("Conversation LLM error: %s", e)
        raise HTTPException(status_code=502, detail={"error": "OPENAI_FAILED", "detail": str(e)})
    except InvalidResponse as e:
        raise HTTPException(status_code=502, detail={"error": "INVALID_JSON", "detail": e.detail})
