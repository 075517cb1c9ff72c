# tandem/api/routers/sessions.py
"""
Practice-session API.

Hosts the session state machine, the transcript buffer and the feedback
orchestrator for a browser client. The client reports whether it has speech
recognition, forwards recognition events, and posts button actions; every
response carries the full session view.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional, Tuple

from cachetools import TTLCache
from fastapi import APIRouter, Depends, HTTPException

from tandem.core import languages
from tandem.core.config import settings
from tandem.core.errors import (
    EmptyInput,
    InvalidTransition,
    RecognitionUnsupported,
    ServiceUnavailable,
    TandemError,
    TurnInFlight,
)
from tandem.schemas.session import (
    AnswerModeReq,
    ConfirmNativeReq,
    DifficultyReq,
    InputReq,
    LanguageReq,
    ListenStartReq,
    SegmentOut,
    SegmentReq,
    SessionCreate,
    SessionOut,
    SetsReq,
    SpeechOut,
    TurnOut,
    TurnSubmitReq,
)
from tandem.services.tts.google_tts import GoogleTTSClient, get_tts_client, synthesize_cached
from tandem.services.turn.orchestrator import (
    FeedbackOrchestrator,
    FeedbackTransport,
    default_transport,
)
from tandem.services.turn.recognition import make_recognizer
from tandem.services.turn.session import PracticeSession, Step

router = APIRouter(prefix="/sessions", tags=["sessions"])
log = logging.getLogger("sessions")

# NOTE: in-memory store; resets on restart and is not multi-worker safe.
# Idle sessions expire after SESSION_TTL_SECONDS; any request refreshes them.
_SESS: TTLCache = TTLCache(maxsize=settings.SESSION_MAX, ttl=settings.SESSION_TTL_SECONDS)

_STATUS = {
    EmptyInput: 422,
    TurnInFlight: 409,
    InvalidTransition: 409,
    RecognitionUnsupported: 409,
}

# UI copy key for errors the learner should read in their own language
_UI_MESSAGE = {
    EmptyInput: "empty_input",
    TurnInFlight: "turn_in_flight",
    RecognitionUnsupported: "recognition_unsupported",
}


def get_feedback_transport() -> FeedbackTransport:
    return default_transport()


def _http(e: TandemError, sess: Optional[PracticeSession] = None) -> HTTPException:
    status = _STATUS.get(type(e), 502 if e.retryable else 400)
    message = e.message
    key = "retry_message" if e.retryable else _UI_MESSAGE.get(type(e))
    if key and sess is not None:
        message = languages.ui_texts(sess.native_language)[key]
    return HTTPException(
        status_code=status,
        detail={"error": e.code, "message": message, "detail": e.detail, "retryable": e.retryable},
    )


def _get(sid: str) -> Tuple[PracticeSession, FeedbackOrchestrator]:
    entry = _SESS.get(sid)
    if not entry:
        raise HTTPException(status_code=404, detail="session not found")
    _SESS[sid] = entry  # re-insert restarts the TTL
    return entry


def _out(sid: str, sess: PracticeSession) -> SessionOut:
    return SessionOut(id=sid, **sess.snapshot())


def _apply(sid: str, action, *args) -> SessionOut:
    sess, _ = _get(sid)
    try:
        action(sess, *args)
    except TandemError as e:
        raise _http(e, sess)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _out(sid, sess)


# --- Lifecycle ---------------------------------------------------------------

@router.post("", response_model=SessionOut)
async def create_session(
    data: SessionCreate,
    transport: FeedbackTransport = Depends(get_feedback_transport),
):
    sid = uuid.uuid4().hex
    try:
        sess = PracticeSession(
            native_language=data.native_language or "ko",
            total_sets=settings.DEFAULT_SETS,
            set_choices=settings.SET_CHOICES,
            recognizer=make_recognizer(data.recognition_supported),
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    _SESS[sid] = (sess, FeedbackOrchestrator(transport))
    log.info("[SESSION] new sid=%s recognition=%s", sid, data.recognition_supported)
    return _out(sid, sess)


@router.get("/{sid}", response_model=SessionOut)
async def get_session(sid: str):
    sess, _ = _get(sid)
    return _out(sid, sess)


@router.delete("/{sid}")
async def delete_session(sid: str):
    sess, _ = _get(sid)
    sess.stop_listening()
    _SESS.pop(sid, None)
    return {"ok": True}


# --- Setup -------------------------------------------------------------------

@router.post("/{sid}/native", response_model=SessionOut)
async def confirm_native(sid: str, req: ConfirmNativeReq):
    return _apply(sid, PracticeSession.confirm_native, req.code)


@router.put("/{sid}/native", response_model=SessionOut)
async def set_native(sid: str, req: LanguageReq):
    return _apply(sid, PracticeSession.set_native_language, req.code)


@router.put("/{sid}/target", response_model=SessionOut)
async def set_target(sid: str, req: LanguageReq):
    return _apply(sid, PracticeSession.set_target_language, req.code)


@router.put("/{sid}/difficulty", response_model=SessionOut)
async def set_difficulty(sid: str, req: DifficultyReq):
    return _apply(sid, PracticeSession.set_difficulty, req.difficulty)


@router.put("/{sid}/sets", response_model=SessionOut)
async def set_sets(sid: str, req: SetsReq):
    return _apply(sid, PracticeSession.set_total_sets, req.total_sets)


@router.put("/{sid}/answer-mode", response_model=SessionOut)
async def set_answer_mode(sid: str, req: AnswerModeReq):
    return _apply(sid, PracticeSession.set_answer_mode, req.mode)


@router.post("/{sid}/start", response_model=SessionOut)
async def start(sid: str):
    return _apply(sid, PracticeSession.start)


@router.post("/{sid}/exit", response_model=SessionOut)
async def exit_to_setup(sid: str):
    return _apply(sid, PracticeSession.exit_to_setup)


# --- Answer box & microphone -------------------------------------------------

@router.put("/{sid}/input", response_model=SessionOut)
async def set_input(sid: str, req: InputReq):
    return _apply(sid, PracticeSession.set_input, req.text)


@router.post("/{sid}/listen/start", response_model=SessionOut)
async def listen_start(sid: str, req: Optional[ListenStartReq] = None):
    return _apply(sid, PracticeSession.start_listening, bool(req and req.resume))


@router.post("/{sid}/listen/segment", response_model=SegmentOut)
async def listen_segment(sid: str, req: SegmentReq):
    sess, _ = _get(sid)
    accepted = sess.push_segment(req.transcript, req.is_final)
    if not accepted:
        log.debug("[ASR] sid=%s dropped segment (not listening)", sid)
    return SegmentOut(accepted=accepted, input_text=sess.input_text)


@router.post("/{sid}/listen/stop", response_model=SessionOut)
async def listen_stop(sid: str):
    return _apply(sid, PracticeSession.stop_listening)


# --- Turn & playback ---------------------------------------------------------

@router.post("/{sid}/turn", response_model=TurnOut)
async def submit_turn(sid: str, req: Optional[TurnSubmitReq] = None):
    sess, orch = _get(sid)
    if sess.step != Step.PRACTICING:
        raise _http(InvalidTransition("no practice in progress"), sess)

    text = req.text if req and req.text is not None else sess.input_text
    epoch = sess.epoch
    try:
        result = await orch.submit_turn(sess, text)
        completed = sess.apply_turn(result, epoch=epoch)
    except TandemError as e:
        raise _http(e, sess)

    return TurnOut(result=result, completed=completed, session=_out(sid, sess))


@router.post("/{sid}/speech", response_model=SpeechOut)
async def speech(sid: str, client: GoogleTTSClient = Depends(get_tts_client)):
    sess, _ = _get(sid)
    text = sess.foreign_text.strip()
    if not text:
        raise HTTPException(status_code=409, detail="no foreign sentence to play")
    tts_lang = languages.tts_lang(sess.target_language)
    try:
        audio = await synthesize_cached(client, text, tts_lang)
    except ServiceUnavailable as e:
        raise _http(e, sess)
    return SpeechOut(audio_content=audio, tts_lang=tts_lang, text=text)
