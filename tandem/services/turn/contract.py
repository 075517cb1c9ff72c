# tandem/services/turn/contract.py
"""
Turn contract: parse and validate one reply from the feedback service.

``parse_body`` turns raw bytes/text into a dict (or raises InvalidResponse),
``validate_result`` checks it against the request that produced it and returns
a ``TurnResult`` (or raises IncompleteTurn). Neither touches session state.
"""
from __future__ import annotations

import json
import logging
import unicodedata
from typing import Any, Dict, Optional, Union

from tandem.core.errors import IncompleteTurn, InvalidResponse
from tandem.schemas.turn import TurnRequest, TurnResult

log = logging.getLogger("contract")


def normalize(text: str) -> str:
    """Lowercase, strip diacritics, drop whitespace and punctuation."""
    decomposed = unicodedata.normalize("NFKD", (text or "").lower())
    return "".join(
        ch for ch in decomposed
        if not unicodedata.combining(ch)
        and not ch.isspace()
        and unicodedata.category(ch)[0] not in ("P", "S", "Z")
    )


def clean_pron(pron: Any, sentence: Optional[str]) -> str:
    """
    pron_native as a display string: "" when missing, not a string, or just a
    copy of the sentence it is supposed to transcribe.
    """
    if not isinstance(pron, str):
        return ""
    pron = pron.strip()
    if not pron:
        return ""
    if normalize(pron) == normalize(sentence or ""):
        log.info("discarding pron_native that copies its sentence: %r", pron[:80])
        return ""
    return pron


def parse_body(body: Union[str, bytes, None]) -> Dict[str, Any]:
    if body is None:
        raise InvalidResponse("empty body")
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise InvalidResponse(f"body is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidResponse("body is not a JSON object")
    return data


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_result(data: Dict[str, Any], req: TurnRequest) -> TurnResult:
    if not isinstance(data, dict):
        raise InvalidResponse("body is not a JSON object")

    mode = data.get("mode") or req.mode
    if mode != req.mode:
        raise IncompleteTurn(f"reply mode {mode!r} does not match request mode {req.mode!r}")

    next_q = _text(data.get("next_question_target"))
    if not next_q:
        raise IncompleteTurn("next_question_target is missing")
    next_q_native = _text(data.get("next_question_native")) or None

    praise = _text(data.get("pronunciation_praise"))
    explanation = _text(data.get("correction_explanation"))

    if req.mode == "native":
        translated = _text(data.get("translated_sentence"))
        if not translated:
            raise IncompleteTurn("translated_sentence is missing")
        return TurnResult(
            mode="native",
            translated_sentence=translated,
            correction_explanation=explanation,
            pronunciation_praise=praise,
            pron_native=clean_pron(data.get("pron_native"), translated),
            next_question_target=next_q,
            next_question_native=next_q_native,
        )

    corrected = _text(data.get("corrected_sentence"))
    if not corrected:
        raise IncompleteTurn("corrected_sentence is missing")
    if not explanation:
        raise IncompleteTurn("correction_explanation is missing")
    return TurnResult(
        mode="target",
        original_sentence=_text(data.get("original_sentence")) or req.user_message,
        corrected_sentence=corrected,
        correction_explanation=explanation,
        pronunciation_praise=praise,
        pron_native=clean_pron(data.get("pron_native"), corrected),
        next_question_target=next_q,
        next_question_native=next_q_native,
    )


def shape_reply(data: Dict[str, Any], mode: str) -> Dict[str, Any]:
    """
    Wire form the feedback service returns: every field present, unused
    fields for ``mode`` as explicit null, correction_explanation "" in native
    mode, pron_native always a string.
    """
    out = {
        "mode": mode,
        "translated_sentence": data.get("translated_sentence"),
        "original_sentence": data.get("original_sentence"),
        "corrected_sentence": data.get("corrected_sentence"),
        "correction_explanation": data.get("correction_explanation"),
        "pronunciation_praise": data.get("pronunciation_praise"),
        "next_question_target": data.get("next_question_target"),
        "next_question_native": data.get("next_question_native"),
        "pron_native": data.get("pron_native"),
    }
    if mode == "native":
        out["original_sentence"] = None
        out["corrected_sentence"] = None
        out["correction_explanation"] = out["correction_explanation"] or ""
    else:
        out["translated_sentence"] = None
    for k in ("translated_sentence", "original_sentence", "corrected_sentence", "next_question_native"):
        if out[k] == "":
            out[k] = None
    if not isinstance(out["pron_native"], str):
        out["pron_native"] = ""
    return out
