import json

import httpx
from fastapi.testclient import TestClient

from tandem.main import app
from tandem.services.feedback.service import FeedbackService, get_feedback_service
from tandem.services.llm.openai_client import OpenAIChatClient

client = TestClient(app)
API = "/api"


def _use_llm(content=None, status=200, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(json.loads(request.content))
        if status != 200:
            return httpx.Response(status, text="boom")
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    llm = OpenAIChatClient(api_key="test", max_retries=0, transport=httpx.MockTransport(handler))
    svc = FeedbackService(llm)
    app.dependency_overrides[get_feedback_service] = lambda: svc


def teardown_function():
    app.dependency_overrides.clear()


TURN = {
    "mode": "native",
    "nativeLanguage": "ko",
    "targetLanguage": "en",
    "userMessage": "나는 학교에 가요",
    "difficulty": "beginner",
}


def test_conversation_native_mode_shapes_reply():
    seen = []
    _use_llm(json.dumps({
        "mode": "native",
        "translated_sentence": "I go to school.",
        "corrected_sentence": "",
        "pronunciation_praise": "좋아요!",
        "next_question_target": "Do you like school?",
        "next_question_native": "학교 좋아해요?",
        "pron_native": "아이 고 투 스쿨",
    }), seen=seen)

    r = client.post(f"{API}/conversation", json=TURN)
    assert r.status_code == 200
    data = r.json()
    assert data["translated_sentence"] == "I go to school."
    assert data["original_sentence"] is None
    assert data["corrected_sentence"] is None
    assert data["correction_explanation"] == ""

    payload = seen[0]
    assert payload["model"] == "gpt-4o-mini"
    assert payload["response_format"] == {"type": "json_object"}
    assert payload["max_tokens"] == 500
    system = payload["messages"][0]["content"]
    assert "beginner (A2)" in system
    assert "나는 학교에 가요" in payload["messages"][1]["content"]


def test_conversation_coerces_missing_pron_to_empty_string():
    _use_llm(json.dumps({
        "mode": "target",
        "original_sentence": "I go school",
        "corrected_sentence": "I go to school.",
        "correction_explanation": "전치사 to가 필요해요.",
        "next_question_target": "Why?",
        "pron_native": None,
    }))
    r = client.post(f"{API}/conversation", json=dict(TURN, mode="target", userMessage="I go school"))
    assert r.status_code == 200
    assert r.json()["pron_native"] == ""
    assert r.json()["translated_sentence"] is None


def test_conversation_upstream_failure():
    _use_llm(status=500)
    r = client.post(f"{API}/conversation", json=TURN)
    assert r.status_code == 502
    assert r.json()["detail"]["error"] == "OPENAI_FAILED"


def test_conversation_invalid_model_json():
    _use_llm("I am not JSON")
    r = client.post(f"{API}/conversation", json=TURN)
    assert r.status_code == 502
    assert r.json()["detail"]["error"] == "INVALID_JSON"


def test_conversation_tolerates_prose_around_json():
    _use_llm('Sure! ```json\n{"mode": "native", "translated_sentence": "Hi.", "next_question_target": "And you?"}\n```')
    r = client.post(f"{API}/conversation", json=TURN)
    assert r.status_code == 200
    assert r.json()["translated_sentence"] == "Hi."


def test_conversation_rejects_bad_requests():
    assert client.post(f"{API}/conversation", json=dict(TURN, userMessage="  ")).status_code == 422
    assert client.post(f"{API}/conversation", json=dict(TURN, targetLanguage="ko")).status_code == 422
    assert client.post(f"{API}/conversation", json=dict(TURN, mode="both")).status_code == 422


def test_en_native_ko_target_prompt_forces_romanization():
    seen = []
    _use_llm(json.dumps({"mode": "native", "translated_sentence": "학교에 가요.", "next_question_target": "왜요?"}), seen=seen)
    client.post(f"{API}/conversation", json=dict(TURN, nativeLanguage="en", targetLanguage="ko", userMessage="I go to school"))
    assert "romanized" in seen[0]["messages"][0]["content"]

    seen.clear()
    client.post(f"{API}/conversation", json=TURN)
    assert "SPECIAL OVERRIDE" not in seen[0]["messages"][0]["content"]


def test_generate_sentence_and_pron():
    _use_llm(json.dumps({"sentence": "Je vais à l'école.", "pron_native": "주 배 아 레꼴"}))
    r = client.post(f"{API}/generate", json={"nativeText": "학교에 가요", "nativeLang": "ko", "targetLang": "fr"})
    assert r.status_code == 200
    assert r.json() == {"sentence": "Je vais à l'école.", "pron_native": "주 배 아 레꼴"}


def test_generate_discards_copied_pron():
    _use_llm(json.dumps({"sentence": "Bonjour", "pron_native": "bonjour!"}))
    r = client.post(f"{API}/generate", json={"nativeText": "hi", "nativeLang": "en", "targetLang": "fr"})
    assert r.json()["pron_native"] == ""


def test_generate_missing_fields():
    r = client.post(f"{API}/generate", json={"nativeText": "hi"})
    assert r.status_code == 400
