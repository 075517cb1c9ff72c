import asyncio
import json

import httpx
import pytest

from tandem.core.errors import (
    EmptyInput,
    IncompleteTurn,
    InvalidResponse,
    ServiceUnavailable,
    TurnInFlight,
)
from tandem.services.feedback.service import FeedbackService
from tandem.services.llm.openai_client import OpenAIChatClient
from tandem.services.turn.orchestrator import (
    FeedbackOrchestrator,
    FeedbackTransport,
    HttpFeedbackTransport,
    LocalFeedbackTransport,
)
from tandem.services.turn.session import PracticeSession

REPLY = {
    "mode": "native",
    "translated_sentence": "I go to school.",
    "original_sentence": None,
    "corrected_sentence": None,
    "correction_explanation": "",
    "pronunciation_praise": "잘했어요!",
    "next_question_target": "What is your favorite subject?",
    "next_question_native": "가장 좋아하는 과목은 뭐예요?",
    "pron_native": "아이 고 투 스쿨",
}


class FakeTransport(FeedbackTransport):
    def __init__(self, body=None, exc=None):
        self.body = json.dumps(REPLY) if body is None else body
        self.exc = exc
        self.requests = []
        self.gate = None

    async def send(self, req):
        self.requests.append(req)
        if self.gate is not None:
            await self.gate.wait()
        if self.exc is not None:
            raise self.exc
        return self.body


def _practicing():
    s = PracticeSession(native_language="ko", target_language="en", total_sets=2, difficulty="beginner")
    s.confirm_native()
    s.start()
    return s


def test_submit_builds_request_from_session():
    t = FakeTransport()
    result = asyncio.run(FeedbackOrchestrator(t).submit_turn(_practicing(), "  나는 학교에 가요 "))
    req = t.requests[0]
    assert req.model_dump(by_alias=True) == {
        "mode": "native",
        "nativeLanguage": "ko",
        "targetLanguage": "en",
        "userMessage": "나는 학교에 가요",
        "difficulty": "beginner",
    }
    assert result.translated_sentence == "I go to school."
    assert result.corrected_sentence is None


def test_empty_input_makes_no_call():
    t = FakeTransport()
    with pytest.raises(EmptyInput):
        asyncio.run(FeedbackOrchestrator(t).submit_turn(_practicing(), "   "))
    assert t.requests == []


@pytest.mark.parametrize("transport,err", [
    (FakeTransport(exc=ServiceUnavailable()), ServiceUnavailable),
    (FakeTransport(body="<html>oops</html>"), InvalidResponse),
    (FakeTransport(body=json.dumps(dict(REPLY, next_question_target=""))), IncompleteTurn),
])
def test_failures_leave_session_untouched(transport, err):
    s = _practicing()
    orch = FeedbackOrchestrator(transport)
    before = s.snapshot()
    with pytest.raises(err):
        asyncio.run(orch.submit_turn(s, "hello"))
    assert s.snapshot() == before
    assert not orch.in_flight


def test_second_submit_while_in_flight_is_rejected():
    async def scenario():
        t = FakeTransport()
        t.gate = asyncio.Event()
        orch = FeedbackOrchestrator(t)
        s = _practicing()

        first = asyncio.create_task(orch.submit_turn(s, "hello"))
        await asyncio.sleep(0)
        assert orch.in_flight
        with pytest.raises(TurnInFlight):
            await orch.submit_turn(s, "hello again")
        assert len(t.requests) == 1

        t.gate.set()
        result = await first
        assert not orch.in_flight
        return result

    assert asyncio.run(scenario()).next_question_target == "What is your favorite subject?"


def test_http_transport_maps_status_to_service_unavailable():
    def handler(request):
        return httpx.Response(502, json={"error": "OPENAI_FAILED"})

    t = HttpFeedbackTransport("http://feedback.test/api/conversation", transport=httpx.MockTransport(handler))
    with pytest.raises(ServiceUnavailable):
        asyncio.run(FeedbackOrchestrator(t).submit_turn(_practicing(), "hello"))


def test_http_transport_maps_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    t = HttpFeedbackTransport("http://feedback.test/api/conversation", transport=httpx.MockTransport(handler))
    with pytest.raises(ServiceUnavailable):
        asyncio.run(FeedbackOrchestrator(t).submit_turn(_practicing(), "hello"))


def test_http_transport_posts_camelcase_request():
    seen = {}

    def handler(request):
        seen.update(json.loads(request.content))
        return httpx.Response(200, json=REPLY)

    t = HttpFeedbackTransport("http://feedback.test/api/conversation", transport=httpx.MockTransport(handler))
    result = asyncio.run(FeedbackOrchestrator(t).submit_turn(_practicing(), "hello"))
    assert seen["userMessage"] == "hello"
    assert seen["nativeLanguage"] == "ko"
    assert result.pron_native == "아이 고 투 스쿨"


def test_local_transport_maps_llm_failure():
    def handler(request):
        return httpx.Response(500, text="upstream down")

    llm = OpenAIChatClient(api_key="test", max_retries=0, transport=httpx.MockTransport(handler))
    t = LocalFeedbackTransport(FeedbackService(llm))
    with pytest.raises(ServiceUnavailable):
        asyncio.run(FeedbackOrchestrator(t).submit_turn(_practicing(), "hello"))


def test_local_transport_unparseable_model_output():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"content": "Sorry, I can't."}}]})

    llm = OpenAIChatClient(api_key="test", max_retries=0, transport=httpx.MockTransport(handler))
    t = LocalFeedbackTransport(FeedbackService(llm))
    with pytest.raises(InvalidResponse):
        asyncio.run(FeedbackOrchestrator(t).submit_turn(_practicing(), "hello"))
