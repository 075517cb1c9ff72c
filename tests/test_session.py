import pytest

from tandem.core.errors import InvalidTransition, RecognitionUnsupported
from tandem.schemas.turn import TurnResult
from tandem.services.turn.recognition import NullRecognizer
from tandem.services.turn.session import PracticeSession, Step


def _result(i=1, **kw):
    data = dict(
        mode="native",
        translated_sentence=f"Sentence {i}.",
        pron_native=f"센텐스 {i}",
        pronunciation_praise="좋아요",
        next_question_target=f"Question {i}?",
        next_question_native=f"질문 {i}?",
    )
    data.update(kw)
    return TurnResult(**data)


def _practicing(total_sets=2, **kw):
    s = PracticeSession(native_language="ko", target_language="en", total_sets=total_sets, **kw)
    s.confirm_native()
    s.start()
    return s


def test_setup_flow_reaches_practice_with_first_prompt():
    s = PracticeSession()
    assert s.step == Step.CHOOSING_NATIVE
    s.confirm_native("fr")
    assert s.step == Step.CONFIGURING
    s.set_target_language("es")
    s.start()
    assert s.step == Step.PRACTICING
    assert s.current_set_index == 0
    assert s.current_question_target == "¿Cómo empezaste tu día hoy?"
    assert s.current_question_native == "Comment as-tu commencé ta journée aujourd'hui ?"
    assert s.last_turn_result is None


def test_successful_turn_advances_and_takes_next_question():
    s = _practicing(total_sets=4)
    s.set_input("나는 학교에 가요")
    done = s.apply_turn(_result(1))
    assert not done
    assert s.current_set_index == 1
    assert s.current_question_target == "Question 1?"
    assert s.current_question_native == "질문 1?"
    assert s.last_turn_result.translated_sentence == "Sentence 1."
    assert s.foreign_text == "Sentence 1."
    assert s.pron_display == "센텐스 1"
    assert s.input_text == ""


def test_session_completes_after_total_sets_and_restarts_at_zero():
    s = _practicing(total_sets=2)
    assert s.apply_turn(_result(1)) is False
    assert s.apply_turn(_result(2)) is True
    assert s.step == Step.CONFIGURING
    assert s.completed
    assert s.foreign_text == "" and s.pron_display == "" and s.input_text == ""
    s.start()
    assert s.current_set_index == 0
    assert not s.completed


def test_index_never_reaches_total_sets_while_practicing():
    s = _practicing(total_sets=2)
    s.apply_turn(_result(1))
    assert 0 <= s.current_set_index < s.total_sets


@pytest.mark.parametrize("target", ["en", "fr", "es", "ru"])
def test_native_collision_reassigns_target(target):
    s = PracticeSession(native_language="ko", target_language=target)
    s.set_native_language(target)
    assert s.native_language == target
    assert s.target_language != target


def test_native_change_without_collision_keeps_target():
    s = PracticeSession(native_language="ko", target_language="fr")
    s.set_native_language("ru")
    assert s.target_language == "fr"


def test_target_equal_to_native_is_rejected():
    s = PracticeSession(native_language="ko", target_language="en")
    with pytest.raises(InvalidTransition):
        s.set_target_language("ko")
    assert s.target_language == "en"


def test_constructor_never_leaves_languages_equal():
    s = PracticeSession(native_language="en", target_language="en")
    assert s.target_language != "en"


def test_unsupported_language_and_sets_rejected():
    s = PracticeSession()
    with pytest.raises(ValueError):
        s.set_native_language("de")
    with pytest.raises(ValueError):
        s.set_total_sets(3)
    with pytest.raises(ValueError):
        s.set_difficulty("expert")


def test_exit_discards_turn_state_and_bumps_epoch():
    s = _practicing(total_sets=4)
    s.apply_turn(_result(1))
    epoch = s.epoch
    s.exit_to_setup()
    assert s.step == Step.CONFIGURING
    assert s.foreign_text == ""
    assert s.epoch == epoch + 1


def test_late_reply_for_abandoned_run_is_refused():
    s = _practicing(total_sets=4)
    epoch = s.epoch
    s.exit_to_setup()
    s.start()
    with pytest.raises(InvalidTransition):
        s.apply_turn(_result(1), epoch=epoch)
    assert s.current_set_index == 0


def test_setup_changes_blocked_while_practicing():
    s = _practicing()
    with pytest.raises(InvalidTransition):
        s.set_target_language("fr")
    with pytest.raises(InvalidTransition):
        s.start()


def test_answer_mode_switches_recognition_language():
    s = _practicing()
    s.start_listening()
    assert s.recognizer.lang == "ko-KR"
    s.set_answer_mode("target")
    assert not s.recognizer.listening
    assert s.answer_language == "en"
    s.start_listening()
    assert s.recognizer.lang == "en-US"


def test_segments_after_stop_are_dropped():
    s = _practicing()
    s.start_listening()
    assert s.push_segment("I went", True)
    s.stop_listening()
    assert not s.push_segment("I went home", True)
    assert s.input_text == "I went"


def test_listen_start_clears_or_resumes_typed_text():
    s = _practicing()
    s.set_input("Today I")
    s.start_listening(resume=True)
    s.push_segment("Today I ran", True)
    assert s.input_text == "Today I ran"

    s.stop_listening()
    s.start_listening()
    assert s.input_text == ""


def test_unsupported_recognition_still_allows_typing():
    s = _practicing(recognizer=NullRecognizer())
    with pytest.raises(RecognitionUnsupported):
        s.start_listening()
    assert not s.push_segment("hello", True)
    s.set_input("typed answer")
    assert s.input_text == "typed answer"
