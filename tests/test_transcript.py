from tandem.services.turn.transcript import TranscriptBuffer


def test_resent_full_utterance_does_not_duplicate():
    buf = TranscriptBuffer()
    for t in ["I went", "I went to", "I went to the market", "I went to the market"]:
        buf.on_segment(t, True)
    assert buf.display() == "I went to the market"


def test_extension_appends_only_suffix():
    buf = TranscriptBuffer()
    buf.on_segment("hello", True)
    buf.on_segment("hello world", True)
    assert buf.committed == "hello world"


def test_reset_transcript_replaces_committed():
    buf = TranscriptBuffer()
    buf.on_segment("good morning", True)
    buf.on_segment("see you later", True)
    assert buf.display() == "see you later"


def test_empty_committed_accepts_any_final():
    buf = TranscriptBuffer()
    buf.on_segment("나는 학교에 가요", True)
    assert buf.committed == "나는 학교에 가요"


def test_interim_is_shown_but_never_merged():
    buf = TranscriptBuffer()
    buf.on_segment("I like", True)
    buf.on_segment("coff", False)
    assert buf.display() == "I like coff"
    buf.on_segment("coffee", False)  # replaced, not appended
    assert buf.display() == "I like coffee"
    assert buf.committed == "I like"


def test_final_clears_pending():
    buf = TranscriptBuffer()
    buf.on_segment("I like", False)
    buf.on_segment("I like tea", True)
    assert buf.pending == ""
    assert buf.display() == "I like tea"


def test_seed_keeps_typed_text_and_extends_it():
    buf = TranscriptBuffer()
    buf.seed("Yesterday")
    buf.on_segment("Yesterday I cooked", True)
    assert buf.display() == "Yesterday I cooked"


def test_interim_without_committed_has_no_leading_space():
    buf = TranscriptBuffer()
    buf.on_segment("bonj", False)
    assert buf.display() == "bonj"


def test_reset_clears_everything():
    buf = TranscriptBuffer("abc")
    buf.on_segment("abc d", False)
    buf.reset()
    assert buf.display() == ""
