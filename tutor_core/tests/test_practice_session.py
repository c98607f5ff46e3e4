import json

import httpx
import pytest

from tutor_core.api.envelope import encode_envelope
from tutor_core.domain.exceptions import SessionBusyError
from tutor_core.local import APOLOGY_REPLY
from tutor_core.session import CONNECTION_ISSUE_REPLY, PracticeSession


def _session(handler, **kwargs):
    client = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://tutor.test")
    return PracticeSession(client=client, **kwargs)


def _reply(text, tier="local"):
    def handler(request):
        return httpx.Response(200, text=encode_envelope(text), headers={"X-Reply-Tier": tier})

    return handler


def test_send_message_appends_user_and_assistant():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(200, text=encode_envelope("Tell me more!"), headers={"X-Reply-Tier": "local"})

    session = _session(handler)
    assistant = session.send_message("  I like music  ")
    assert assistant.content == "Tell me more!"
    assert [(m.role, m.content) for m in session.messages] == [
        ("user", "I like music"),
        ("assistant", "Tell me more!"),
    ]
    assert seen[0] == {"messages": [{"role": "user", "content": "I like music"}]}
    assert session.status == "local"
    assert session.last_tier == "local"


def test_full_history_is_sent_each_turn():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, text=encode_envelope("Okay, go on."), headers={"X-Reply-Tier": "primary"})

    session = _session(handler)
    session.send_message("one")
    session.send_message("two")
    assert len(bodies[1]["messages"]) == 3
    assert session.status == "connected"


def test_blank_input_is_ignored():
    session = _session(_reply("unused"))
    assert session.send_message("   ") is None
    assert session.messages == []
    assert session.status == "ready"


def test_http_error_adds_connection_issue_reply():
    session = _session(lambda request: httpx.Response(500, text="boom"))
    assistant = session.send_message("hello")
    assert assistant.content == CONNECTION_ISSUE_REPLY
    assert session.status == "error"
    assert session.last_tier is None


def test_transport_error_adds_connection_issue_reply():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    session = _session(handler)
    assert session.send_message("hello").content == CONNECTION_ISSUE_REPLY
    assert session.status == "error"


def test_empty_envelope_falls_back_to_apology():
    session = _session(lambda request: httpx.Response(200, text="garbage\n"))
    assert session.send_message("hello").content == APOLOGY_REPLY


def test_second_submission_while_pending_is_refused():
    session = None
    observed = {}

    def handler(request):
        observed["pending"] = session.is_pending
        with pytest.raises(SessionBusyError):
            session.send_message("again")
        return httpx.Response(200, text=encode_envelope("First reply wins."))

    session = _session(handler)
    session.send_message("first")
    assert observed["pending"] is True
    assert session.is_pending is False
    assert [m.content for m in session.messages] == ["first", "First reply wins."]


class FakeTranscript:
    def __init__(self, texts):
        self._texts = list(texts)

    def listen(self):
        return self._texts.pop(0) if self._texts else None


class FakeSink:
    def __init__(self):
        self.spoken = []

    def speak(self, text, rate=1.0):
        self.spoken.append((text, rate))


def test_listen_and_send_uses_transcript_source():
    session = _session(_reply("What a nice trip!"), transcript_source=FakeTranscript(["I went to Hanoi"]))
    assert session.listen_and_send().content == "What a nice trip!"
    assert session.messages[0].content == "I went to Hanoi"
    assert session.listen_and_send() is None


def test_pronounce_vocabulary_word():
    sink = FakeSink()
    session = _session(_reply("unused"), playback_sink=sink)
    assert session.pronounce("Hello!") is True
    assert session.pronounce("xylophone") is False
    assert sink.spoken == [("hello", 0.8)]


def test_pronounce_without_sink():
    assert _session(_reply("unused")).pronounce("hello") is False
