import logging
import random

from tutor_core.agents.resolver import (
    ResolverConfig,
    ResponseResolver,
    extract_primary_reply,
    extract_secondary_reply,
)
from tutor_core.domain.exceptions import ApiError, NetworkError
from tutor_core.domain.models import ConversationMessage, GenerationResult, ReplyTier
from tutor_core.local import LocalResponseGenerator
from tutor_core.prompts import build_prompt
from tutor_core.providers.registry import PRIMARY_MODEL, SECONDARY_MODEL, get_model_config


HISTORY = [
    ConversationMessage(role="user", content="Hello"),
    ConversationMessage(role="assistant", content="Hi! How are you?"),
    ConversationMessage(role="user", content="I had a long day at work"),
]
LATEST = HISTORY[-1].content


class FakeProvider:
    name = "fake"

    def __init__(self, raw_text=None, error=None):
        self.raw_text = raw_text
        self.error = error
        self.requests = []

    def generate(self, req):
        self.requests.append(req)
        if self.error is not None:
            raise self.error
        return GenerationResult(provider="fake", model=req.model, raw_text=self.raw_text, raw={})


def _resolver(primary=None, secondary=None, seed=7, min_reply_chars=10):
    config = ResolverConfig(
        primary=get_model_config(PRIMARY_MODEL),
        secondary=get_model_config(SECONDARY_MODEL),
        min_reply_chars=min_reply_chars,
    )
    return ResponseResolver(
        primary=primary,
        secondary=secondary,
        local=LocalResponseGenerator(rng=random.Random(seed)),
        config=config,
    )


def test_primary_reply_with_echoed_prompt_is_stripped():
    prompt = build_prompt("primary", LATEST)
    primary = FakeProvider(raw_text=prompt + " That sounds tiring! What do you do?")
    secondary = FakeProvider(raw_text="unused")
    reply = _resolver(primary, secondary).resolve(LATEST, HISTORY)
    assert reply.text == "That sounds tiring! What do you do?"
    assert reply.tier == ReplyTier.PRIMARY
    assert secondary.requests == []


def test_primary_request_parameters():
    primary = FakeProvider(raw_text="A perfectly fine answer here.")
    _resolver(primary).resolve(LATEST, HISTORY)
    req = primary.requests[0]
    assert req.model == "google/flan-t5-base"
    assert req.prompt.endswith(f"Student: {LATEST}\nTutor:")
    assert req.parameters.max_new_tokens == 100
    assert req.parameters.temperature == 0.7
    assert req.parameters.top_p == 0.9
    assert req.parameters.repetition_penalty == 1.1
    assert req.options.wait_for_model is True
    assert req.options.use_cache is False


def test_primary_failure_falls_back_to_secondary():
    primary = FakeProvider(error=ApiError(code="API_ERROR", message="boom", http_status=500))
    secondary = FakeProvider(raw_text="...English Teacher: Great to hear! Student: ...")
    reply = _resolver(primary, secondary).resolve(LATEST, HISTORY)
    assert reply.text == "Great to hear!"
    assert reply.tier == ReplyTier.SECONDARY
    req = secondary.requests[0]
    assert req.model == "gpt2"
    assert req.parameters.max_new_tokens == 80
    assert req.parameters.temperature == 0.8
    assert req.parameters.stop == ["Student:", "English Teacher:", "\n\n"]
    assert req.prompt.endswith(f"Student: {LATEST}\nEnglish Teacher:")


def test_short_primary_reply_falls_through():
    primary = FakeProvider(raw_text="Okay.")
    secondary = FakeProvider(raw_text="English Teacher: Tell me more about your job!")
    reply = _resolver(primary, secondary).resolve(LATEST, HISTORY)
    assert reply.tier == ReplyTier.SECONDARY
    assert reply.text == "Tell me more about your job!"


def test_both_providers_failing_uses_local_generator():
    primary = FakeProvider(error=NetworkError(code="NETWORK_ERROR", message="down"))
    secondary = FakeProvider(error=RuntimeError("unexpected"))
    reply = _resolver(primary, secondary, seed=11).resolve(LATEST, HISTORY)
    expected = LocalResponseGenerator(rng=random.Random(11)).generate(LATEST, len(HISTORY))
    assert reply.text == expected
    assert reply.tier == ReplyTier.LOCAL


def test_unusable_secondary_output_uses_local_generator():
    primary = FakeProvider(raw_text="")
    secondary = FakeProvider(raw_text="English Teacher: Hm. Student: what?")
    reply = _resolver(primary, secondary).resolve(LATEST, HISTORY)
    assert reply.tier == ReplyTier.LOCAL
    assert reply.text.strip()


def test_missing_credentials_skip_remote_tiers():
    reply = _resolver().resolve("hello", [ConversationMessage(role="user", content="hello")])
    assert reply.tier == ReplyTier.LOCAL
    assert reply.text.startswith("Hello! I'm excited")


def test_min_reply_chars_is_configurable():
    primary = FakeProvider(raw_text="Sure!")
    reply = _resolver(primary, min_reply_chars=3).resolve(LATEST, HISTORY)
    assert reply.text == "Sure!"
    assert reply.tier == ReplyTier.PRIMARY


def test_resolve_never_returns_empty():
    for raw in ["", "   ", None]:
        provider = FakeProvider(raw_text=raw)
        reply = _resolver(provider, provider).resolve("", [])
        assert reply.text.strip()


def test_extract_primary_reply():
    assert extract_primary_reply("PROMPT  Hello there friend", "PROMPT", 10) == "Hello there friend"
    assert extract_primary_reply("Too short", "PROMPT", 10) is None
    assert extract_primary_reply("exactly10c", "PROMPT", 10) is None
    assert extract_primary_reply("  eleven char  ", "PROMPT", 10) == "eleven char"


def test_extract_secondary_reply():
    text = "English Teacher: Hello!\nStudent: hi\nEnglish Teacher: Nice weather today. Student: yes"
    assert extract_secondary_reply(text, 10) == "Nice weather today."
    assert extract_secondary_reply("No markers but long enough", 10) == "No markers but long enough"
    assert extract_secondary_reply("English Teacher: Hi. Student:", 10) is None


def test_from_settings_without_key_never_calls_network(monkeypatch):
    class DummySettings:
        huggingface_api_key = None
        secondary_api_key = None
        primary_model = "google/flan-t5-base"
        secondary_model = "gpt2"
        min_reply_chars = 10

    class Client:
        def __init__(self, *a, **kw):
            raise AssertionError("network should not be used")

    monkeypatch.setattr("httpx.Client", Client)
    resolver = ResponseResolver.from_settings(DummySettings())
    reply = resolver.resolve("hello", HISTORY[:1])
    assert reply.tier == ReplyTier.LOCAL


def test_from_settings_uses_configured_models(monkeypatch):
    class DummySettings:
        huggingface_api_key = "hf_test_key_123"
        secondary_api_key = None
        primary_model = "google/flan-t5-large"
        secondary_model = "gpt2"
        min_reply_chars = 10
        http_timeout = 1.0
        inference_base_url = "https://example.test/models"

    urls = []

    class Resp:
        status_code = 200

        def json(self):
            return [{"generated_text": "What kind of work do you do?"}]

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, **kw):
            urls.append(url)
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    reply = ResponseResolver.from_settings(DummySettings()).resolve(LATEST, HISTORY)
    assert reply.tier == ReplyTier.PRIMARY
    assert reply.text == "What kind of work do you do?"
    assert urls == ["https://example.test/models/google/flan-t5-large"]


def test_from_settings_secondary_only_key():
    class DummySettings:
        huggingface_api_key = None
        secondary_api_key = "hf_secondary_key"
        primary_model = "google/flan-t5-base"
        secondary_model = "gpt2"
        min_reply_chars = 10
        http_timeout = 1.0

    resolver = ResponseResolver.from_settings(DummySettings())
    assert resolver._primary is None
    assert resolver._secondary._api_key == "hf_secondary_key"


def test_resolved_tier_logs_model_and_trace(caplog):
    caplog.set_level(logging.INFO, logger="tutor_core")
    primary = FakeProvider(raw_text="short")
    secondary = FakeProvider(raw_text="English Teacher: What do you do at work?")
    reply = _resolver(primary, secondary).resolve(LATEST, HISTORY)
    assert reply.tier == ReplyTier.SECONDARY

    payloads = [r.extra for r in caplog.records if r.name == "tutor_core"]
    unusable = [p for p in payloads if p["tier"] == "primary"]
    resolved = [p for p in payloads if p["tier"] == "secondary"]
    assert unusable[0]["model"] == "google/flan-t5-base"
    assert resolved[0]["model"] == "gpt2"
    assert len({p["trace_id"] for p in payloads}) == 1
