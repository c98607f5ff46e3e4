"""练习会话驱动。

维护客户端本地的消息列表，把完整对话提交给 /api/chat，
增量解码 ``0:<json>`` 响应并追加助手回复。
同一时间只允许一个请求在途。
"""

import threading
from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

import httpx

from tutor_core import vocabulary
from tutor_core.api.envelope import REPLY_TIER_HEADER, EnvelopeDecoder
from tutor_core.domain.exceptions import SessionBusyError
from tutor_core.domain.models import ConversationMessage, ReplyTier
from tutor_core.infrastructure.logging.logger import logger
from tutor_core.local import APOLOGY_REPLY
from tutor_core.session.capabilities import PlaybackSink, TranscriptSource


SessionStatus = Literal["ready", "connected", "local", "error"]

CONNECTION_ISSUE_REPLY = (
    "I'm having some connection issues, but I'm still here to help! "
    "What would you like to practice?"
)

# 单词朗读放慢语速，方便跟读
PRONUNCIATION_RATE = 0.8

_TIER_STATUS = {
    ReplyTier.PRIMARY.value: "connected",
    ReplyTier.SECONDARY.value: "connected",
    ReplyTier.LOCAL.value: "local",
    ReplyTier.APOLOGY.value: "local",
}


class PracticeSession:
    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        client: Optional[httpx.Client] = None,
        transcript_source: Optional[TranscriptSource] = None,
        playback_sink: Optional[PlaybackSink] = None,
        timeout: float = 30.0,
        chat_path: str = "/api/chat",
    ):
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self._transcript_source = transcript_source
        self._playback_sink = playback_sink
        self._chat_path = chat_path
        self._lock = threading.Lock()
        self.messages: List[ConversationMessage] = []
        self.status: SessionStatus = "ready"
        self.last_tier: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self._lock.locked()

    def send_message(self, content: str) -> Optional[ConversationMessage]:
        """提交一条用户消息并返回追加的助手消息。

        空白输入直接忽略并返回 None；已有请求在途时抛出 SessionBusyError。
        传输失败不会抛出，而是追加一条连接异常提示并把 status 置为 "error"。
        """
        text = (content or "").strip()
        if not text:
            return None
        if not self._lock.acquire(blocking=False):
            raise SessionBusyError(code="SESSION_BUSY", message="A reply is still pending")
        try:
            self.messages.append(ConversationMessage(role="user", content=text, timestamp=_now()))
            try:
                reply, tier = self._post_conversation()
            except httpx.HTTPError as e:
                logger.warning(f"Chat request failed: {e}", extra={"extra": {
                    "error_type": type(e).__name__,
                }})
                self.status = "error"
                self.last_tier = None
                reply = CONNECTION_ISSUE_REPLY
            else:
                self.last_tier = tier
                self.status = _TIER_STATUS.get(tier or "", "connected")
                if not reply:
                    reply = APOLOGY_REPLY
            assistant = ConversationMessage(role="assistant", content=reply, timestamp=_now())
            self.messages.append(assistant)
            return assistant
        finally:
            self._lock.release()

    def listen_and_send(self) -> Optional[ConversationMessage]:
        """从注入的转写来源取一段语音文本并提交。"""
        if self._transcript_source is None:
            return None
        transcript = self._transcript_source.listen()
        if not transcript:
            return None
        return self.send_message(transcript)

    def pronounce(self, token: str) -> bool:
        """朗读词汇表中的单词，词不在表里或没有播放出口时返回 False。"""
        entry = vocabulary.lookup(token)
        if entry is None or self._playback_sink is None:
            return False
        self._playback_sink.speak(entry.word, rate=PRONUNCIATION_RATE)
        return True

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "PracticeSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _post_conversation(self) -> Tuple[str, Optional[str]]:
        body = {"messages": [{"role": m.role, "content": m.content} for m in self.messages]}
        decoder = EnvelopeDecoder()
        parts: List[str] = []
        with self._client.stream("POST", self._chat_path, json=body) as resp:
            resp.raise_for_status()
            for chunk in resp.iter_text():
                parts.extend(decoder.feed(chunk))
            parts.extend(decoder.close())
            tier = resp.headers.get(REPLY_TIER_HEADER)
        return "".join(parts), tier


def _now() -> datetime:
    return datetime.now(timezone.utc)
