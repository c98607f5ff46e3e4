"""对外 HTTP 服务模块。

- POST /api/chat: 接收完整对话，返回一行 ``0:<json>\\n`` 回复。
  无论请求体是否合法、远程模型是否可用，状态码始终为 200。
- GET /api/vocabulary/{word}: 单词弹窗用的释义与音标。
- GET /health: 存活检查。
"""

import json
from typing import Any, Dict, List, Optional

import pydantic
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from tutor_core import vocabulary
from tutor_core.agents.resolver import ResponseResolver
from tutor_core.api.envelope import REPLY_TIER_HEADER, encode_envelope
from tutor_core.api.schemas import ChatPayload, VocabularyOut
from tutor_core.config.settings import settings
from tutor_core.domain.exceptions import ValidationError
from tutor_core.domain.models import ConversationMessage, ReplyTier, ResolvedReply
from tutor_core.infrastructure.logging.logger import logger
from tutor_core.local import APOLOGY_REPLY


_resolver: Optional[ResponseResolver] = None


def get_default_resolver() -> ResponseResolver:
    """获取按配置组装的默认解析器（单例）。"""
    global _resolver
    if _resolver is None:
        _resolver = ResponseResolver.from_settings(settings)
    return _resolver


def parse_chat_payload(raw: bytes) -> List[ConversationMessage]:
    """把请求体解析为对话快照，格式不对时抛 ValidationError。

    content 缺失或为 null 都按空文本处理。
    """
    try:
        payload = ChatPayload.model_validate(json.loads(raw))
    except (json.JSONDecodeError, UnicodeDecodeError, pydantic.ValidationError) as e:
        raise ValidationError(code="BAD_CHAT_PAYLOAD", message=str(e))
    return [
        ConversationMessage(role=m.role, content=m.content or "", timestamp=m.timestamp)
        for m in payload.messages
    ]


def envelope_response(reply: ResolvedReply) -> PlainTextResponse:
    return PlainTextResponse(
        content=encode_envelope(reply.text),
        headers={
            "Cache-Control": "no-cache",
            REPLY_TIER_HEADER: reply.tier.value,
        },
    )


def create_app(resolver: Optional[ResponseResolver] = None) -> FastAPI:
    app = FastAPI(
        title="English Tutor",
        description="English conversation practice backend with provider fallback.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/chat", response_class=PlainTextResponse)
    async def chat(request: Request) -> PlainTextResponse:
        try:
            history = parse_chat_payload(await request.body())
        except ValidationError as e:
            logger.error(f"Chat request rejected: {e}", extra={"extra": {
                "code": e.code,
                "error": e.message,
            }})
            return envelope_response(ResolvedReply(text=APOLOGY_REPLY, tier=ReplyTier.APOLOGY))
        latest = history[-1].content if history else ""
        active = resolver or get_default_resolver()
        reply = await run_in_threadpool(active.resolve, latest, history)
        return envelope_response(reply)

    @app.get("/api/vocabulary/{word}", response_model=VocabularyOut)
    def vocabulary_entry(word: str) -> VocabularyOut:
        entry = vocabulary.lookup(word)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Unknown word: {word}")
        return VocabularyOut(
            word=entry.word,
            translation=entry.translation,
            pronunciation=entry.pronunciation,
        )

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.service_host, port=settings.service_port)
