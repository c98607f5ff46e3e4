"""回复解析器核心模块。

按“主模型 → 备用模型 → 本地生成器”的顺序产出一条回复，先成功者胜出。
任何一层的异常或不可用输出都只会让流程降级到下一层，不会向外抛出。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence
import logging
import time

from tutor_core.config.settings import settings
from tutor_core.domain.models import (
    ConversationMessage,
    GenerationRequest,
    GenerationResult,
    ReplyTier,
    ResolvedReply,
)
from tutor_core.infrastructure.logging.logger import logger, new_trace_id
from tutor_core.local import APOLOGY_REPLY, LocalResponseGenerator
from tutor_core.prompts import STUDENT_MARKER, TEACHER_MARKER, build_prompt
from tutor_core.providers import create_provider
from tutor_core.providers.base import GenerationProvider
from tutor_core.providers.registry import (
    PRIMARY_MODEL,
    SECONDARY_MODEL,
    ModelConfig,
    get_model_config,
)


def extract_primary_reply(raw_text: str, prompt: str, min_chars: int) -> Optional[str]:
    """主模型：去掉回显在开头的提示词，长度超过 min_chars 才接受。"""

    text = (raw_text or "").strip()
    if text.startswith(prompt):
        text = text[len(prompt):]
    text = text.strip()
    return text if len(text) > min_chars else None


def extract_secondary_reply(raw_text: str, min_chars: int) -> Optional[str]:
    """备用模型：取最后一个老师标记之后、下一个学生标记之前的文本。"""

    tail = (raw_text or "").rsplit(TEACHER_MARKER, 1)[-1].strip()
    text = tail.split(STUDENT_MARKER, 1)[0].strip()
    return text if len(text) > min_chars else None


@dataclass
class ResolverConfig:
    primary: ModelConfig
    secondary: ModelConfig
    min_reply_chars: int = 10  # 远程回复的最短长度（不含），可通过配置调整


class ResponseResolver:
    def __init__(
        self,
        primary: Optional[GenerationProvider] = None,
        secondary: Optional[GenerationProvider] = None,
        local: Optional[LocalResponseGenerator] = None,
        config: Optional[ResolverConfig] = None,
    ):
        # primary/secondary 为 None 表示该层没有凭证，直接跳过
        self._primary = primary
        self._secondary = secondary
        self._local = local or LocalResponseGenerator()
        self._config = config or ResolverConfig(
            primary=get_model_config(PRIMARY_MODEL),
            secondary=get_model_config(SECONDARY_MODEL),
        )

    @classmethod
    def from_settings(cls, cfg=settings, local: Optional[LocalResponseGenerator] = None) -> "ResponseResolver":
        """按配置组装解析器；缺少凭证的层级不会创建 Provider。"""

        config = ResolverConfig(
            primary=get_model_config(PRIMARY_MODEL, getattr(cfg, "primary_model", "")),
            secondary=get_model_config(SECONDARY_MODEL, getattr(cfg, "secondary_model", "")),
            min_reply_chars=getattr(cfg, "min_reply_chars", 10),
        )
        return cls(
            primary=create_provider("primary", cfg),
            secondary=create_provider("secondary", cfg),
            local=local,
            config=config,
        )

    def resolve(self, latest_message: str, history: Sequence[ConversationMessage]) -> ResolvedReply:
        """解析出一条回复。

        Args:
            latest_message: 学生最新一条消息。
            history: 完整对话（包含最新消息），只读。

        Returns:
            ResolvedReply，text 保证非空，tier 标明产出层级。
        """
        start_time = time.time()
        log_ctx: Dict[str, Any] = {
            "trace_id": new_trace_id(),
            "history_length": len(history),
        }

        tiers = (
            (ReplyTier.PRIMARY, self._primary, self._request_primary),
            (ReplyTier.SECONDARY, self._secondary, self._request_secondary),
        )
        for tier, provider, attempt in tiers:
            if provider is None:
                self._log(logging.INFO, "Tier skipped: no credentials", log_ctx, tier=tier.value)
                continue
            try:
                result = attempt(provider, latest_message)
            except Exception as e:
                self._log(
                    logging.WARNING,
                    "Tier failed",
                    log_ctx,
                    tier=tier.value,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                continue
            if result.extracted_reply:
                self._log(
                    logging.INFO,
                    "Reply resolved",
                    log_ctx,
                    tier=tier.value,
                    model=result.model,
                    elapsed_ms=int((time.time() - start_time) * 1000),
                )
                return ResolvedReply(text=result.extracted_reply, tier=tier)
            self._log(
                logging.INFO,
                "Tier returned unusable output",
                log_ctx,
                tier=tier.value,
                model=result.model,
            )

        text = self._local.generate(latest_message, len(history))
        if not text or not text.strip():
            text = APOLOGY_REPLY
        self._log(
            logging.INFO,
            "Reply resolved",
            log_ctx,
            tier=ReplyTier.LOCAL.value,
            elapsed_ms=int((time.time() - start_time) * 1000),
        )
        return ResolvedReply(text=text, tier=ReplyTier.LOCAL)

    def _request_primary(self, provider: GenerationProvider, message: str) -> GenerationResult:
        prompt = build_prompt("primary", message)
        result = provider.generate(self._build_request(self._config.primary, prompt))
        result.extracted_reply = extract_primary_reply(result.raw_text, prompt, self._config.min_reply_chars)
        return result

    def _request_secondary(self, provider: GenerationProvider, message: str) -> GenerationResult:
        prompt = build_prompt("secondary", message)
        result = provider.generate(self._build_request(self._config.secondary, prompt))
        result.extracted_reply = extract_secondary_reply(result.raw_text, self._config.min_reply_chars)
        return result

    @staticmethod
    def _build_request(model_cfg: ModelConfig, prompt: str) -> GenerationRequest:
        return GenerationRequest(
            model=model_cfg.provider_model,
            prompt=prompt,
            parameters=model_cfg.parameters,
            options=model_cfg.options,
        )

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
