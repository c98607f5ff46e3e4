"""统一的对话与生成数据模型。

本模块定义了回复解析链路中各层共享的标准数据结构：

- ConversationMessage: 前端提交的一条对话消息（user/assistant）。
- GenerationRequest: 发给托管推理服务的一次生成请求。
- GenerationResult: 从 Provider 响应解析出的统一结果。
- ResolvedReply: 解析器最终产出的回复，以及产生它的层级。

Provider 适配器只依赖这些模型，并负责在推理服务 JSON 与这些模型之间做转换。
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional


# 对话角色（与前端 Message.role 对应）
Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationMessage:
    """一条对话消息。后端每次请求只拿到只读快照，不做持久化。"""

    role: Role
    content: str
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class GenerationParameters:
    """推理服务的采样参数，字段名与 API 的 parameters 对象一致。"""

    max_new_tokens: int
    temperature: float
    top_p: float
    do_sample: bool = True
    repetition_penalty: Optional[float] = None
    stop: Optional[List[str]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "max_new_tokens": self.max_new_tokens,
            "temperature": self.temperature,
            "do_sample": self.do_sample,
            "top_p": self.top_p,
        }
        if self.repetition_penalty is not None:
            payload["repetition_penalty"] = self.repetition_penalty
        if self.stop:
            payload["stop"] = list(self.stop)
        return payload


@dataclass(frozen=True)
class GenerationOptions:
    """推理服务的 options 对象。use_cache 为 None 时不下发该字段。"""

    wait_for_model: bool = True
    use_cache: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"wait_for_model": self.wait_for_model}
        if self.use_cache is not None:
            payload["use_cache"] = self.use_cache
        return payload


@dataclass(frozen=True)
class GenerationRequest:
    """一次完整的生成请求，发出后不可修改。"""

    model: str  # 厂商模型 ID，如 "gpt2"
    prompt: str
    parameters: GenerationParameters
    options: GenerationOptions = field(default_factory=GenerationOptions)


@dataclass
class GenerationResult:
    """一次生成调用的结果。

    - raw_text: 响应中的 generated_text 原文（未清洗）。
    - extracted_reply: 清洗后可直接展示的回复；为 None 时上层降级到下一层。
    - raw: 原始响应 JSON，用于调试或日志记录。
    """

    provider: str
    model: str
    raw_text: str
    extracted_reply: Optional[str] = None
    raw: Any = None


class ReplyTier(str, Enum):
    """产生最终回复的层级，随响应一并返回给调用方。"""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    LOCAL = "local"
    APOLOGY = "apology"


@dataclass(frozen=True)
class ResolvedReply:
    text: str
    tier: ReplyTier
