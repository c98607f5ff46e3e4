"""Tutor Core 顶层包。

该包提供英语口语陪练后端的核心实现，
包括配置加载、领域模型、推理服务适配、三级回复降级链、
本地关键词回复、词汇表、HTTP 服务与客户端练习会话。
"""

from tutor_core.agents.resolver import ResponseResolver
from tutor_core.domain.models import ConversationMessage, ReplyTier, ResolvedReply
from tutor_core.local import LocalResponseGenerator

__all__ = [
    "ConversationMessage",
    "LocalResponseGenerator",
    "ReplyTier",
    "ResolvedReply",
    "ResponseResolver",
]
