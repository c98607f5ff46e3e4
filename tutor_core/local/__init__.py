"""本地兜底回复：话题表 (categories) 与关键词生成器 (generator)。"""

from tutor_core.local.categories import APOLOGY_REPLY, WELCOME_REPLY, ResponseCategory
from tutor_core.local.generator import LocalResponseGenerator, generate

__all__ = [
    "APOLOGY_REPLY",
    "WELCOME_REPLY",
    "LocalResponseGenerator",
    "ResponseCategory",
    "generate",
]
