"""本地关键词回复生成器。

远程模型都不可用时的最后一层：按固定优先级匹配话题，
在命中的话题里随机挑一句。随机源可注入，测试时可以固定结果。
"""

import random
from typing import Optional, Sequence

from tutor_core.local.categories import (
    CATEGORIES,
    DEFAULT_REPLIES,
    WELCOME_REPLY,
    ResponseCategory,
)


class LocalResponseGenerator:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        categories: Sequence[ResponseCategory] = CATEGORIES,
        default_replies: Sequence[str] = DEFAULT_REPLIES,
        welcome_reply: str = WELCOME_REPLY,
    ):
        self._rng = rng or random.Random()
        self._categories = tuple(categories)
        self._default_replies = tuple(default_replies)
        self._welcome_reply = welcome_reply

    def match_category(self, message: str) -> Optional[ResponseCategory]:
        """返回第一个命中的话题，全部未命中时返回 None。"""

        lowered = (message or "").lower()
        for category in self._categories:
            if category.matches(lowered):
                return category
        return None

    def generate(self, message: str, history_length: int) -> str:
        """根据最新消息和对话长度生成一句回复。

        Args:
            message: 学生最新一条消息。
            history_length: 包含最新消息在内的对话条数；不超过 1 视为首轮。

        Returns:
            非空的回复文本。
        """
        if history_length <= 1:
            return self._welcome_reply
        category = self.match_category(message)
        if category is not None:
            return self._rng.choice(category.candidate_replies)
        return self._rng.choice(self._default_replies)


_default_generator = LocalResponseGenerator()


def generate(message: str, history_length: int) -> str:
    return _default_generator.generate(message, history_length)
