"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护逻辑模型配置 (registry)。
- 提供推理服务的具体实现 (hf_client)。
"""

from typing import Literal, Optional

from tutor_core.config.settings import settings
from tutor_core.providers.base import GenerationProvider
from tutor_core.providers.hf_client import HuggingFaceClient


TierName = Literal["primary", "secondary"]


def create_provider(tier: TierName = "primary", cfg=None) -> Optional[HuggingFaceClient]:
    """按层级创建 Provider 实例；该层级没有凭证时返回 None。

    备用层优先使用 secondary_api_key，未配置时沿用主凭证。
    """

    cfg = cfg if cfg is not None else settings
    key = getattr(cfg, "huggingface_api_key", None)
    if tier == "secondary":
        key = getattr(cfg, "secondary_api_key", None) or key
    if not key:
        return None
    return HuggingFaceClient(cfg, api_key=key)


__all__ = ["GenerationProvider", "HuggingFaceClient", "TierName", "create_provider"]
