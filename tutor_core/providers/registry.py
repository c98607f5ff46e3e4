"""逻辑模型配置。

本模块将“逻辑模型名”与“具体厂商模型”解耦：

- 逻辑名（logical_name）：解析器里使用的统一名称，例如 "tutor-primary"。
- provider_model：推理服务实际的模型 ID，例如 "google/flan-t5-base"。

每个逻辑模型同时携带该层级固定的采样参数和 options，
解析器只关心逻辑名，换模型或调参数都集中在这里。"""

from dataclasses import dataclass, replace
from typing import Mapping

from tutor_core.domain.models import GenerationOptions, GenerationParameters


PRIMARY_MODEL = "tutor-primary"
SECONDARY_MODEL = "tutor-secondary"

# 未配置 inference_base_url 时使用
DEFAULT_BASE_URL = "https://api-inference.huggingface.co/models"


@dataclass(frozen=True)
class ModelConfig:
    """单个逻辑模型的配置。"""

    logical_name: str
    provider_model: str
    parameters: GenerationParameters
    options: GenerationOptions


# 主模型是指令微调的 flan-t5，备用模型是按对话格式续写的 gpt2。
MODEL_CONFIGS: Mapping[str, ModelConfig] = {
    PRIMARY_MODEL: ModelConfig(
        logical_name=PRIMARY_MODEL,
        provider_model="google/flan-t5-base",
        parameters=GenerationParameters(
            max_new_tokens=100,
            temperature=0.7,
            top_p=0.9,
            repetition_penalty=1.1,
        ),
        options=GenerationOptions(wait_for_model=True, use_cache=False),
    ),
    SECONDARY_MODEL: ModelConfig(
        logical_name=SECONDARY_MODEL,
        provider_model="gpt2",
        parameters=GenerationParameters(
            max_new_tokens=80,
            temperature=0.8,
            top_p=0.9,
            stop=["Student:", "English Teacher:", "\n\n"],
        ),
        options=GenerationOptions(wait_for_model=True),
    ),
}


def get_model_config(logical_name: str, provider_model: str = "") -> ModelConfig:
    """取逻辑模型配置；provider_model 非空时覆盖默认的厂商模型 ID。"""

    model_cfg = MODEL_CONFIGS[logical_name]
    if provider_model and provider_model != model_cfg.provider_model:
        return replace(model_cfg, provider_model=provider_model)
    return model_cfg
