"""Hugging Face Inference API 适配器。

本模块负责：

1. 接收统一的 GenerationRequest。
2. 将其转换为推理服务的请求体 {inputs, parameters, options}。
3. 调用 HTTP 接口并把网络/限流/服务端错误包装为业务异常。
4. 把响应 JSON 解码为显式的形态（列表形态 / 对象形态），再产出 GenerationResult。

不同模型的响应形态不一样：text2text 模型通常返回
``[{"generated_text": ...}]``，部分部署会直接返回 ``{"generated_text": ...}``。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from tutor_core.config.settings import settings
from tutor_core.domain.exceptions import (
    ApiError,
    NetworkError,
    RateLimitError,
    ResponseShapeError,
    ValidationError,
)
from tutor_core.domain.models import GenerationRequest, GenerationResult
from tutor_core.providers.registry import DEFAULT_BASE_URL


@dataclass(frozen=True)
class ListShape:
    """``[{"generated_text": "..."}, ...]``，只取第一个元素。"""

    generated_text: Optional[str]
    size: int


@dataclass(frozen=True)
class ObjectShape:
    """``{"generated_text": "..."}``。"""

    generated_text: Optional[str]


ResponseShape = Union[ListShape, ObjectShape]


def _text_field(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        text = item.get("generated_text")
        if isinstance(text, str) and text:
            return text
    return None


def decode_response(data: Any) -> ResponseShape:
    """把响应 JSON 解码为 ListShape 或 ObjectShape，其他形态抛 ResponseShapeError。"""

    if isinstance(data, list):
        first = data[0] if data else None
        return ListShape(generated_text=_text_field(first), size=len(data))
    if isinstance(data, dict):
        return ObjectShape(generated_text=_text_field(data))
    raise ResponseShapeError(
        code="UNKNOWN_RESPONSE_SHAPE",
        message=f"Unsupported response type: {type(data).__name__}",
    )


class HuggingFaceClient:
    """Hugging Face 推理服务客户端实现。

    - name: Provider 名称（供日志使用）。
    - generate: 对外统一调用入口，返回 GenerationResult。
    """

    name = "huggingface"

    def __init__(self, cfg=settings, api_key: Optional[str] = None):
        # api_key 为空时使用配置中的主凭证
        self._settings = cfg
        self._api_key = api_key or getattr(cfg, "huggingface_api_key", None)

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key)

    def generate(self, req: GenerationRequest) -> GenerationResult:
        """执行一次生成调用。

        步骤：
        1. 校验凭证。
        2. 构造 HTTP 请求 payload。
        3. 发送请求并捕获网络错误/限流/服务端错误。
        4. 解码响应形态并构造 GenerationResult。
        """
        if not self._api_key:
            raise ValidationError(code="MISSING_API_KEY", message="HUGGINGFACE_API_KEY not set")
        payload = self._build_payload(req)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                base = getattr(self._settings, "inference_base_url", None) or DEFAULT_BASE_URL
                resp = client.post(
                    f"{base.rstrip('/')}/{req.model}",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e), model=req.model)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="Inference API rate limit", model=req.model)
        if resp.status_code >= 400:
            raise ApiError(
                code="API_ERROR",
                message=resp.text,
                http_status=resp.status_code,
                model=req.model,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise ResponseShapeError(code="INVALID_JSON", message=str(e), model=req.model)
        return self._parse_response(data, req)

    def _build_payload(self, req: GenerationRequest) -> Dict[str, Any]:
        return {
            "inputs": req.prompt,
            "parameters": req.parameters.to_payload(),
            "options": req.options.to_payload(),
        }

    def _parse_response(self, data: Any, req: GenerationRequest) -> GenerationResult:
        shape = decode_response(data)
        return GenerationResult(
            provider=self.name,
            model=req.model,
            raw_text=shape.generated_text or "",
            raw=data,
        )
