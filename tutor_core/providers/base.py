"""Provider 抽象接口。

回复解析器不直接依赖具体推理服务的 HTTP 细节，而是依赖此协议：

- 每个推理服务实现一个 GenerationProvider（如 HuggingFaceClient）。
- 负责：将 GenerationRequest 转成具体 API 请求，并把响应 JSON 解析为 GenerationResult。

测试中可以直接替换为假的 Provider，不需要真实网络。
"""

from typing import Protocol

from tutor_core.domain.models import GenerationRequest, GenerationResult


class GenerationProvider(Protocol):
    """文本生成 Provider 协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - generate(req): 执行一次生成调用，失败时抛出 BusinessError 子类。
    """

    name: str

    def generate(self, req: GenerationRequest) -> GenerationResult:
        ...
