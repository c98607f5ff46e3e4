"""统一业务异常模型。

Provider 客户端、会话驱动等模块抛出的业务级错误都继承自 BusinessError，
由回复解析器（ResponseResolver）或 API 层统一捕获。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider、model 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """第三方 API 返回非 2xx/429 错误时抛出。"""


class RateLimitError(BusinessError):
    """Provider 限流错误。本项目不做重试，直接降级到下一层。"""


class ValidationError(BusinessError):
    """参数或配置校验失败（缺少凭证、请求体格式错误等）。"""


class ResponseShapeError(BusinessError):
    """Provider 返回的 JSON 既不是列表形态也不是对象形态。"""


class SessionBusyError(BusinessError):
    """练习会话已有请求在途时再次提交。"""
