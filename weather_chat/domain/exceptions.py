"""天气查询相关的业务异常。

Provider 客户端只抛出这里定义的异常；路由层统一捕获，记录日志后
转换为固定的错误回复。“城市不存在”不是异常，而是 status_code 非 200 的快照。
"""

from typing import Any, Dict


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "NETWORK_ERROR"）。
        message: 错误详情，仅用于日志，不直接展示给用户。
        http_status: 上游返回的 HTTP 状态码（若有）。
        extra: 其他补充字段，通常包含 provider 名称。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)

    def to_log_fields(self) -> Dict[str, Any]:
        """转成结构化日志字段。"""
        fields: Dict[str, Any] = {
            "error_code": self.code,
            "error": self.message,
            "http_status": self.http_status,
        }
        fields.update(self.extra)
        return fields


class NetworkError(BusinessError):
    """连接失败、DNS 错误、HTTP 超时等。"""


class ApiError(BusinessError):
    """天气服务返回服务端错误（Open-Meteo 为任意 4xx/5xx）。"""


class RateLimitError(BusinessError):
    """天气服务限流（HTTP 429）。"""


class ParseError(BusinessError):
    """响应体不是合法 JSON，或字段类型不符合预期。"""
