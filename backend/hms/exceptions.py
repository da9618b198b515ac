"""
业务异常定义
服务层抛出，由 main.py 中的异常处理器映射为 HTTP 状态码
"""
from typing import Any, Dict, Optional


class HotelError(Exception):
    """所有业务异常的基类"""

    status_code: int = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class BadRequestError(HotelError):
    """输入校验失败或违反业务规则 (400)"""

    status_code = 400


class UnauthorizedError(HotelError):
    """未认证或凭证无效 (401)"""

    status_code = 401


class ForbiddenError(HotelError):
    """已认证但无权操作该资源 (403)"""

    status_code = 403


class NotFoundError(HotelError):
    """资源不存在 (404)"""

    status_code = 404
