"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    ListingError (베이스)
    ├── APICallError (Heroku API 호출 실패)
    ├── ConfigError (설정 관련)
    └── ExportError (파일 출력 실패)

Usage:
    from core.exceptions import APICallError

    try:
        dynos = client.list_dynos(app_id)
    except APICallError as e:
        if is_not_found(e):
            ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import requests

# =============================================================================
# 베이스 예외
# =============================================================================


class ListingError(Exception):
    """heroku-listing 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


# =============================================================================
# API 호출 관련 예외
# =============================================================================


class APICallError(ListingError):
    """Heroku API 호출 관련 예외

    HTTP 응답 오류와 requests 전송 오류를 하나의 예외로 감쌉니다.
    """

    def __init__(
        self,
        operation: str,
        status_code: int | None = None,
        error_id: str | None = None,
        error_message: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"heroku.{operation} 실패"
        if status_code is not None:
            message = f"{message} (HTTP {status_code}"
            message = f"{message}, {error_id})" if error_id else f"{message})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.operation = operation
        self.status_code = status_code
        self.error_id = error_id
        self.error_message = error_message
        self.details.update(
            {
                "operation": operation,
                "status_code": status_code,
                "error_id": error_id,
            }
        )

    @classmethod
    def from_response(cls, operation: str, response: requests.Response) -> APICallError:
        """Heroku 에러 응답으로부터 생성

        Heroku는 {"id": "not_found", "message": "..."} 형식의 본문을 반환합니다.

        Args:
            operation: API 작업 이름
            response: 실패한 HTTP 응답

        Returns:
            APICallError 인스턴스
        """
        error_id = None
        error_message = None
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error_id = body.get("id")
            error_message = body.get("message")
        if not error_message:
            error_message = response.reason or None

        return cls(
            operation=operation,
            status_code=response.status_code,
            error_id=error_id,
            error_message=error_message,
        )


# =============================================================================
# 설정 / 출력 관련 예외
# =============================================================================


class ConfigError(ListingError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class ExportError(ListingError):
    """파일 출력 실패"""

    def __init__(
        self,
        path: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"파일 출력 오류 [{path}]: {message}"
        super().__init__(full_message, cause)
        self.path = path
        self.details["path"] = path


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def _status_of(error: Exception) -> int | None:
    if isinstance(error, APICallError):
        return error.status_code

    # requests.HTTPError 직접 확인
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None)


def is_access_denied(error: Exception) -> bool:
    """인증/권한 오류인지 확인"""
    return _status_of(error) in (401, 403)


def is_throttling(error: Exception) -> bool:
    """요청 제한 오류인지 확인"""
    if isinstance(error, APICallError) and error.error_id == "rate_limit":
        return True
    return _status_of(error) == 429


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인"""
    return _status_of(error) == 404


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, APICallError):
        friendly_messages = {
            401: "인증에 실패했습니다. 토큰 또는 사용자 정보를 확인하세요.",
            403: "권한이 없습니다.",
            429: "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }
        if error.status_code in friendly_messages:
            return f"{friendly_messages[error.status_code]} ({error.operation})"
        return str(error)

    if isinstance(error, ListingError):
        return str(error)

    return f"{error.__class__.__name__}: {error}"
