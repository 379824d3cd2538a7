"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class BoxPackerException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 외부 패킹 API 관련 예외
# NOTE: 이 계열 예외는 ThirdPartyPackabilityChecker 밖으로 던져지지 않습니다.
# 체커가 CheckResult.unavailable(...)로 변환하고, ResilientPackabilityChecker가 fallback을 선택합니다.
class PackingApiException(BoxPackerException):
    """외부 패킹 API 사용 불가 예외의 기본 클래스"""
    retriable: bool = False

    def __init__(self, message: str, error_code: str = "PACKING_API_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "PACKING_API_ERROR", details)


class PackingApiConfigurationException(PackingApiException):
    """API URL/계정/키 미설정"""
    def __init__(self, missing: list[str], details: Optional[dict[str, Any]] = None):
        message = f"Missing third-party packing API configuration: {', '.join(missing)}"
        super().__init__(message, "PACKING_API_NOT_CONFIGURED", details or {"missing": missing})


class PackingApiTransportException(PackingApiException):
    """네트워크 실패, 타임아웃, 응답 본문 디코딩 실패"""
    retriable = True

    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Third-party packing API transport failure: {reason}"
        super().__init__(message, "PACKING_API_TRANSPORT_ERROR", details or {"reason": reason})


class PackingApiStatusException(PackingApiException):
    """HTTP 4xx/5xx 응답"""
    RETRIABLE_STATUS_CODES = (408, 429, 503, 504)  # Timeout, RateLimit, ServiceUnavailable, GatewayTimeout

    def __init__(self, status_code: int, details: Optional[dict[str, Any]] = None):
        self.status_code = status_code
        self.retriable = status_code in self.RETRIABLE_STATUS_CODES
        message = f"Third-party API error (status {status_code}). Falling back to local calculation."
        super().__init__(message, "PACKING_API_HTTP_ERROR",
                         details or {"status_code": status_code, "retriable": self.retriable})


class PackingApiApplicationException(PackingApiException):
    """API가 음수 status를 반환 (애플리케이션 레벨 오류)"""
    def __init__(self, status: int, details: Optional[dict[str, Any]] = None):
        message = f"Third-party API application error (status {status}). Falling back to local calculation."
        super().__init__(message, "PACKING_API_APPLICATION_ERROR", details or {"status": status})


class PackingApiBlockedException(PackingApiException):
    """계정 잠금/차단 (locked out, banned)"""
    def __init__(self, api_message: str, details: Optional[dict[str, Any]] = None):
        message = "Third-party API access blocked. Falling back to local calculation."
        super().__init__(message, "PACKING_API_BLOCKED", details or {"api_message": api_message})


class PackingApiResponseShapeException(PackingApiException):
    """응답 구조 오류 (필수 필드 누락, 타입 불일치)"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Third-party packing API returned invalid response shape: {reason}"
        super().__init__(message, "PACKING_API_INVALID_RESPONSE", details or {"reason": reason})


# 데이터베이스 관련 예외
class DatabaseException(BoxPackerException):
    """데이터베이스 관련 예외"""
    def __init__(self, message: str, error_code: str = "DB_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DB_ERROR", details)


# 유효성 검증 관련 예외
class ValidationException(BoxPackerException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        self.field = field
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                         details or {"field": field, "reason": reason})
