"""Check Result - Tagged result of a packability check

Every checker (third-party API, local fallback, resilient wrapper) returns a
CheckResult instead of raising, so "not fit" and "API unavailable" can never be
confused by callers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import Box


class CheckStatus(str, Enum):
    """패킹 가능 여부 판정 상태"""

    FIT = "fit"  # 외부 API가 확인한 박스
    FALLBACK_FIT = "fallback_fit"  # 로컬 근사 계산으로 선택된 박스
    NOT_FIT = "not_fit"  # 후보 중 담을 수 있는 박스 없음 (정상 결과)
    UNAVAILABLE = "unavailable"  # 외부 API 사용 불가 → fallback 필요


@dataclass(frozen=True)
class CheckResult:
    """패킹 판정 결과

    Attributes:
        status: 판정 상태
        box: 선택된 박스 (FIT / FALLBACK_FIT 일 때만)
        source: 결과 출처 ("api" | "fallback" | "forced")
        reason: UNAVAILABLE 사유 (로깅용)
        retriable: UNAVAILABLE 사유가 일시적 오류인지 (로그 레벨 결정용)
    """

    status: CheckStatus
    box: Optional[Box] = None
    source: Optional[str] = None
    reason: Optional[str] = None
    retriable: bool = False

    @property
    def is_fit(self) -> bool:
        return self.status in (CheckStatus.FIT, CheckStatus.FALLBACK_FIT)

    @property
    def is_unavailable(self) -> bool:
        return self.status == CheckStatus.UNAVAILABLE

    @classmethod
    def fit(cls, box: Box) -> "CheckResult":
        return cls(status=CheckStatus.FIT, box=box, source="api")

    @classmethod
    def fallback_fit(cls, box: Box) -> "CheckResult":
        return cls(status=CheckStatus.FALLBACK_FIT, box=box, source="fallback")

    @classmethod
    def not_fit(cls, source: str) -> "CheckResult":
        return cls(status=CheckStatus.NOT_FIT, source=source)

    @classmethod
    def unavailable(cls, reason: str, retriable: bool = False, source: str = "api") -> "CheckResult":
        return cls(
            status=CheckStatus.UNAVAILABLE,
            source=source,
            reason=reason,
            retriable=retriable,
        )
