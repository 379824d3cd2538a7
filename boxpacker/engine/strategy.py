"""Execution Strategy - API/fallback path selection

Replaces a process-wide "force fallback" flag with an explicit strategy passed
into the dependency wiring.
"""

import logging
from enum import Enum
from typing import Callable

from .fallback import FallbackPackabilityChecker
from .ports import PackabilityChecker
from .resilience import ForcedFallbackChecker, ResilientPackabilityChecker


class ExecutionPath(str, Enum):
    """패킹 판정 경로"""

    API = "api"
    FALLBACK = "fallback"


class ExecutionStrategy:
    """판정 경로 결정

    Usage:
        strategy = ExecutionStrategy.from_mode(settings.packing_checker_mode)
        checker = strategy.build_checker(lambda: ThirdPartyPackabilityChecker(...))
    """

    def __init__(self, path: ExecutionPath = ExecutionPath.API):
        self.path = path

    @classmethod
    def from_mode(cls, mode: str) -> "ExecutionStrategy":
        """설정 문자열("api" | "fallback")로 전략 생성

        Raises:
            ValueError: 알 수 없는 모드
        """
        return cls(ExecutionPath(mode.strip().lower()))

    def build_checker(
        self, api_checker_factory: Callable[[], PackabilityChecker]
    ) -> ResilientPackabilityChecker:
        """경로에 맞는 primary를 골라 ResilientPackabilityChecker로 감싼다

        FALLBACK 경로에서는 api_checker_factory를 호출하지 않습니다.
        """
        if self.path == ExecutionPath.FALLBACK:
            primary: PackabilityChecker = ForcedFallbackChecker()
        else:
            primary = api_checker_factory()

        return ResilientPackabilityChecker(primary, FallbackPackabilityChecker())

    @staticmethod
    def log_level_for(retriable: bool) -> int:
        """API 실패 로그 레벨

        일시적 오류(타임아웃, rate limit 등)는 WARNING, 나머지는 ERROR.
        동작(fallback 전환)은 동일하고 관측용으로만 구분합니다.
        """
        return logging.WARNING if retriable else logging.ERROR
