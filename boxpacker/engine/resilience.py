"""Resilient Packability Checker - API first, local fallback on unavailability"""

from typing import Sequence

from boxpacker.core.logging import logger

from .models import Box, Product
from .ports import PackabilityChecker
from .result import CheckResult, CheckStatus


class ResilientPackabilityChecker:
    """외부 API 우선, 사용 불가 시 로컬 계산으로 대체

    - primary가 FIT/NOT_FIT을 반환하면 그대로 반환 (fallback 호출 없음)
    - primary가 UNAVAILABLE을 반환하면 fallback 결과를 반환
    캐싱은 하지 않습니다 (API 어댑터 책임).
    """

    def __init__(self, primary: PackabilityChecker, fallback: PackabilityChecker):
        if primary is None:
            raise ValueError("primary must not be None")
        if fallback is None:
            raise ValueError("fallback must not be None")
        self.primary = primary
        self.fallback = fallback

    def find_first_packable_box(self, products: Sequence[Product], boxes: Sequence[Box]) -> CheckResult:
        logger.debug(f"[Resilient] Using primary checker for batch: candidates={len(boxes)}")
        result = self.primary.find_first_packable_box(products, boxes)

        if result.status != CheckStatus.UNAVAILABLE:
            return result

        logger.warning(
            f"[Resilient] Primary checker unavailable, using fallback: reason={result.reason}, candidates={len(boxes)}"
        )
        return self.fallback.find_first_packable_box(products, boxes)


class ForcedFallbackChecker:
    """항상 UNAVAILABLE을 반환하는 primary (packing_checker_mode="fallback")

    외부 API 없이 결정적으로 fallback 경로를 타게 합니다.
    """

    def find_first_packable_box(self, products: Sequence[Product], boxes: Sequence[Box]) -> CheckResult:
        return CheckResult.unavailable("forced fallback", source="forced")
