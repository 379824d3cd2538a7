"""Packing Orchestrator - Main Engine Entry Point

Coordinates box resolution:
1. Cache lookup (verified against the catalog)
2. Batch scan over keyset-paginated catalog pages (smallest volume first)
3. Resilient packability check per page (API, local fallback on unavailability)
"""

from enum import Enum
from typing import Optional, Sequence

from boxpacker.core.logging import logger

from .models import Box, Product
from .ports import BoxCatalog, Cursor, PackabilityChecker, ResultCache
from .requirements import aggregate_requirements


DEFAULT_PAGE_SIZE = 20


class ResolutionState(str, Enum):
    """박스 선택 상태"""

    CACHE_LOOKUP = "cache_lookup"
    BATCH_SCAN = "batch_scan"
    FOUND = "found"  # 종료
    EXHAUSTED = "exhausted"  # 종료 (정상 결과: 박스 없음)


class PackingOrchestrator:
    """박스 선택 오케스트레이터

    CACHE_LOOKUP → BATCH_SCAN → {FOUND, EXHAUSTED}

    - 캐시 히트 시 카탈로그 페이지 조회/판정 호출 없이 종료
    - 페이지 단위로 후보 전체를 checker에 넘김 (박스별 호출 아님)
    - 캐시 쓰기는 하지 않음 (API checker 책임)
    """

    def __init__(
        self,
        box_catalog: BoxCatalog,
        packability_checker: PackabilityChecker,
        cache: ResultCache,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """
        Args:
            box_catalog: 박스 카탈로그 (find_box / get_page)
            packability_checker: 판정기 (보통 ResilientPackabilityChecker)
            cache: 결과 캐시 (get 만 사용)
            page_size: 카탈로그 페이지 크기
        """
        if not box_catalog:
            raise ValueError("box_catalog must not be None")
        if not packability_checker:
            raise ValueError("packability_checker must not be None")
        if not cache:
            raise ValueError("cache must not be None")
        if page_size <= 0:
            raise ValueError(f"page_size must be positive: {page_size}")

        self.catalog = box_catalog
        self.checker = packability_checker
        self.cache = cache
        self.page_size = page_size

    def resolve(self, products: Sequence[Product]) -> Optional[Box]:
        """상품 목록을 담을 가장 작은 박스 선택

        Args:
            products: 검증된 상품 목록 (비어 있으면 안 됨)

        Returns:
            Box 또는 None (담을 수 있는 박스 없음)

        Raises:
            ValueError: products가 비어 있는 경우
        """
        if not products:
            raise ValueError("products must not be empty")

        logger.info(f"[Orchestrator] Starting box selection: products={len(products)}")
        state = ResolutionState.CACHE_LOOKUP

        requirement = aggregate_requirements(products)
        logger.debug(f"[Orchestrator] Product requirements: {requirement}")

        cached_box = self._try_cache(products)
        if cached_box is not None:
            state = ResolutionState.FOUND
            logger.info(f"[Orchestrator] Box selected from cache: box_id={cached_box.id}, state={state.value}")
            return cached_box

        state = ResolutionState.BATCH_SCAN
        cursor: Optional[Cursor] = None
        scanned = 0

        while state == ResolutionState.BATCH_SCAN:
            boxes = self.catalog.get_page(
                requirement.min_width,
                requirement.min_height,
                requirement.min_length,
                requirement.total_weight,
                self.page_size,
                cursor,
            )

            if not boxes:
                state = ResolutionState.EXHAUSTED
                break

            logger.debug(f"[Orchestrator] Suitable boxes batch: count={len(boxes)}")

            result = self.checker.find_first_packable_box(products, boxes)
            if result.is_fit and result.box is not None:
                scanned += self._position_of(boxes, result.box)
                state = ResolutionState.FOUND
                logger.info(
                    f"[Orchestrator] Box selected: box_id={result.box.id}, source={result.source}, "
                    f"scanned_candidates={scanned}"
                )
                return result.box

            scanned += len(boxes)
            last_box = boxes[-1]
            if last_box.id is None:
                # id 없는 박스로는 keyset 커서를 만들 수 없음
                logger.warning("[Orchestrator] Catalog returned a box without id, stopping scan")
                state = ResolutionState.EXHAUSTED
                break
            cursor = (last_box.volume, last_box.id)

        logger.warning(f"[Orchestrator] No suitable box found: scanned_candidates={scanned}, state={state.value}")
        return None

    def _try_cache(self, products: Sequence[Product]) -> Optional[Box]:
        """캐시된 박스 ID를 카탈로그에서 확인

        Returns:
            Optional[Box]: 캐시 히트이고 박스가 존재하면 Box, 아니면 None
        """
        box_id = self.cache.get(products)
        if box_id is None:
            return None

        box = self.catalog.find_box(box_id)
        if box is None:
            logger.warning(f"[Orchestrator] Cached box no longer exists in catalog: box_id={box_id}")
            return None
        return box

    @staticmethod
    def _position_of(boxes: Sequence[Box], selected: Box) -> int:
        for index, box in enumerate(boxes, start=1):
            if box.id is not None and box.id == selected.id:
                return index
        return len(boxes)
