"""Cache Adapter - content-addressed result cache for the orchestrator"""

from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from boxpacker.core.exceptions import DatabaseException
from boxpacker.core.logging import logger
from boxpacker.repositories.impl.packing_cache_repository import PackingCacheRepository
from boxpacker.utils.hash_utils import generate_cache_key

from .models import Product


class CacheAdapter:
    """패킹 결과 캐시 어댑터

    상품 목록을 정규화 해시로 변환해 PackingCacheRepository에 위임합니다.
    캐시 장애는 선택 결과에 영향을 주지 않도록 로깅 후 무시합니다.
    """

    def __init__(self, repository: PackingCacheRepository):
        """
        Args:
            repository: PackingCacheRepository 인스턴스

        Raises:
            ValueError: repository가 None인 경우
        """
        if repository is None:
            raise ValueError("repository must not be None")
        self.repository = repository

    def get(self, products: Sequence[Product]) -> Optional[int]:
        """캐시 조회

        Args:
            products: 상품 목록

        Returns:
            int or None: 캐시된 박스 ID (박스 존재 여부는 호출자가 확인)
        """
        cache_key = generate_cache_key(products)
        logger.debug(f"[PackingCache] Checking for cached result: hash={cache_key}")

        try:
            box_id = self.repository.get_selected_box_id(cache_key)
        except SQLAlchemyError as e:
            logger.warning(f"[PackingCache] Cache get failed: {type(e).__name__}: {e}")
            return None

        if box_id is None:
            logger.debug("[PackingCache] Cache miss")
            return None

        logger.debug(f"[PackingCache] Cache hit: selected_box_id={box_id}")
        return box_id

    def put(self, products: Sequence[Product], box_id: int) -> None:
        """캐시 저장 (동시 쓰기 안전)

        Args:
            products: 상품 목록
            box_id: 외부 API가 확인한 박스 ID
        """
        cache_key = generate_cache_key(products)
        logger.debug(f"[PackingCache] Storing cache result: hash={cache_key}, selected_box_id={box_id}")

        try:
            self.repository.upsert(cache_key, box_id)
        except DatabaseException as e:
            # 캐시 저장 실패는 치명적이지 않으므로 무시
            logger.warning(f"[PackingCache] Cache put failed: {e}")
