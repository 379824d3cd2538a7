"""패킹 계산 캐시 리포지토리 - DB 기반 영속 캐시 (race-safe upsert)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from boxpacker.core.logging import logger
from boxpacker.core.exceptions import DatabaseException
from boxpacker.repositories.models import PackingCache


class PackingCacheRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_selected_box_id(self, cache_key: str) -> Optional[int]:
        """캐시된 박스 ID 반환 (없으면 None)."""
        # 다른 세션이 커밋한 최신 값을 보도록 identity map을 무시
        row = (
            self.db.query(PackingCache)
            .filter(PackingCache.id == cache_key)
            .populate_existing()
            .first()
        )
        if not row:
            return None
        return row.selected_box_id

    def upsert(self, cache_key: str, selected_box_id: int) -> None:
        """캐시를 삽입/갱신.

        동일 키에 대한 동시 쓰기:
        - 기존 행은 SELECT ... FOR UPDATE 로 잠근 뒤 갱신
        - 삽입 충돌(unique 위반)은 롤백 후 재조회 + 갱신으로 흡수
        마지막으로 커밋한 쓰기가 남습니다.
        """
        try:
            row = self._find_for_update(cache_key)
            if row is not None:
                self._update(row, selected_box_id)
                self.db.commit()
                logger.info(f"[PackingCache] Updated existing cache entry: box={selected_box_id}")
                return

            try:
                self.db.add(PackingCache(id=cache_key, selected_box_id=selected_box_id))
                self.db.commit()
                logger.debug(f"[PackingCache] Created new cache entry: box={selected_box_id}")
                return
            except IntegrityError:
                # 다른 요청이 같은 해시를 먼저 삽입함
                self.db.rollback()

            row = self._find_for_update(cache_key)
            if row is None:
                # FK 위반 등 중복 키가 아닌 무결성 오류
                raise DatabaseException(
                    "Failed to write packing cache: integrity error without existing entry",
                    details={"cache_key": cache_key, "selected_box_id": selected_box_id},
                )
            self._update(row, selected_box_id)
            self.db.commit()
            logger.info(f"[PackingCache] Race detected, updated existing cache entry: hash={cache_key}")
        except DatabaseException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"[PackingCache] DB cache write error: {type(e).__name__}: {e}")
            raise DatabaseException(f"Failed to write packing cache: {e}")

    def _find_for_update(self, cache_key: str) -> Optional[PackingCache]:
        return (
            self.db.query(PackingCache)
            .filter(PackingCache.id == cache_key)
            .with_for_update()
            .populate_existing()
            .first()
        )

    @staticmethod
    def _update(row: PackingCache, selected_box_id: int) -> None:
        row.selected_box_id = selected_box_id
        row.updated_at = datetime.utcnow()
