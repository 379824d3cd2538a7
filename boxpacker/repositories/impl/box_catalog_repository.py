"""박스 카탈로그 리포지토리 - keyset 페이지네이션 조회."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from boxpacker.core.logging import logger
from boxpacker.engine.models import Box
from boxpacker.repositories.models import Packaging


class BoxCatalogRepository:
    """packaging 테이블 데이터 액세스 레이어 (읽기 전용)"""

    def __init__(self, db: Session):
        self.db = db

    def find_box(self, box_id: int) -> Optional[Box]:
        """ID로 박스 조회"""
        row = self.db.get(Packaging, box_id)
        if row is None:
            return None
        return self._to_box(row)

    def get_page(
        self,
        min_width: float,
        min_height: float,
        min_length: float,
        min_weight: float,
        limit: int,
        cursor: Optional[tuple[float, int]] = None,
    ) -> list[Box]:
        """조건을 만족하는 박스를 (volume, id) 오름차순으로 limit개 조회

        Args:
            min_width / min_height / min_length: 정렬된 요구 치수 (작은 것부터)
            min_weight: 요구 적재 무게
            limit: 페이지 크기
            cursor: 이전 페이지 마지막 박스의 (volume, id). None이면 첫 페이지

        Returns:
            박스 리스트 (빈 리스트 = 소진)
        """
        query = (
            self.db.query(Packaging)
            .filter(Packaging.dim_min >= min_width)
            .filter(Packaging.dim_mid >= min_height)
            .filter(Packaging.dim_max >= min_length)
            .filter(Packaging.max_weight >= min_weight)
        )

        if cursor is not None:
            last_volume, last_id = cursor
            query = query.filter(
                or_(
                    Packaging.volume > last_volume,
                    and_(Packaging.volume == last_volume, Packaging.id > last_id),
                )
            )

        rows = query.order_by(Packaging.volume.asc(), Packaging.id.asc()).limit(limit).all()
        logger.debug(f"[BoxCatalog] Page fetched: size={len(rows)}, cursor={cursor}")
        return [self._to_box(row) for row in rows]

    @staticmethod
    def _to_box(row: Packaging) -> Box:
        return Box(
            id=row.id,
            width=row.width,
            height=row.height,
            length=row.length,
            max_weight=row.max_weight,
        )
