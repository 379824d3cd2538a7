"""데이터베이스 모델"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, Index
from boxpacker.core.database import Base


class Packaging(Base):
    """박스 카탈로그 테이블

    - dim_min/dim_mid/dim_max: 회전 불변 비교용으로 정렬해 둔 치수
    - volume: keyset 페이지네이션 정렬 키 (width * height * length)
    """

    __tablename__ = "packaging"

    id = Column(Integer, primary_key=True, autoincrement=True)
    width = Column(Float, nullable=False)
    height = Column(Float, nullable=False)
    length = Column(Float, nullable=False)
    max_weight = Column(Float, nullable=False)
    dim_min = Column(Float, nullable=False)
    dim_mid = Column(Float, nullable=False)
    dim_max = Column(Float, nullable=False)
    volume = Column(Float, nullable=False)

    __table_args__ = (
        Index("idx_packaging_dims_weight", "dim_min", "dim_mid", "dim_max", "max_weight"),
        Index("idx_packaging_volume_id", "volume", "id"),
    )

    def __init__(self, width: float, height: float, length: float, max_weight: float, id: int | None = None):
        dims = sorted((width, height, length))
        super().__init__(
            id=id,
            width=width,
            height=height,
            length=length,
            max_weight=max_weight,
            dim_min=dims[0],
            dim_mid=dims[1],
            dim_max=dims[2],
            volume=width * height * length,
        )

    def __repr__(self) -> str:
        return f"<Packaging(id={self.id}, {self.width}x{self.height}x{self.length}, max_weight={self.max_weight})>"


class PackingCache(Base):
    """패킹 계산 결과 캐시 테이블

    - id: 정규화된 상품 집합의 sha256 (64자)
    - selected_box_id: 외부 API가 확인한 박스 ID
    TTL 없음: 항목은 자동 만료되지 않습니다.
    """

    __tablename__ = "packing_calculation_cache"

    id = Column(String(64), primary_key=True)
    selected_box_id = Column(Integer, ForeignKey("packaging.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<PackingCache(hash={self.id[:12]}..., box={self.selected_box_id}, updated_at={self.updated_at})>"
