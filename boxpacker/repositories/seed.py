"""기본 박스 카탈로그 시드"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from boxpacker.core.logging import logger
from boxpacker.repositories.models import Packaging


# (id, width, height, length, max_weight)
DEFAULT_BOXES: list[tuple[int, float, float, float, float]] = [
    (1, 2.5, 3.0, 1.0, 20.0),
    (2, 4.0, 4.0, 4.0, 20.0),
    (3, 2.0, 2.0, 10.0, 20.0),
    (4, 5.5, 6.0, 7.5, 30.0),
    (5, 9.0, 9.0, 9.0, 30.0),
    (6, 1.0, 1.0, 1.0, 5.0),
    (7, 2.0, 3.0, 4.0, 10.0),
    (8, 3.0, 5.0, 8.0, 15.0),
    (9, 6.0, 6.0, 12.0, 25.0),
    (10, 10.0, 12.0, 14.0, 40.0),
    (11, 12.5, 15.0, 18.0, 60.0),
    (12, 20.0, 20.0, 20.0, 80.0),
]


def seed_default_boxes(db: Session) -> int:
    """packaging 테이블이 비어 있을 때만 기본 박스를 삽입

    Returns:
        삽입된 행 수 (이미 데이터가 있으면 0)
    """
    existing = db.query(func.count(Packaging.id)).scalar() or 0
    if existing:
        logger.info(f"Packaging catalog already populated ({existing} boxes), skipping seed")
        return 0

    for box_id, width, height, length, max_weight in DEFAULT_BOXES:
        db.add(Packaging(id=box_id, width=width, height=height, length=length, max_weight=max_weight))
    db.flush()
    logger.info(f"Seeded {len(DEFAULT_BOXES)} default boxes")
    return len(DEFAULT_BOXES)
