"""Requirement Aggregation

Lower-bound filter for catalog queries: a box must be at least this large
(per sorted axis) and carry at least this much weight. Necessary, not sufficient.
"""

from dataclasses import dataclass
from typing import Sequence

from .models import Product


@dataclass(frozen=True)
class Requirement:
    min_width: float
    min_height: float
    min_length: float
    total_weight: float


def aggregate_requirements(products: Sequence[Product]) -> Requirement:
    """상품 목록의 정렬 치수 최대값과 총 무게 계산

    Args:
        products: 비어 있지 않은 상품 목록 (호출자가 보장)

    Returns:
        Requirement: 축별 최대 치수 + 무게 합
    """
    max_dims = [0.0, 0.0, 0.0]
    total_weight = 0.0

    for product in products:
        dims = product.sorted_dimensions()
        max_dims[0] = max(max_dims[0], dims[0])
        max_dims[1] = max(max_dims[1], dims[1])
        max_dims[2] = max(max_dims[2], dims[2])
        total_weight += product.weight

    return Requirement(
        min_width=max_dims[0],
        min_height=max_dims[1],
        min_length=max_dims[2],
        total_weight=total_weight,
    )
