"""Fallback Packability Checker - local volume/weight heuristic

Approximation used when the third-party API is unavailable. It never accepts a
set that obviously cannot fit (bounding box or weight), but may accept sets
that would not physically tile.
"""

from typing import Sequence

from boxpacker.core.logging import logger

from .models import Box, Dimensions, Product
from .result import CheckResult


class FallbackPackabilityChecker:
    """로컬 근사 패킹 판정"""

    def can_pack_into_box(self, products: Sequence[Product], box: Box) -> bool:
        """단일 박스 판정

        - 모든 상품의 정렬 치수가 박스 정렬 치수 이하
        - 무게 합 <= max_weight
        - 부피 합 <= 박스 부피
        """
        box_dims = box.sorted_dimensions()

        total_volume = 0.0
        total_weight = 0.0

        for product in products:
            product_dims = product.sorted_dimensions()
            if not self._dimensions_fit(product_dims, box_dims):
                logger.debug(
                    f"[Fallback] Product does not fit in box: product={product_dims}, box={box_dims}, box_id={box.id}"
                )
                return False

            total_weight += product.weight
            total_volume += product.volume

        if total_weight > box.max_weight:
            logger.debug(
                f"[Fallback] Total weight exceeds box max_weight: {total_weight} > {box.max_weight}, box_id={box.id}"
            )
            return False

        result = total_volume <= box.volume
        logger.debug(
            f"[Fallback] Packability result: {result}, volume={total_volume}/{box.volume}, box_id={box.id}"
        )
        return result

    def find_first_packable_box(self, products: Sequence[Product], boxes: Sequence[Box]) -> CheckResult:
        for box in boxes:
            if self.can_pack_into_box(products, box):
                logger.info(f"[Fallback] Box selected by local calculation: box_id={box.id}")
                return CheckResult.fallback_fit(box)

        return CheckResult.not_fit(source="fallback")

    @staticmethod
    def _dimensions_fit(product_dims: Dimensions, box_dims: Dimensions) -> bool:
        return (
            product_dims[0] <= box_dims[0]
            and product_dims[1] <= box_dims[1]
            and product_dims[2] <= box_dims[2]
        )
