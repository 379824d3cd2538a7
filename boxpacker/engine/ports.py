"""Engine Ports - interfaces consumed by the orchestrator

Implementations are constructor-injected so tests can swap in fakes.
"""

from typing import Optional, Protocol, Sequence

from .models import Box, Product
from .result import CheckResult


Cursor = tuple[float, int]


class BoxCatalog(Protocol):
    """박스 카탈로그 (읽기 전용)"""

    def find_box(self, box_id: int) -> Optional[Box]:
        ...

    def get_page(
        self,
        min_width: float,
        min_height: float,
        min_length: float,
        min_weight: float,
        limit: int,
        cursor: Optional[Cursor] = None,
    ) -> list[Box]:
        """(volume, id) 오름차순 페이지 조회

        cursor가 주어지면 (volume, id)가 cursor보다 큰 박스만 반환합니다.
        빈 리스트는 카탈로그 소진을 의미합니다.
        """
        ...


class PackabilityChecker(Protocol):
    """후보 박스 목록에서 첫 번째(가장 작은) 패킹 가능 박스 탐색"""

    def find_first_packable_box(
        self, products: Sequence[Product], boxes: Sequence[Box]
    ) -> CheckResult:
        ...


class ResultCache(Protocol):
    """정규화된 상품 집합 → 선택된 박스 ID"""

    def get(self, products: Sequence[Product]) -> Optional[int]:
        ...

    def put(self, products: Sequence[Product], box_id: int) -> None:
        ...
