"""Domain Models - Product and Box value objects

Both are immutable; construction validates bounds and raises ValidationException.
"""

import math
from dataclasses import dataclass
from typing import Optional

from boxpacker.core.exceptions import ValidationException


Dimensions = tuple[float, float, float]


def _sorted_dimensions(width: float, height: float, length: float) -> Dimensions:
    dims = sorted((width, height, length))
    return dims[0], dims[1], dims[2]


@dataclass(frozen=True)
class Product:
    """포장할 상품

    Attributes:
        width / height / length: 치수 (MIN_DIMENSION ~ MAX_DIMENSION)
        weight: 무게 (0 초과, MAX_WEIGHT 이하)
    """

    MIN_DIMENSION = 0.1
    MAX_DIMENSION = 1000.0
    MAX_WEIGHT = 10000.0

    width: float
    height: float
    length: float
    weight: float

    def __post_init__(self):
        for field in ("width", "height", "length"):
            value = getattr(self, field)
            if not math.isfinite(value):
                raise ValidationException(field, f"must be a finite number (got {value})")
            if value < self.MIN_DIMENSION:
                raise ValidationException(
                    field, f"must be >= {self.MIN_DIMENSION:.1f} (got {value:.2f})"
                )
            if value > self.MAX_DIMENSION:
                raise ValidationException(
                    field, f"must be <= {self.MAX_DIMENSION:.0f} (got {value:.2f})"
                )

        if not math.isfinite(self.weight):
            raise ValidationException("weight", f"must be a finite number (got {self.weight})")
        if self.weight <= 0:
            raise ValidationException("weight", "must be > 0")
        if self.weight > self.MAX_WEIGHT:
            raise ValidationException(
                "weight", f"must be <= {self.MAX_WEIGHT:.0f} kg (got {self.weight:.2f})"
            )

    @property
    def volume(self) -> float:
        return self.width * self.height * self.length

    def sorted_dimensions(self) -> Dimensions:
        """회전 불변 비교용 오름차순 치수"""
        return _sorted_dimensions(self.width, self.height, self.length)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "length": self.length,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class Box:
    """배송 박스

    Attributes:
        id: 카탈로그 ID (카탈로그 밖에서 만든 박스는 None)
        width / height / length: 내부 치수 (0 초과)
        max_weight: 최대 적재 무게 (0 초과)
    """

    id: Optional[int]
    width: float
    height: float
    length: float
    max_weight: float

    def __post_init__(self):
        for field in ("width", "height", "length", "max_weight"):
            value = getattr(self, field)
            if not (math.isfinite(value) and value > 0):
                raise ValidationException(field, f"must be a finite number > 0 (got {value})")

    @property
    def volume(self) -> float:
        return self.width * self.height * self.length

    def sorted_dimensions(self) -> Dimensions:
        return _sorted_dimensions(self.width, self.height, self.length)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "length": self.length,
            "maxWeight": self.max_weight,
        }
