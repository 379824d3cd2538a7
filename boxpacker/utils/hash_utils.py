"""해싱 유틸리티"""
import hashlib
import json
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from boxpacker.engine.models import Product


def hash_string(text: str) -> str:
    """
    문자열을 SHA-256 해시로 변환

    Args:
        text: 해시할 문자열

    Returns:
        SHA-256 hex 문자열 (64자)
    """
    return hashlib.sha256(text.encode()).hexdigest()


def _dumps(value) -> str:
    return json.dumps(value, separators=(",", ":"))


def normalize_products(products: Sequence["Product"]) -> list[dict]:
    """
    상품 목록을 순서/회전에 무관한 형태로 정규화

    - 각 상품의 치수를 오름차순 정렬
    - 치수/무게를 소수점 6자리 문자열로 고정
    - 직렬화 문자열 기준으로 레코드 정렬

    Args:
        products: 상품 목록

    Returns:
        정규화된 레코드 리스트
    """
    records = [
        {
            "dims": [f"{value:.6f}" for value in product.sorted_dimensions()],
            "weight": f"{product.weight:.6f}",
        }
        for product in products
    ]
    records.sort(key=_dumps)
    return records


def generate_cache_key(products: Sequence["Product"]) -> str:
    """
    상품 목록으로 캐시 키 생성

    Args:
        products: 상품 목록

    Returns:
        packing_calculation_cache.id 로 쓰이는 64자 해시
    """
    return hash_string(_dumps({"products": normalize_products(products)}))
