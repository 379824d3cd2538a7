"""findBinSize 응답 해석

판정 규칙 (모두 만족해야 fit):
- status == 1
- bins_packed 에 박스가 정확히 1개
- not_packed_items 가 비어 있음
- 담긴 상품 id의 고유 개수 == 요청 상품 수

규칙을 만족하지 않는 정상 응답은 "not fit"(None)이고,
API 사용 불가 신호(음수 status, 계정 차단, 구조 오류)는 예외로 구분합니다.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from boxpacker.core.exceptions import (
    PackingApiApplicationException,
    PackingApiBlockedException,
    PackingApiResponseShapeException,
    PackingApiTransportException,
)
from boxpacker.core.logging import logger


BLOCKED_MARKERS = ("locked out", "banned")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PackingApiResponse:
    def __init__(self, response_node: dict[str, Any]):
        self.status = response_node.get("status")
        errors = response_node.get("errors")
        self.errors: list[Any] = errors if isinstance(errors, list) else []
        self.has_bins_packed = "bins_packed" in response_node
        self.bins_packed_raw = response_node.get("bins_packed")
        self.not_packed_items = response_node.get("not_packed_items")

    @classmethod
    def from_http_response(cls, body: str) -> Optional["PackingApiResponse"]:
        """응답 본문 파싱

        Returns:
            PackingApiResponse 또는 None ("response" 노드 없음 → not fit)

        Raises:
            PackingApiTransportException: 빈 본문 / JSON 디코딩 실패
            PackingApiResponseShapeException: 최상위가 객체가 아님
        """
        if not body:
            raise PackingApiTransportException("empty response body")

        try:
            decoded = json.loads(body)
        except json.JSONDecodeError as e:
            raise PackingApiTransportException("invalid JSON", details={"error": str(e)}) from e

        if not isinstance(decoded, dict):
            raise PackingApiResponseShapeException("top-level payload is not an object")

        response_node = decoded.get("response")
        if not isinstance(response_node, dict):
            logger.error('[PackingAPI] Response does not contain "response" node.')
            return None

        return cls(response_node)

    def selected_packed_bin_id(self, requested_item_count: int) -> Optional[str]:
        """모든 상품이 한 박스에 담겼다면 그 박스의 외부 id, 아니면 None"""
        self.assert_api_access_available()

        bins_packed = self.bins_packed()
        if len(bins_packed) != 1:
            logger.debug(f"[PackingAPI] Items were not packed into a single bin: bins_packed={len(bins_packed)}")
            return None

        if not isinstance(self.not_packed_items, list):
            logger.error('[PackingAPI] Response does not contain "not_packed_items" array.')
            return None
        if self.not_packed_items:
            logger.debug(f"[PackingAPI] Response contains not packed items: {len(self.not_packed_items)}")
            return None

        if self.status != 1 or not _is_int(self.status):
            logger.warning(f"[PackingAPI] Response status indicates failure: status={self.status}")
            return None

        first_bin = bins_packed[0]
        if not isinstance(first_bin, dict):
            logger.error("[PackingAPI] Packed bin is not an object.")
            return None

        packed_count = self._count_unique_packed_item_ids(first_bin.get("items"))
        if packed_count is None or packed_count != requested_item_count:
            logger.debug(
                f"[PackingAPI] Packed item count mismatch: packed={packed_count}, requested={requested_item_count}"
            )
            return None

        bin_data = first_bin.get("bin_data")
        if not isinstance(bin_data, dict):
            logger.error('[PackingAPI] Packed bin does not contain "bin_data".')
            return None

        bin_id = bin_data.get("id")
        if not isinstance(bin_id, str) or not bin_id:
            logger.error('[PackingAPI] Packed bin is missing a valid "id".')
            return None

        return bin_id

    def bins_packed(self) -> list[Any]:
        """
        Raises:
            PackingApiResponseShapeException: bins_packed 누락 또는 리스트가 아님
        """
        if not self.has_bins_packed:
            raise PackingApiResponseShapeException('missing "bins_packed"')
        if not isinstance(self.bins_packed_raw, list):
            raise PackingApiResponseShapeException('"bins_packed" is not a list')
        return self.bins_packed_raw

    def assert_api_access_available(self) -> None:
        """
        Raises:
            PackingApiApplicationException: 음수 status
            PackingApiBlockedException: 계정 잠금/차단 메시지
        """
        if _is_int(self.status) and self.status < 0:
            raise PackingApiApplicationException(self.status)

        for error in self.errors:
            if not isinstance(error, dict):
                continue
            message = error.get("message")
            if not isinstance(message, str):
                continue
            normalized = message.lower()
            if any(marker in normalized for marker in BLOCKED_MARKERS):
                raise PackingApiBlockedException(message)

    @staticmethod
    def _count_unique_packed_item_ids(items: Any) -> Optional[int]:
        if not isinstance(items, list):
            logger.error('[PackingAPI] Bin does not contain "items" array.')
            return None

        packed_ids: set[str] = set()
        for item in items:
            if not isinstance(item, dict):
                logger.error("[PackingAPI] Packed item entry is not an object.")
                return None
            item_id = item.get("id")
            if not isinstance(item_id, str) or not item_id:
                logger.error('[PackingAPI] Packed item is missing a valid "id".')
                return None
            packed_ids.add(item_id)

        return len(packed_ids)
