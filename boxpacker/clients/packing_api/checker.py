"""Third-party Packability Checker - probe-and-bisect over a candidate page

One batch probe submits every candidate as a bin; the API is asked to put all
items into a single bin. When that succeeds, the page is bisected (left half
first) until one candidate remains, so a page of n boxes costs at most
ceil(log2(n)) + 1 round-trips instead of n.
"""

from __future__ import annotations

from typing import Optional, Sequence

from curl_cffi.requests.exceptions import RequestException, Timeout

from boxpacker.clients.http_client import SharedHttpClient
from boxpacker.core.exceptions import (
    PackingApiConfigurationException,
    PackingApiException,
    PackingApiStatusException,
    PackingApiTransportException,
)
from boxpacker.core.logging import logger, sanitize_for_log
from boxpacker.engine.bisection import find_first_fitting
from boxpacker.engine.models import Box, Product
from boxpacker.engine.ports import ResultCache
from boxpacker.engine.result import CheckResult
from boxpacker.engine.strategy import ExecutionStrategy

from .request import PackingApiRequest
from .response import PackingApiResponse


class ThirdPartyPackabilityChecker:
    """외부 패킹 API 기반 판정

    - 성공 시 선택 결과를 캐시에 기록 (캐시 쓰기는 이 경로에서만 발생)
    - 모든 API 장애는 CheckResult.unavailable(...)로 반환 (예외를 밖으로 던지지 않음)
    """

    FIND_BIN_SIZE_PATH = "/packer/findBinSize"

    def __init__(
        self,
        http_client: SharedHttpClient,
        cache: ResultCache,
        api_url: str,
        api_username: str,
        api_key: str,
        timeout_s: float = 4.0,
    ):
        self.http_client = http_client
        self.cache = cache
        self.api_url = api_url
        self.api_username = api_username
        self.api_key = api_key
        self.timeout_s = timeout_s

    def find_first_packable_box(self, products: Sequence[Product], boxes: Sequence[Box]) -> CheckResult:
        """후보 중 가장 작은 패킹 가능 박스 탐색

        Args:
            products: 상품 목록
            boxes: 치수/무게 필터를 통과한 후보 (부피 오름차순)

        Returns:
            CheckResult: FIT(box) | NOT_FIT | UNAVAILABLE(reason)
        """
        if not boxes:
            return CheckResult.not_fit(source="api")

        try:
            self._assert_configured()
            selected = find_first_fitting(
                boxes, lambda candidates: self._probe(products, candidates) is not None
            )
        except PackingApiException as e:
            level = ExecutionStrategy.log_level_for(e.retriable)
            logger.log(level, f"[PackingAPI] Unavailable, will use fallback: {e}")
            return CheckResult.unavailable(str(e), retriable=e.retriable)

        if selected is None:
            logger.debug(f"[PackingAPI] No candidate fits: candidates={len(boxes)}")
            return CheckResult.not_fit(source="api")

        logger.info(f"[PackingAPI] API selection succeeded: box_id={selected.id}")

        if selected.id is None:
            logger.warning("[PackingAPI] Selected box has no ID; skipping cache write.")
        else:
            self.cache.put(products, selected.id)

        return CheckResult.fit(selected)

    def _probe(self, products: Sequence[Product], candidates: Sequence[Box]) -> Optional[Box]:
        """후보 슬라이스 전체를 bin으로 제출해 한 박스에 모두 담기는지 확인

        Returns:
            API가 선택한 박스 또는 None (not fit)

        Raises:
            PackingApiException: API 사용 불가
        """
        request = PackingApiRequest.from_domain(products, candidates, self.api_username, self.api_key)
        response = self._send(request)

        if response.status_code >= 400:
            self._raise_for_status(response.status_code)

        parsed = PackingApiResponse.from_http_response(response.text or "")
        if parsed is None:
            return None

        selected_id = parsed.selected_packed_bin_id(len(products))
        if selected_id is None:
            return None

        box = request.box_by_external_id.get(selected_id)
        if box is None:
            logger.error(f"[PackingAPI] Response returned unknown bin id: {selected_id}")
            return None
        return box

    def _send(self, request: PackingApiRequest):
        payload = request.to_dict()
        url = self._endpoint_url()

        logger.info(f"[PackingAPI] Sending request: url={url}, bins={len(request.box_by_external_id)}")
        logger.debug(f"[PackingAPI] Payload: {sanitize_for_log(payload)}")

        try:
            response = self.http_client.post_json(
                url,
                payload,
                timeout_s=self.timeout_s,
                headers={"Accept": "application/json", "Content-Type": "application/json"},
            )
        except Timeout as e:
            raise PackingApiTransportException("timeout", details={"timeout_s": self.timeout_s}) from e
        except RequestException as e:
            raise PackingApiTransportException(
                "network failure", details={"error": f"{type(e).__name__}: {e}"}
            ) from e

        logger.info(f"[PackingAPI] Response status: {response.status_code}")
        logger.debug(f"[PackingAPI] Response body: {(response.text or '')[:2000]}")
        return response

    def _raise_for_status(self, status_code: int) -> None:
        error = PackingApiStatusException(status_code)
        level = ExecutionStrategy.log_level_for(error.retriable)
        logger.log(
            level,
            f"[PackingAPI] API returned status {status_code} - Will use fallback",
        )
        raise error

    def _assert_configured(self) -> None:
        missing = [
            name
            for name, value in (
                ("packing_api_url", self.api_url),
                ("packing_api_username", self.api_username),
                ("packing_api_key", self.api_key),
            )
            if not value
        ]
        if missing:
            raise PackingApiConfigurationException(missing)

    def _endpoint_url(self) -> str:
        return self.api_url.rstrip("/") + self.FIND_BIN_SIZE_PATH
