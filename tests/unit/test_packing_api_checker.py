"""ThirdPartyPackabilityChecker 테스트 (FakeHttpClient 로 외부 API 대체)."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Callable, Optional

import pytest
from curl_cffi.requests.exceptions import RequestException, Timeout

from boxpacker.clients.packing_api import PackingApiRequest, ThirdPartyPackabilityChecker
from boxpacker.engine.models import Box, Product
from boxpacker.engine.result import CheckStatus


API_URL = "https://packing.example.test"

BOXES = [
    Box(id=6, width=1.0, height=1.0, length=1.0, max_weight=5.0),
    Box(id=1, width=2.5, height=3.0, length=1.0, max_weight=20.0),
    Box(id=3, width=2.0, height=2.0, length=10.0, max_weight=20.0),
    Box(id=7, width=2.0, height=3.0, length=4.0, max_weight=10.0),
]
PRODUCTS = [
    Product(width=1.0, height=2.0, length=3.0, weight=1.0),
    Product(width=0.5, height=0.5, length=0.5, weight=0.5),
]


@dataclass
class FakeResponse:
    status_code: int
    text: str


def json_response(body: Any, status_code: int = 200) -> FakeResponse:
    return FakeResponse(status_code=status_code, text=json.dumps(body))


class FakeHttpClient:
    """SharedHttpClient Fake - handler(payload) 결과를 반환하고 요청을 기록"""

    def __init__(self, handler: Callable[[dict], FakeResponse]):
        self.handler = handler
        self.requests: list[dict] = []
        self.urls: list[str] = []
        self.timeouts: list[float] = []

    def post_json(self, url, payload, *, timeout_s, headers=None):
        self.urls.append(url)
        self.timeouts.append(timeout_s)
        self.requests.append(payload)
        return self.handler(payload)


def packed_response(bin_id: str, item_ids: list[str], status: int = 1, not_packed: Optional[list] = None) -> dict:
    return {
        "response": {
            "status": status,
            "errors": [],
            "bins_packed": [{"bin_data": {"id": bin_id}, "items": [{"id": i} for i in item_ids]}],
            "not_packed_items": not_packed or [],
        }
    }


def fits_when(fits: Callable[[int], bool]) -> Callable[[dict], FakeResponse]:
    """submitted bins 중 fits(box_id) 가 참인 첫 번째 bin에 모두 담는 가짜 API"""

    def handler(payload: dict) -> FakeResponse:
        item_ids = [item["id"] for item in payload["items"]]
        for bin_ in payload["bins"]:
            box_id = int(bin_["id"].split("-")[1])
            if fits(box_id):
                return json_response(packed_response(bin_["id"], item_ids))
        return json_response(
            {
                "response": {
                    "status": 1,
                    "errors": [],
                    "bins_packed": [],
                    "not_packed_items": [{"id": i} for i in item_ids],
                }
            }
        )

    return handler


def static(body: Any = None, status_code: int = 200, text: Optional[str] = None) -> Callable[[dict], FakeResponse]:
    def handler(payload: dict) -> FakeResponse:
        if text is not None:
            return FakeResponse(status_code=status_code, text=text)
        return json_response(body, status_code=status_code)

    return handler


def raising(error: Exception) -> Callable[[dict], FakeResponse]:
    def handler(payload: dict) -> FakeResponse:
        raise error

    return handler


class RecordingCache:
    def __init__(self):
        self.put_calls: list[tuple[list[Product], int]] = []

    def get(self, products):
        return None

    def put(self, products, box_id):
        self.put_calls.append((list(products), box_id))


def make_checker(client: FakeHttpClient, cache=None, **overrides) -> ThirdPartyPackabilityChecker:
    options = {
        "api_url": API_URL,
        "api_username": "user",
        "api_key": "secret-key",
        "timeout_s": 1.5,
    }
    options.update(overrides)
    return ThirdPartyPackabilityChecker(http_client=client, cache=cache or RecordingCache(), **options)


class TestRequestPayload:
    def test_wire_format(self):
        request = PackingApiRequest.from_domain(PRODUCTS, BOXES[:2], "user", "key")
        payload = request.to_dict()

        assert payload["username"] == "user"
        assert payload["api_key"] == "key"
        assert payload["params"] == {"optimization_mode": "bins_number", "item_distribution": False}
        assert payload["items"][0] == {"id": "item-1", "w": 1.0, "h": 2.0, "d": 3.0, "wg": 1.0, "q": 1}
        assert payload["bins"][0] == {"id": "box-6-1", "w": 1.0, "h": 1.0, "d": 1.0, "max_wg": 5.0}
        assert set(request.box_by_external_id) == {"box-6-1", "box-1-2"}

    def test_box_without_id_gets_zero_in_external_id(self):
        box = Box(id=None, width=1.0, height=1.0, length=1.0, max_weight=1.0)
        request = PackingApiRequest.from_domain(PRODUCTS, [box], "user", "key")

        assert list(request.box_by_external_id) == ["box-0-1"]


class TestFit:
    def test_selects_smallest_fitting_box_and_writes_cache(self):
        cache = RecordingCache()
        checker = make_checker(FakeHttpClient(fits_when(lambda box_id: box_id in (3, 7))), cache=cache)

        result = checker.find_first_packable_box(PRODUCTS, BOXES)

        assert result.status == CheckStatus.FIT
        assert result.box.id == 3
        assert result.source == "api"
        assert cache.put_calls == [(PRODUCTS, 3)]

    def test_probe_count_is_logarithmic_and_left_half_first(self):
        client = FakeHttpClient(fits_when(lambda box_id: box_id == 7))
        checker = make_checker(client)

        result = checker.find_first_packable_box(PRODUCTS, BOXES)

        assert result.box.id == 7
        assert len(client.requests) <= math.ceil(math.log2(len(BOXES))) + 1
        probed = [[b["id"] for b in payload["bins"]] for payload in client.requests]
        assert probed == [
            ["box-6-1", "box-1-2", "box-3-3", "box-7-4"],
            ["box-6-1", "box-1-2"],
            ["box-3-1"],
        ]

    def test_request_posts_to_find_bin_size_with_timeout(self):
        client = FakeHttpClient(fits_when(lambda box_id: True))
        checker = make_checker(client, api_url=API_URL + "/")

        checker.find_first_packable_box(PRODUCTS, BOXES[:1])

        assert client.urls == [API_URL + "/packer/findBinSize"]
        assert client.timeouts == [1.5]

    def test_duplicate_item_ids_count_once(self):
        checker = make_checker(FakeHttpClient(static(packed_response("box-6-1", ["item-1", "item-1"]))))

        # 고유 id 1개 != 요청 상품 2개
        result = checker.find_first_packable_box(PRODUCTS, BOXES[:1])

        assert result.status == CheckStatus.NOT_FIT


class TestNotFit:
    def test_nothing_fits(self):
        client = FakeHttpClient(fits_when(lambda box_id: False))
        cache = RecordingCache()
        checker = make_checker(client, cache=cache)

        result = checker.find_first_packable_box(PRODUCTS, BOXES)

        assert result.status == CheckStatus.NOT_FIT
        assert cache.put_calls == []
        assert len(client.requests) == 1

    def test_multiple_bins_packed_is_not_fit(self):
        body = {
            "response": {
                "status": 1,
                "errors": [],
                "bins_packed": [
                    {"bin_data": {"id": "box-6-1"}, "items": [{"id": "item-1"}]},
                    {"bin_data": {"id": "box-1-2"}, "items": [{"id": "item-2"}]},
                ],
                "not_packed_items": [],
            }
        }
        checker = make_checker(FakeHttpClient(static(body)))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:2]).status == CheckStatus.NOT_FIT

    def test_not_packed_items_is_not_fit(self):
        body = packed_response("box-6-1", ["item-1"], not_packed=[{"id": "item-2"}])
        checker = make_checker(FakeHttpClient(static(body)))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).status == CheckStatus.NOT_FIT

    def test_unknown_bin_id_is_not_fit(self):
        cache = RecordingCache()
        body = packed_response("box-999-1", ["item-1", "item-2"])
        checker = make_checker(FakeHttpClient(static(body)), cache=cache)

        result = checker.find_first_packable_box(PRODUCTS, BOXES[:1])

        assert result.status == CheckStatus.NOT_FIT
        assert cache.put_calls == []

    def test_missing_response_node_is_not_fit(self):
        checker = make_checker(FakeHttpClient(static({"something": "else"})))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).status == CheckStatus.NOT_FIT

    def test_empty_candidates_make_no_request(self):
        client = FakeHttpClient(static({}))

        assert make_checker(client).find_first_packable_box(PRODUCTS, []).status == CheckStatus.NOT_FIT
        assert client.requests == []


class TestUnavailable:
    @pytest.mark.parametrize(
        "status_code, retriable",
        [(503, True), (504, True), (429, True), (408, True), (500, False), (401, False)],
    )
    def test_http_error_status(self, status_code, retriable):
        cache = RecordingCache()
        checker = make_checker(FakeHttpClient(static({}, status_code=status_code)), cache=cache)

        result = checker.find_first_packable_box(PRODUCTS, BOXES)

        assert result.status == CheckStatus.UNAVAILABLE
        assert result.retriable is retriable
        assert str(status_code) in result.reason
        assert cache.put_calls == []

    def test_negative_status(self):
        body = packed_response("box-6-1", ["item-1", "item-2"], status=-1)
        checker = make_checker(FakeHttpClient(static(body)))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).is_unavailable

    @pytest.mark.parametrize("message", ["Your account is LOCKED OUT", "user banned for abuse"])
    def test_blocked_account(self, message):
        body = packed_response("box-6-1", ["item-1", "item-2"])
        body["response"]["errors"] = [{"level": "critical", "message": message}]
        checker = make_checker(FakeHttpClient(static(body)))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).is_unavailable

    def test_missing_bins_packed(self):
        body = {"response": {"status": 1, "errors": [], "not_packed_items": []}}
        checker = make_checker(FakeHttpClient(static(body)))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).is_unavailable

    def test_bins_packed_wrong_type(self):
        body = {"response": {"status": 1, "errors": [], "bins_packed": {}, "not_packed_items": []}}
        checker = make_checker(FakeHttpClient(static(body)))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).is_unavailable

    def test_invalid_json(self):
        checker = make_checker(FakeHttpClient(static(text="<html>oops</html>")))

        result = checker.find_first_packable_box(PRODUCTS, BOXES[:1])

        assert result.is_unavailable
        assert result.retriable is True

    def test_empty_body(self):
        checker = make_checker(FakeHttpClient(static(text="")))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).is_unavailable

    def test_top_level_not_object(self):
        checker = make_checker(FakeHttpClient(static([1, 2, 3])))

        assert checker.find_first_packable_box(PRODUCTS, BOXES[:1]).is_unavailable

    def test_network_error(self):
        checker = make_checker(FakeHttpClient(raising(RequestException("connection refused"))))

        result = checker.find_first_packable_box(PRODUCTS, BOXES)

        assert result.is_unavailable
        assert result.retriable is True
        assert "network failure" in result.reason

    def test_timeout(self):
        checker = make_checker(FakeHttpClient(raising(Timeout("timed out"))))

        result = checker.find_first_packable_box(PRODUCTS, BOXES)

        assert result.is_unavailable
        assert "timeout" in result.reason

    @pytest.mark.parametrize("missing", ["api_url", "api_username", "api_key"])
    def test_missing_configuration_makes_no_request(self, missing):
        client = FakeHttpClient(static({}))
        checker = make_checker(client, **{missing: ""})

        result = checker.find_first_packable_box(PRODUCTS, BOXES)

        assert result.is_unavailable
        assert client.requests == []

    def test_failure_during_bisection_is_unavailable(self):
        def handler(payload: dict) -> FakeResponse:
            if len(client.requests) == 1:
                item_ids = [item["id"] for item in payload["items"]]
                return json_response(packed_response(payload["bins"][-1]["id"], item_ids))
            return json_response({}, status_code=503)

        client = FakeHttpClient(handler)
        cache = RecordingCache()

        result = make_checker(client, cache=cache).find_first_packable_box(PRODUCTS, BOXES)

        assert result.is_unavailable
        assert cache.put_calls == []
