"""findBinSize 요청 payload

Item/bin id는 요청마다 새로 만드는 합성 id이며, 응답의 bin id를 도메인 Box로
되돌리는 용도로만 쓰입니다.
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field

from boxpacker.engine.models import Box, Product


class Bin(BaseModel):
    """후보 박스"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    width: float = Field(..., alias="w")
    height: float = Field(..., alias="h")
    depth: float = Field(..., alias="d")
    max_weight: float = Field(..., alias="max_wg")


class Item(BaseModel):
    """포장할 상품"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    width: float = Field(..., alias="w")
    height: float = Field(..., alias="h")
    depth: float = Field(..., alias="d")
    weight: float = Field(..., alias="wg")
    quantity: int = Field(1, alias="q")


class Params(BaseModel):
    """최적화 옵션: 박스 수 최소화, 상품 분배 비활성화"""
    optimization_mode: str = "bins_number"
    item_distribution: bool = False


class RequestPayload(BaseModel):
    username: str
    api_key: str
    bins: list[Bin]
    items: list[Item]
    params: Params = Field(default_factory=Params)


class PackingApiRequest:
    def __init__(self, payload: RequestPayload, box_by_external_id: dict[str, Box]):
        self.payload = payload
        self.box_by_external_id = box_by_external_id

    @classmethod
    def from_domain(
        cls,
        products: Sequence[Product],
        boxes: Sequence[Box],
        username: str,
        api_key: str,
    ) -> "PackingApiRequest":
        items = [
            Item(
                id=f"item-{index}",
                width=product.width,
                height=product.height,
                depth=product.length,
                weight=product.weight,
                quantity=1,
            )
            for index, product in enumerate(products, start=1)
        ]

        bins: list[Bin] = []
        box_by_external_id: dict[str, Box] = {}
        for index, box in enumerate(boxes, start=1):
            external_id = f"box-{box.id or 0}-{index}"
            bins.append(
                Bin(
                    id=external_id,
                    width=box.width,
                    height=box.height,
                    depth=box.length,
                    max_weight=box.max_weight,
                )
            )
            box_by_external_id[external_id] = box

        payload = RequestPayload(
            username=username,
            api_key=api_key,
            bins=bins,
            items=items,
        )
        return cls(payload, box_by_external_id)

    def to_dict(self) -> dict[str, Any]:
        return self.payload.model_dump(by_alias=True)
