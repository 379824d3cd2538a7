"""Pydantic 스키마 정의"""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class ProductInput(BaseModel):
    """포장할 상품 입력

    범위 검증은 도메인 모델(Product)에서 수행하고 ValidationException → 400으로 응답합니다.
    NaN/Infinity 리터럴은 스키마 단계에서 거부합니다.
    """
    width: float = Field(..., allow_inf_nan=False, description="가로 (0.1 ~ 1000)")
    height: float = Field(..., allow_inf_nan=False, description="세로 (0.1 ~ 1000)")
    length: float = Field(..., allow_inf_nan=False, description="높이 (0.1 ~ 1000)")
    weight: float = Field(..., allow_inf_nan=False, description="무게 (0 초과, 10000 이하)")


class PackRequest(BaseModel):
    """박스 선택 요청"""
    products: List[ProductInput] = Field(..., min_length=1, description="포장할 상품 목록 (1개 이상)")


class BoxData(BaseModel):
    """선택된 박스"""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(None, description="카탈로그 박스 ID")
    width: float = Field(..., allow_inf_nan=False, description="가로")
    height: float = Field(..., allow_inf_nan=False, description="세로")
    length: float = Field(..., allow_inf_nan=False, description="높이")
    max_weight: float = Field(..., alias="maxWeight", description="최대 적재 무게")


class PackResponse(BaseModel):
    """박스 선택 응답"""
    box: BoxData


class ErrorResponse(BaseModel):
    """에러 응답"""
    error: str = Field(..., description="에러 메시지")
    details: Optional[Any] = Field(None, description="디버그 모드에서만 포함되는 상세 정보")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
