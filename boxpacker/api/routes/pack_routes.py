"""Pack Routes - HTTP → Engine translator

요청 본문을 도메인 Product로 변환하고 PackingOrchestrator에 위임합니다.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from boxpacker.clients.http_client import get_shared_http_client
from boxpacker.clients.packing_api import ThirdPartyPackabilityChecker
from boxpacker.core.config import settings
from boxpacker.core.database import get_db
from boxpacker.core.exceptions import ValidationException
from boxpacker.core.logging import logger
from boxpacker.engine import CacheAdapter, ExecutionStrategy, PackingOrchestrator, Product
from boxpacker.repositories.impl import BoxCatalogRepository, PackingCacheRepository
from boxpacker.schemas.pack_schema import BoxData, ErrorResponse, PackRequest, PackResponse, ProductInput

router = APIRouter(prefix="/api/v1", tags=["pack"])

NO_BOX_FOUND_MESSAGE = "No single usable box found for the provided products."


def get_orchestrator(db: Session = Depends(get_db)) -> PackingOrchestrator:
    """요청 단위 PackingOrchestrator

    DB 세션이 요청마다 다르므로 싱글톤이 아닙니다. HTTP 클라이언트만 프로세스 공유.
    """
    catalog = BoxCatalogRepository(db)
    cache = CacheAdapter(PackingCacheRepository(db))

    strategy = ExecutionStrategy.from_mode(settings.packing_checker_mode)
    checker = strategy.build_checker(
        lambda: ThirdPartyPackabilityChecker(
            http_client=get_shared_http_client(),
            cache=cache,
            api_url=settings.packing_api_url,
            api_username=settings.packing_api_username,
            api_key=settings.packing_api_key,
            timeout_s=settings.packing_api_timeout_s,
        )
    )

    return PackingOrchestrator(
        box_catalog=catalog,
        packability_checker=checker,
        cache=cache,
        page_size=settings.catalog_page_size,
    )


def _to_products(inputs: List[ProductInput]) -> List[Product]:
    return [Product(p.width, p.height, p.length, p.weight) for p in inputs]


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details if settings.app_debug else None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/pack",
    response_model=PackResponse,
    responses={400: {"description": "Invalid products"}, 422: {"description": "No usable box"}},
)
def pack(
    request: PackRequest,
    orchestrator: PackingOrchestrator = Depends(get_orchestrator),
):
    """가장 작은 사용 가능 박스 선택

    Flow:
        1. 상품 도메인 검증 (실패 시 400)
        2. Engine에 위임 (Cache → Batch scan)
        3. 박스 없음 → 422
    """
    try:
        products = _to_products(request.products)
    except ValidationException as e:
        logger.warning(f"[API] Product validation failed: {e}")
        return _error(400, e.message)

    logger.info(f"[API] Pack request: products={len(products)}")

    try:
        box = orchestrator.resolve(products)
    except ValidationException as e:
        logger.warning(f"[API] Validation failed during resolution: {e}")
        return _error(400, e.message)
    except Exception as e:
        logger.error(f"[API] Unexpected error: {type(e).__name__}: {e}", exc_info=True)
        return _error(500, "Internal server error", details=str(e))

    if box is None:
        return _error(422, NO_BOX_FOUND_MESSAGE)

    return PackResponse(
        box=BoxData(
            id=box.id,
            width=box.width,
            height=box.height,
            length=box.length,
            max_weight=box.max_weight,
        )
    )
