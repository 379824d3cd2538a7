"""헬스 체크 엔드포인트"""
from fastapi import APIRouter
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError

from boxpacker.schemas.pack_schema import HealthResponse
from boxpacker.core import database
from boxpacker.core.logging import logger
from boxpacker import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - DB 연결 상태
    """
    db_ok = False

    try:
        with database.engine.connect() as connection:
            connection.exec_driver_sql("SELECT 1")
            db_ok = True
    except SQLAlchemyError as e:
        logger.error(f"Database connection error: {e}")
        db_ok = False

    return HealthResponse(
        status="ok" if db_ok else "error",
        timestamp=datetime.now(),
        version=__version__
    )


@router.get("/")
def root():
    """루트 엔드포인트"""
    return {
        "service": "최소 박스 선택 서비스",
        "version": __version__,
        "docs": "/docs"
    }
