"""전역 테스트 설정

역할:
- 테스트 환경 구성 (boxpacker import 전에 환경 변수 고정)
- 공통 Fake 주입 (카탈로그, 캐시, 판정기)
- 임시 SQLite 세션
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# settings는 import 시점에 로드되므로 모듈 레벨에서 설정
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PACKING_CHECKER_MODE"] = "api"
os.environ["PACKING_API_URL"] = ""
os.environ["PACKING_API_USERNAME"] = ""
os.environ["PACKING_API_KEY"] = ""

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from boxpacker.core.database import Base  # noqa: E402
from boxpacker.engine.models import Product  # noqa: E402
from boxpacker.repositories import models  # noqa: E402,F401
from boxpacker.utils.hash_utils import generate_cache_key  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["LOG_LEVEL"] = "INFO"


# ============================================================================
# Fakes
# ============================================================================

@dataclass
class InMemoryCache:
    """ResultCache Fake - 실제 해시 키 사용"""

    store: dict[str, int] = field(default_factory=dict)
    get_calls: int = 0
    put_calls: list[tuple[str, int]] = field(default_factory=list)

    def get(self, products: Sequence[Product]) -> Optional[int]:
        self.get_calls += 1
        return self.store.get(generate_cache_key(products))

    def put(self, products: Sequence[Product], box_id: int) -> None:
        key = generate_cache_key(products)
        self.put_calls.append((key, box_id))
        self.store[key] = box_id


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def in_memory_cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def session_factory(tmp_path):
    """임시 파일 SQLite 세션 팩토리 (세션 간 동시성 테스트용)"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db_session(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
