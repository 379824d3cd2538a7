"""공유 HTTP 클라이언트 (curl_cffi)

- 외부 패킹 API 호출마다 Session을 만들면 TLS/커넥션 오버헤드가 커져서
  타임아웃/지연이 악화될 수 있어 프로세스 단위로 세션을 재사용합니다.
- 앱 종료 시 shutdown_shared_http_client()로 정리합니다.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from curl_cffi.requests import Response, Session
from curl_cffi.requests.exceptions import RequestException

from boxpacker.core.config import settings
from boxpacker.core.logging import logger


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._session: Optional[Session] = None

    def _ensure_session(self) -> Session:
        with self._lock:
            if self._session is not None:
                return self._session
            self._session = Session(
                headers=self.default_headers(),
                timeout=settings.packing_api_timeout_s,
                allow_redirects=True,
                trust_env=False,
            )
            return self._session

    def default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
    ) -> Response:
        """JSON POST

        Raises:
            curl_cffi.requests.exceptions.RequestException: 네트워크/타임아웃 실패
        """
        sess = self._ensure_session()
        return sess.post(url, json=payload, headers=headers, timeout=timeout_s)

    def close(self) -> None:
        with self._lock:
            if self._session is None:
                return
            try:
                self._session.close()
            except RequestException as e:
                logger.info(f"[HTTP_CLIENT] close failed: {type(e).__name__}: {e!r}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


def shutdown_shared_http_client() -> None:
    _shared_http_client.close()
