"""로깅 설정

- "boxpacker" 로거 하나에 stdout 핸들러를 붙입니다 (uvicorn 로그와 섞여도 구분되도록 logger 이름 포함).
- 레벨은 settings.log_level, 잘못된 값이면 INFO.
"""
import logging
import sys
from boxpacker.core.config import settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(name: str = "boxpacker") -> logging.Logger:
    """로거 초기화 (여러 번 호출해도 핸들러는 하나)"""
    logger = logging.getLogger(name)
    logger.setLevel(resolve_log_level(settings.log_level))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger


logger = setup_logging()


def sanitize_for_log(payload: dict, secret_keys: tuple[str, ...] = ("api_key", "password", "token", "secret")) -> dict:
    """민감 정보를 마스킹한 payload 사본 반환

    Args:
        payload: 로깅할 dict (원본은 변경하지 않음)
        secret_keys: 마스킹할 키 목록

    Returns:
        마스킹된 dict 사본
    """
    if not payload:
        return {}

    sanitized = dict(payload)
    for key in list(sanitized.keys()):
        if key.lower() in secret_keys:
            sanitized[key] = "***"
    return sanitized
