import logging
import os
import sys
from typing import Optional


LOG_LEVEL_ENV = "GKE_SA_LOG_LEVEL"


def _level_from_env() -> Optional[int]:
    raw = os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return None
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        return None
    return level


def setup_logging(verbosity: int = 0) -> None:
    level = logging.INFO
    if verbosity >= 1:
        level = logging.DEBUG

    # env 로 명시된 레벨이 있으면 -v 보다 우선한다.
    level = _level_from_env() or level

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


def apply_env_log_level() -> None:
    """
    .env 파일 로드 뒤에 GKE_SA_LOG_LEVEL 을 다시 반영한다.
    (setup_logging 은 .env 를 읽기 전에 호출된다)
    """
    level = _level_from_env()
    if level is not None:
        logging.getLogger().setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
