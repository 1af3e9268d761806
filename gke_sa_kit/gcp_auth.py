"""
gcp_auth
--------

gcloud 로그인 단계를 담당한다.
브라우저 인증이 필요하므로 터미널을 그대로 넘겨 실행한다.
"""

from __future__ import annotations

from .config import KitConfig
from .errors import LoginError
from .logging_utils import get_logger
from .subprocess_utils import run_command


logger = get_logger(__name__)


def login(cfg: KitConfig) -> None:
    """
    `gcloud auth login --brief --update-adc` 를 실행한다.
    ADC 도 함께 갱신해야 클라이언트 라이브러리가 같은 계정을 사용한다.
    실패는 재시도하지 않고 LoginError 로 올린다.
    """
    cmd = [cfg.gcloud_bin, "auth", "login", "--brief", "--update-adc"]
    logger.info("gcloud 로그인을 시작합니다.")
    try:
        run_command(cmd, timeout=cfg.login_timeout, interactive=True)
    except RuntimeError as e:
        raise LoginError(f"gcloud 로그인에 실패했습니다: {e}") from e
