from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import ValidationError
from .gcp_iam import CloudIdentityProvider
from .gcp_project import resolve_project
from .logging_utils import get_logger
from .prompts import Prompter


logger = get_logger(__name__)

MIN_SERVICE_ACCOUNT_NAME_LENGTH = 6


@dataclass
class Flags:
    name: str = ""
    project: str = ""
    skip_login: bool = False


def validate_service_account_name(value: str) -> None:
    if not isinstance(value, str) or len(value) < MIN_SERVICE_ACCOUNT_NAME_LENGTH:
        raise ValidationError(
            f"서비스 계정 이름은 {MIN_SERVICE_ACCOUNT_NAME_LENGTH - 1}자보다 길어야 합니다."
        )


def run(
    flags: Flags,
    *,
    provider: CloudIdentityProvider,
    prompter: Prompter,
    login: Optional[Callable[[], None]] = None,
    home_dir: Optional[str] = None,
) -> str:
    """
    로그인 → 서비스 계정 이름 → 프로젝트 → get-or-create 순서로 진행하고
    서비스 계정 키 파일 경로를 반환한다.

    비어 있는 flags.name / flags.project 는 대화형으로 채운 값으로 갱신된다.
    어느 단계든 실패하면 이후 단계는 실행하지 않고 예외를 그대로 올린다.
    """
    if not flags.skip_login:
        if login is None:
            raise ValueError("skip_login=False 이면 login 함수가 필요합니다.")
        login()

    if not flags.name:
        flags.name = prompter.prompt_text(
            "Name for the service account",
            validate=validate_service_account_name,
        )

    if not flags.project:
        flags.project = resolve_project(provider, prompter)

    # 이미 있는지는 provider 가 판단한다 (get-or-create).
    path = provider.get_or_create_service_account(
        flags.name,
        flags.project,
        home_dir or os.path.expanduser("~"),
    )

    logger.info("서비스 계정 키 준비 완료: %s", path)
    return path
