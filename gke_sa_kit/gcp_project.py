"""
gcp_project
-----------

서비스 계정을 만들 GCP 프로젝트를 결정하는 모듈.

기존 프로젝트 개수에 따라
- 0개: 안내 메시지와 함께 실패 (자동 생성은 아직 지원하지 않음)
- 1개: 자동 선택
- 2개 이상: 선택 프롬프트
"""

from __future__ import annotations

from .errors import ProjectCreationNotImplementedError, ProjectResolutionError
from .gcp_iam import CloudIdentityProvider
from .logging_utils import get_logger
from .prompts import Prompter


logger = get_logger(__name__)


NO_PROJECT_MESSAGE = (
    "서비스 계정을 만들 GCP 프로젝트가 없습니다. "
    "프로젝트를 직접 생성한 뒤 다시 실행하세요."
)
AUTO_CREATE_NOT_IMPLEMENTED_MESSAGE = (
    "GCP 프로젝트 자동 생성은 아직 지원하지 않습니다. "
    "프로젝트를 직접 생성한 뒤 다시 실행하세요."
)


def resolve_project(provider: CloudIdentityProvider, prompter: Prompter) -> str:
    """
    기존 프로젝트 중 하나를 고르거나, 없으면 안내 에러를 낸다.
    프로젝트 목록 조회 실패와 프롬프트 중단은 그대로 전파한다.
    """
    existing_projects = provider.list_projects()

    project_id = ""
    if len(existing_projects) == 0:
        create = prompter.confirm(
            "No existing Google Cloud projects exist, create one now?",
            default=True,
        )
        if not create:
            raise ProjectResolutionError(NO_PROJECT_MESSAGE)
        raise ProjectCreationNotImplementedError(AUTO_CREATE_NOT_IMPLEMENTED_MESSAGE)
    elif len(existing_projects) == 1:
        project_id = existing_projects[0]
        logger.info("유일한 GCP 프로젝트 %s 를 사용합니다.", project_id)
    else:
        project_id = prompter.select(
            "Google Cloud Project:",
            list(existing_projects),
            help="서비스 계정을 만들 GCP 프로젝트를 선택하세요",
        )

    if not project_id:
        raise ProjectResolutionError(NO_PROJECT_MESSAGE)

    return project_id
