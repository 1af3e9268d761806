"""
errors
------

워크플로 단계별 실패를 구분하기 위한 예외 계층.
CLI 는 GkeSaKitError 를 잡아 메시지만 출력하고 exit 1 로 종료한다.
"""

from __future__ import annotations


class GkeSaKitError(Exception):
    """gke_sa_kit 에서 의도적으로 발생시키는 모든 예외의 베이스."""


class LoginError(GkeSaKitError):
    """gcloud 로그인 실패."""


class ValidationError(GkeSaKitError, ValueError):
    """대화형 입력이 로컬 규칙을 통과하지 못함. 프롬프트가 다시 묻는다."""


class PromptAbortedError(GkeSaKitError):
    """사용자가 프롬프트를 중단함 (Ctrl-C / EOF)."""


class ProjectResolutionError(GkeSaKitError):
    """사용할 GCP 프로젝트를 결정하지 못함. 메시지에 안내 문구가 포함된다."""


class ProjectCreationNotImplementedError(ProjectResolutionError):
    """프로젝트 자동 생성을 요청했지만 아직 지원하지 않음."""


class ProviderError(GkeSaKitError):
    """GCP API 호출(프로젝트 조회, 서비스 계정/키 생성 등) 실패."""
