"""
gcp_iam
-------

GCP 프로젝트 조회와 서비스 계정/키 get-or-create 를 담당하는 모듈.

- 프로젝트 목록: Resource Manager (resourcemanager_v3)
- 서비스 계정, 키: IAM Admin (iam_admin_v1)
- 역할 부여: 프로젝트 IAM 정책 (resourcemanager_v3 get/set_iam_policy)

같은 (name, project) 로 여러 번 호출해도 서비스 계정이나 키를 중복 생성하지 않는다.
"""

from __future__ import annotations

import os
from typing import Any, List, Optional, Protocol, Tuple

from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import iam_admin_v1
from google.cloud import resourcemanager_v3

from .config import KitConfig
from .errors import ProviderError
from .logging_utils import get_logger


logger = get_logger(__name__)

KEY_DIR_NAME = os.path.join(".gke-sa-kit", "keys")
IAM_POLICY_VERSION = 3


class CloudIdentityProvider(Protocol):
    def list_projects(self) -> List[str]:
        ...

    def get_or_create_service_account(self, name: str, project: str, home_dir: str) -> str:
        ...


def service_account_email(name: str, project: str) -> str:
    return f"{name}@{project}.iam.gserviceaccount.com"


def key_file_path(name: str, project: str, home_dir: str) -> str:
    """서비스 계정 키 파일 경로: <home>/.gke-sa-kit/keys/<project>/<name>.key.json"""
    return os.path.join(home_dir, KEY_DIR_NAME, project, f"{name}.key.json")


def _write_key_file(path: str, data: bytes) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    # 비밀 키이므로 소유자만 읽을 수 있게 만든다.
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(data)


class GcpIdentityProvider:
    """
    google-cloud 클라이언트 라이브러리 기반 CloudIdentityProvider.

    클라이언트는 처음 사용할 때 생성한다. (ADC 가 없으면 그 시점에 실패)
    테스트에서는 가짜 클라이언트를 생성자에 넘긴다.
    """

    def __init__(
        self,
        cfg: KitConfig,
        *,
        projects_client: Optional[Any] = None,
        iam_client: Optional[Any] = None,
    ) -> None:
        self._cfg = cfg
        self._projects_client = projects_client
        self._iam_client = iam_client

    @property
    def projects_client(self) -> Any:
        if self._projects_client is None:
            try:
                self._projects_client = resourcemanager_v3.ProjectsClient()
            except DefaultCredentialsError as e:
                raise ProviderError(
                    "GCP 인증 정보를 찾을 수 없습니다. "
                    "`gcloud auth login --update-adc` 로 로그인했는지 확인하세요."
                ) from e
        return self._projects_client

    @property
    def iam_client(self) -> Any:
        if self._iam_client is None:
            try:
                self._iam_client = iam_admin_v1.IAMClient()
            except DefaultCredentialsError as e:
                raise ProviderError(
                    "GCP 인증 정보를 찾을 수 없습니다. "
                    "`gcloud auth login --update-adc` 로 로그인했는지 확인하세요."
                ) from e
        return self._iam_client

    def list_projects(self) -> List[str]:
        """접근 가능한 ACTIVE 프로젝트 ID 목록 (정렬됨)."""
        try:
            projects = self.projects_client.search_projects(request={"query": "state:ACTIVE"})
            project_ids = sorted(p.project_id for p in projects)
        except GoogleAPICallError as e:
            raise ProviderError(f"GCP 프로젝트 목록 조회에 실패했습니다: {e}") from e

        logger.debug("조회된 프로젝트: %s", project_ids)
        return project_ids

    def get_or_create_service_account(self, name: str, project: str, home_dir: str) -> str:
        """
        서비스 계정이 없으면 생성하고 역할을 부여한 뒤 키 파일 경로를 반환한다.

        이미 있던 계정이고 키 파일도 있으면 새 키를 발급하지 않고 기존 경로를 돌려준다.
        새로 만든 계정은 남아 있던 키 파일이 있더라도 새 키로 덮어쓴다.
        """
        email, created = self._ensure_service_account(name, project)

        # 기존 계정의 권한은 건드리지 않는다.
        if created and self._cfg.bind_roles and self._cfg.roles:
            self._ensure_roles(project, email)

        path = key_file_path(name, project, home_dir)
        if os.path.exists(path):
            if not created:
                logger.info("기존 서비스 계정 키를 사용합니다: %s", path)
                return path
            logger.warning("새로 만든 계정이라 이전 키 파일을 덮어씁니다: %s", path)

        resource = f"projects/{project}/serviceAccounts/{email}"
        logger.info("서비스 계정 키를 발급합니다: %s", email)
        try:
            key = self.iam_client.create_service_account_key(request={"name": resource})
        except GoogleAPICallError as e:
            raise ProviderError(f"서비스 계정 키 발급에 실패했습니다 ({email}): {e}") from e

        _write_key_file(path, key.private_key_data)
        logger.info("서비스 계정 키를 저장했습니다: %s", path)
        return path

    def _ensure_service_account(self, name: str, project: str) -> Tuple[str, bool]:
        """(email, 새로 생성했는지) 를 반환한다."""
        email = service_account_email(name, project)
        resource = f"projects/{project}/serviceAccounts/{email}"

        # 존재 여부 확인 후 없으면 생성
        try:
            account = self.iam_client.get_service_account(request={"name": resource})
            logger.info("기존 서비스 계정을 사용합니다: %s", account.email)
            return account.email, False
        except NotFound:
            logger.info("서비스 계정이 없어 새로 생성합니다: %s", email)
        except GoogleAPICallError as e:
            raise ProviderError(f"서비스 계정 조회에 실패했습니다 ({email}): {e}") from e

        try:
            account = self.iam_client.create_service_account(
                request={
                    "name": f"projects/{project}",
                    "account_id": name,
                    "service_account": {
                        "display_name": self._cfg.display_name or name,
                    },
                }
            )
        except GoogleAPICallError as e:
            raise ProviderError(f"서비스 계정 생성에 실패했습니다 ({email}): {e}") from e
        return account.email or email, True

    def _ensure_roles(self, project: str, email: str) -> None:
        """프로젝트 IAM 정책에 필요한 역할 바인딩을 추가한다. 변경이 없으면 set 하지 않는다."""
        resource = f"projects/{project}"
        member = f"serviceAccount:{email}"

        try:
            # 조건부 바인딩이 있는 정책도 그대로 되돌려 쓸 수 있도록 v3 로 읽는다.
            policy = self.projects_client.get_iam_policy(
                request={
                    "resource": resource,
                    "options": {"requested_policy_version": IAM_POLICY_VERSION},
                }
            )
        except GoogleAPICallError as e:
            raise ProviderError(f"프로젝트 IAM 정책 조회에 실패했습니다 ({project}): {e}") from e

        bindings = {b.role: b for b in policy.bindings}
        added: List[str] = []
        for role in self._cfg.roles:
            binding = bindings.get(role)
            if binding is None:
                binding = policy.bindings.add(role=role)
                bindings[role] = binding
            if member not in binding.members:
                binding.members.append(member)
                added.append(role)

        if not added:
            logger.debug("추가할 역할 바인딩이 없습니다: %s", member)
            return

        logger.info("역할을 부여합니다: %s -> %s", member, added)
        try:
            self.projects_client.set_iam_policy(request={"resource": resource, "policy": policy})
        except GoogleAPICallError as e:
            raise ProviderError(f"프로젝트 IAM 정책 갱신에 실패했습니다 ({project}): {e}") from e
