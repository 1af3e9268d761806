from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, List

from dotenv import load_dotenv


ENV_FILES_DEFAULT_ORDER = [".env", ".env.gke-sa"]

# GKE 클러스터 관리에 필요한 기본 역할
DEFAULT_SERVICE_ACCOUNT_ROLES: List[str] = [
    "roles/compute.instanceAdmin.v1",
    "roles/iam.serviceAccountUser",
    "roles/container.clusterAdmin",
    "roles/container.admin",
    "roles/container.developer",
    "roles/storage.objectAdmin",
    "roles/editor",
]


def load_env_files(base_dir: str = ".",
                   files: Optional[List[str]] = None) -> None:
    """
    주어진 디렉토리에서 .env 계열 파일을 순서대로 로드한다.
    후순위 파일이 같은 키를 덮어쓴다.
    """
    order = files or ENV_FILES_DEFAULT_ORDER
    for name in order:
        path = os.path.join(base_dir, name)
        if os.path.exists(path):
            load_dotenv(path, override=True)


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "y"}


def _get_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


@dataclass
class KitConfig:
    home_dir: str

    # IAM
    roles: List[str] = field(default_factory=lambda: list(DEFAULT_SERVICE_ACCOUNT_ROLES))
    bind_roles: bool = True
    display_name: str = ""

    # gcloud 로그인
    gcloud_bin: str = "gcloud"
    login_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "KitConfig":
        invalid_roles = []
        roles = _get_list("GKE_SA_ROLES", DEFAULT_SERVICE_ACCOUNT_ROLES)
        for role in roles:
            if not role.startswith("roles/"):
                invalid_roles.append(role)
        if invalid_roles:
            raise ValueError(
                "GKE_SA_ROLES 에 잘못된 역할 이름이 있습니다 (roles/ 로 시작해야 함): "
                + ", ".join(invalid_roles)
            )

        login_timeout: Optional[float] = None
        raw_timeout = os.getenv("GKE_SA_LOGIN_TIMEOUT")
        if raw_timeout is not None and raw_timeout.strip():
            try:
                login_timeout = float(raw_timeout)
            except ValueError as e:
                raise ValueError(
                    f"GKE_SA_LOGIN_TIMEOUT 은 초 단위 숫자여야 합니다: {raw_timeout!r}"
                ) from e

        return cls(
            home_dir=os.getenv("GKE_SA_HOME_DIR") or os.path.expanduser("~"),
            roles=roles,
            bind_roles=_get_bool("GKE_SA_BIND_ROLES", True),
            display_name=os.getenv("GKE_SA_DISPLAY_NAME", ""),
            gcloud_bin=os.getenv("GKE_SA_GCLOUD_BIN") or "gcloud",
            login_timeout=login_timeout,
        )
