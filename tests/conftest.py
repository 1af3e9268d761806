"""
pytest 설정:

로컬 작업 환경에 다른 버전의 gke_sa_kit 패키지가 설치되어 있으면
site-packages 쪽이 먼저 import 되어 테스트가 엉뚱한 코드를 검사할 수 있다.

테스트는 항상 현재 레포의 소스를 대상으로 해야 하므로 repo root 를 sys.path 최상단에 고정하고,
워크플로 테스트에서 공통으로 쓰는 가짜 Prompter / provider 를 제공한다.
"""

from __future__ import annotations

import os
import sys
from typing import List, Optional, Sequence

import pytest


def pytest_configure() -> None:
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


class FakePrompter:
    """미리 정해둔 답을 순서대로 돌려주고, 호출 내역을 기록한다."""

    def __init__(
        self,
        texts: Sequence[str] = (),
        selection: Optional[str] = None,
        confirm_answer: bool = True,
    ) -> None:
        self.texts = list(texts)
        self.selection = selection
        self.confirm_answer = confirm_answer
        self.text_calls: List[str] = []
        self.rejected: List[str] = []
        self.select_calls: List[List[str]] = []
        self.confirm_calls: List[str] = []

    def prompt_text(self, message, validate=None):
        self.text_calls.append(message)
        # 실제 프롬프트처럼 통과할 때까지 다음 답을 꺼낸다.
        while self.texts:
            answer = self.texts.pop(0)
            if validate is None:
                return answer
            try:
                validate(answer)
            except ValueError:
                self.rejected.append(answer)
                continue
            return answer
        raise AssertionError("FakePrompter 에 남은 답이 없습니다.")

    def select(self, message, options, help=""):
        self.select_calls.append(list(options))
        if self.selection is None:
            raise AssertionError("select 가 호출되면 안 됩니다.")
        return self.selection

    def confirm(self, message, default=True):
        self.confirm_calls.append(message)
        return self.confirm_answer


class FakeProvider:
    def __init__(self, projects: Sequence[str] = (), path: str = "/home/u/.gke-sa-kit/keys/p/svc.key.json") -> None:
        self.projects = list(projects)
        self.path = path
        self.list_calls = 0
        self.calls: List[tuple] = []

    def list_projects(self):
        self.list_calls += 1
        return list(self.projects)

    def get_or_create_service_account(self, name, project, home_dir):
        self.calls.append((name, project, home_dir))
        return self.path


@pytest.fixture
def fake_prompter_cls():
    return FakePrompter


@pytest.fixture
def fake_provider_cls():
    return FakeProvider
