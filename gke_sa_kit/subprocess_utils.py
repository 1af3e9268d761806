from __future__ import annotations

import subprocess
from dataclasses import dataclass
from textwrap import shorten
from typing import Mapping, Sequence

from .logging_utils import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class RunResult:
    returncode: int
    stdout: str
    stderr: str


def _failure_detail(stdout: str | None, stderr: str | None) -> str:
    out = (stdout or "").strip()
    err = (stderr or "").strip()
    if err:
        return "\nstderr:\n" + shorten(err, width=2000)
    if out:
        return "\nstdout:\n" + shorten(out, width=2000)
    return ""


def run_command(
    cmd: Sequence[str],
    *,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
    interactive: bool = False,
) -> RunResult:
    """
    subprocess 실행 공통 유틸.

    - interactive=False: stdout/stderr 캡처, 실패 시 요약 포함
    - interactive=True : 터미널을 그대로 넘긴다 (브라우저 로그인처럼 사용자 입력이 필요한 명령)

    timeout 이 None 이면 명령이 끝날 때까지 기다린다.
    """
    logger.info("명령 실행: %s", " ".join(cmd))

    try:
        if interactive:
            result = subprocess.run(  # noqa: S603
                list(cmd),
                check=True,
                timeout=timeout,
                cwd=cwd,
                env=dict(env) if env is not None else None,
            )
            return RunResult(returncode=result.returncode, stdout="", stderr="")

        result = subprocess.run(  # noqa: S603
            list(cmd),
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
            env=dict(env) if env is not None else None,
        )
        if result.stdout:
            logger.debug("명령 stdout: %s", shorten(result.stdout.strip(), width=2000))
        if result.stderr:
            logger.debug("명령 stderr: %s", shorten(result.stderr.strip(), width=2000))
        return RunResult(returncode=result.returncode, stdout=result.stdout or "", stderr=result.stderr or "")
    except FileNotFoundError as e:
        raise RuntimeError(
            f"필요한 명령을 찾을 수 없습니다: {cmd[0]} (gcloud 가 설치되어 있는지 확인하세요)"
        ) from e
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(
            f"명령 실행이 {timeout}초 안에 끝나지 않았습니다: {' '.join(cmd)}"
        ) from e
    except subprocess.CalledProcessError as e:
        detail = _failure_detail(e.stdout, e.stderr)
        raise RuntimeError(
            f"명령 실행 실패: {' '.join(cmd)} (exit={e.returncode}){detail}"
        ) from e
