import sys
from functools import partial

import click

from .config import load_env_files, KitConfig
from .errors import GkeSaKitError
from .gcp_auth import login
from .gcp_iam import GcpIdentityProvider
from .logging_utils import apply_env_log_level, setup_logging, get_logger
from .orchestrator import Flags, run
from .prompts import ClickPrompter


logger = get_logger(__name__)


@click.group()
@click.option(
    "-C",
    "--chdir",
    "chdir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
    default=".",
    help=".env / .env.gke-sa 를 읽을 작업 디렉토리 (기본: 현재 디렉토리)",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="로그 레벨을 DEBUG로 올립니다.",
)
@click.pass_context
def main(ctx: click.Context, chdir: str, verbose: int) -> None:
    """GKE 용 GCP 서비스 계정 준비 CLI"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["chdir"] = chdir
    ctx.obj["verbose"] = verbose


def _load_config_from_ctx(ctx: click.Context) -> KitConfig:
    base_dir: str = ctx.obj["chdir"]
    load_env_files(base_dir)
    apply_env_log_level()
    cfg = KitConfig.from_env()
    logger.debug("Config loaded: %s", cfg)
    return cfg


@main.command(name="create")
@click.option(
    "-n",
    "--name",
    "name",
    type=str,
    default="",
    envvar="GKE_SA_NAME",
    help="생성할 서비스 계정 이름",
)
@click.option(
    "-p",
    "--project",
    "project",
    type=str,
    default="",
    envvar="GKE_SA_PROJECT",
    help="서비스 계정을 만들 GCP 프로젝트",
)
@click.option(
    "--skip-login",
    "skip_login",
    is_flag=True,
    help="이미 gcloud auth 로 로그인되어 있다면 로그인 단계를 건너뜁니다.",
)
@click.pass_context
def create(ctx: click.Context, name: str, project: str, skip_login: bool) -> None:
    """
    GKE 서비스 계정을 만들고(이미 있으면 재사용) 키 파일 경로를 출력한다.

    \b
    예:
      gke-sa-kit create
      gke-sa-kit create --name my-service-account --project my-gke-project
    """
    try:
        cfg = _load_config_from_ctx(ctx)
    except Exception as e:  # noqa: BLE001
        click.echo(f"[ERROR] 설정 로드 실패: {e}", err=True)
        sys.exit(1)

    flags = Flags(name=name, project=project, skip_login=skip_login)

    try:
        path = run(
            flags,
            provider=GcpIdentityProvider(cfg),
            prompter=ClickPrompter(),
            login=partial(login, cfg),
            home_dir=cfg.home_dir,
        )
    except GkeSaKitError as e:
        click.echo(f"[ERROR] {e}", err=True)
        sys.exit(1)
    except Exception as e:  # noqa: BLE001
        logger.exception("서비스 계정 준비 중 오류 발생")
        click.echo(f"[ERROR] 서비스 계정 준비 실패: {e}", err=True)
        sys.exit(1)

    click.echo(path)
