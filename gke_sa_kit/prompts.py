"""
prompts
-------

대화형 입력 추상화.

워크플로/프로젝트 선택 로직은 Prompter 프로토콜에만 의존하고,
실제 콘솔 입력은 click 기반 ClickPrompter 가 담당한다.
테스트에서는 미리 정해둔 답을 돌려주는 가짜 Prompter 를 주입한다.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

import click

from .errors import PromptAbortedError


Validator = Callable[[str], None]


class Prompter(Protocol):
    def prompt_text(self, message: str, validate: Optional[Validator] = None) -> str:
        """validate 가 ValueError 를 던지면 유효한 값이 들어올 때까지 다시 묻는다."""
        ...

    def select(self, message: str, options: Sequence[str], help: str = "") -> str:
        ...

    def confirm(self, message: str, default: bool = True) -> bool:
        ...


class ClickPrompter:
    """
    click.prompt / click.confirm 기반 Prompter 구현.

    메뉴와 프롬프트는 stderr 로 출력한다. stdout 에는 결과(키 경로)만 남긴다.
    """

    def prompt_text(self, message: str, validate: Optional[Validator] = None) -> str:
        def _value_proc(value: str) -> str:
            if validate is not None:
                try:
                    validate(value)
                except ValueError as e:
                    # UsageError 계열이면 click 이 에러를 출력하고 다시 묻는다.
                    raise click.BadParameter(str(e)) from e
            return value

        try:
            return click.prompt(message, value_proc=_value_proc, err=True)
        except click.exceptions.Abort as e:
            raise PromptAbortedError(f"입력이 중단되었습니다: {message}") from e

    def select(self, message: str, options: Sequence[str], help: str = "") -> str:
        if not options:
            raise ValueError("선택할 항목이 없습니다.")

        click.echo(message, err=True)
        if help:
            click.echo(f"  ({help})", err=True)
        for idx, option in enumerate(options, start=1):
            click.echo(f"  {idx}) {option}", err=True)

        try:
            choice = click.prompt(
                "번호를 선택하세요",
                type=click.IntRange(1, len(options)),
                default=1,
                err=True,
            )
        except click.exceptions.Abort as e:
            raise PromptAbortedError(f"선택이 중단되었습니다: {message}") from e
        return options[choice - 1]

    def confirm(self, message: str, default: bool = True) -> bool:
        try:
            return click.confirm(message, default=default, err=True)
        except click.exceptions.Abort as e:
            raise PromptAbortedError(f"확인이 중단되었습니다: {message}") from e
