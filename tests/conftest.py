from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest
from rich.console import Console

from typescript_starter.process import ProcessError, ProcessResult


class FakeRunner:
    """
    Records every command and answers from a handler.

    handler(cmd, args, cwd) may return a ProcessResult, a string (used as
    stdout), None, or raise ProcessError.
    """

    def __init__(self, handler: Callable | None = None) -> None:
        self.calls: list[tuple[str, list[str], str | None]] = []
        self._handler = handler

    def __call__(self, cmd, args=(), *, cwd=None, quiet=True):
        args = list(args)
        self.calls.append((cmd, args, str(cwd) if cwd is not None else None))
        if self._handler is None:
            return ProcessResult()
        result = self._handler(cmd, args, cwd)
        if isinstance(result, ProcessResult):
            return result
        return ProcessResult(stdout=result or "")


def failing(code: int = 1, name: str = "ERR") -> Callable:
    def handler(cmd, args, cwd):
        raise ProcessError(code, name, " ".join([cmd, *args]))

    return handler


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


@pytest.fixture
def template_tree(tmp_path: Path) -> Callable[[Path], None]:
    """Return a function that writes a miniature typescript-starter checkout."""

    def write(root: Path) -> None:
        root.mkdir(parents=True, exist_ok=True)
        (root / ".git").mkdir()
        (root / ".git" / "HEAD").write_text("ref: refs/heads/master\n")
        (root / ".circleci").mkdir()
        (root / ".circleci" / "config.yml").write_text("version: 2\n")
        (root / ".vscode").mkdir()
        (root / ".vscode" / "launch.json").write_text("{}\n")
        (root / ".travis.yml").write_text("language: node_js\n")
        (root / "appveyor.yml").write_text("version: 1\n")
        (root / ".cspell.json").write_text("{}\n")
        (root / ".editorconfig").write_text("root = true\n")
        (root / "package.json").write_text(
            '{\n'
            '  "name": "typescript-starter",\n'
            '  "version": "10.1.1",\n'
            '  "description": "A typescript starter for building javascript libraries and projects",\n'
            '  "bin": {"typescript-starter": "./bin/typescript-starter"},\n'
            '  "scripts": {"build": "tsc", "test:spelling": "cspell \\"src/**/*.ts\\""},\n'
            '  "devDependencies": {"cspell": "^4.1.0", "eslint-plugin-functional": "^3.0.2", "typescript": "^4.0.2"}\n'
            '}\n'
        )
        (root / ".eslintrc.json").write_text(
            '{"plugins": ["@typescript-eslint", "functional"], '
            '"extends": ["eslint:recommended", "plugin:functional/lite"]}\n'
        )
        (root / "tsconfig.json").write_text(
            "{\n"
            '  "compilerOptions": {\n'
            '    "lib": ["es2017"],\n'
            '    "types": [],\n'
            '    // "noUnusedLocals": true,\n'
            '    // "noImplicitReturns": true,\n'
            '    "strict": true\n'
            "  }\n"
            "}\n"
        )

    return write
