"""
Configuration model for typescript-starter.

The CLI builds a ConfigSource from the real process and hands it to the
resolver, which produces exactly one immutable Config per run. Nothing
downstream reads sys.argv or os.environ on its own.
"""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Mapping, Sequence

DEFAULT_REPO_URL = "https://github.com/bitjson/typescript-starter.git"
OVERRIDE_BRANCH = "master"
REPO_URL_ENV = "TYPESCRIPT_STARTER_REPO_URL"
REPO_BRANCH_ENV = "TYPESCRIPT_STARTER_REPO_BRANCH"

_NAME_RE = re.compile(r"^(?:@[a-z0-9][a-z0-9._~-]*/)?[a-z0-9][a-z0-9._~-]*$")
_MAX_NAME_LENGTH = 214


class Runner(Enum):
    Npm = "npm"
    Yarn = "yarn"


class Placeholders:
    """Sentinels substituted when real identity data is unavailable."""

    email = "YOUR_EMAIL"
    name = "YOUR_NAME"
    username = "YOUR_GITHUB_USER_NAME"


@dataclass(frozen=True)
class RepoInfo:
    repo: str
    branch: str


@dataclass(frozen=True)
class ConfigSource:
    """
    Everything the resolver is allowed to look at.

    argv follows the usual `[interpreter, program, *args]` shape.
    """

    argv: Sequence[str] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    interactive: bool = False

    @property
    def args(self) -> list[str]:
        return list(self.argv[2:])

    @classmethod
    def from_process(cls, args: Sequence[str] | None = None) -> "ConfigSource":
        if args is None:
            argv = [sys.executable, *sys.argv]
        else:
            argv = [sys.executable, "typescript-starter", *args]
        return cls(argv=tuple(argv), env=dict(os.environ), interactive=sys.stdin.isatty())


@dataclass(frozen=True)
class Config:
    """
    Fully resolved choices for one scaffolding run.

    Every flag is a concrete bool. The identity fields start as
    placeholders and are filled through `with_inferred`, which returns a
    new record.
    """

    project_name: str
    repo: RepoInfo
    starter_version: str
    runner: Runner = Runner.Npm
    description: str = ""
    appveyor: bool = False
    circleci: bool = True
    cspell: bool = True
    dom_definitions: bool = False
    editorconfig: bool = True
    functional: bool = True
    install: bool = True
    node_definitions: bool = False
    strict: bool = False
    travis: bool = False
    vscode: bool = True
    email: str = Placeholders.email
    full_name: str = Placeholders.name
    github_username: str = Placeholders.username
    working_directory: str = "."

    def with_inferred(self, **changes: str) -> "Config":
        return replace(self, **changes)

    @property
    def project_dir(self) -> Path:
        return Path(self.working_directory) / self.project_name


def validate_name(name: str) -> bool:
    """
    Return True when name is usable as a new npm package name.
    """
    if not name or len(name) > _MAX_NAME_LENGTH:
        return False
    return bool(_NAME_RE.match(name))


def get_repo_info(starter_version: str, env: Mapping[str, str]) -> RepoInfo:
    """
    Work out which template repository and ref to clone.

    An explicit URL override clones `master` unless a branch override is
    also given; otherwise the canonical repository is cloned at the tag
    matching this release.
    """
    override_url = env.get(REPO_URL_ENV)
    if override_url:
        return RepoInfo(repo=override_url, branch=env.get(REPO_BRANCH_ENV) or OVERRIDE_BRANCH)
    return RepoInfo(repo=DEFAULT_REPO_URL, branch=f"v{starter_version}")
