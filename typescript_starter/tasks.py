"""
tasks.py

Responsibility: the fallible external operations of a scaffolding run.

Every function takes the process runner (or HTTP fetcher) as a keyword
argument so it can be exercised with a fake. Failures are translated
into the typed errors from `errors.py`, except identity lookups, which
fall back to placeholders and never abort the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from typescript_starter.config import Placeholders, RepoInfo, Runner
from typescript_starter.errors import (
    CloneFailedError,
    CommitFailedError,
    GitNotInstalledError,
    InstallFailedError,
    RevParseFailedError,
)
from typescript_starter.process import ProcessError, ProcessRunner, run_process
from typescript_starter.registry_client import GitHubClient

LOG = logging.getLogger(__name__)

UsernameFetcher = Callable[[str], str]


@dataclass(frozen=True)
class CloneResult:
    commit_hash: str
    git_history_dir: Path


@dataclass(frozen=True)
class UserIdentity:
    git_name: str
    git_email: str


@dataclass(frozen=True)
class Found:
    value: str


@dataclass(frozen=True)
class Missing:
    pass


Lookup = Found | Missing


def _or_placeholder(result: Lookup, placeholder: str) -> str:
    if isinstance(result, Found) and result.value:
        return result.value
    return placeholder


def clone_repo(
    repo_info: RepoInfo,
    working_directory: str | Path,
    dir_name: str,
    *,
    run: ProcessRunner = run_process,
) -> CloneResult:
    """
    Shallow-clone the template into working_directory/dir_name and
    confirm the result is a usable repository.

    A partially written directory is left behind on failure.
    """
    project_dir = Path(working_directory) / dir_name
    args = ["clone", "--depth=1"]
    if repo_info.branch != ".":
        args.append(f"--branch={repo_info.branch}")
    args += [repo_info.repo, dir_name]

    try:
        run("git", args, cwd=working_directory)
    except ProcessError as e:
        if e.exit_code_name == "ENOENT":
            raise GitNotInstalledError() from e
        raise CloneFailedError(e.exit_code, e.exit_code_name) from e

    try:
        rev_parse = run("git", ["rev-parse", "HEAD"], cwd=project_dir)
    except ProcessError as e:
        raise RevParseFailedError(e.exit_code, e.exit_code_name) from e

    commit_hash = (getattr(rev_parse, "stdout", "") or "").strip()
    LOG.info("Cloned %s@%s (%s) into %s", repo_info.repo, repo_info.branch, commit_hash, project_dir)
    return CloneResult(commit_hash=commit_hash, git_history_dir=project_dir / ".git")


def _git_config(key: str, run: ProcessRunner) -> Lookup:
    try:
        result = run("git", ["config", key])
    except ProcessError as e:
        LOG.debug("git config %s unavailable (%s)", key, e.exit_code_name)
        return Missing()
    return Found((getattr(result, "stdout", "") or "").strip())


def get_user_info(*, run: ProcessRunner = run_process) -> UserIdentity:
    """
    Read user.name and user.email from the local git configuration.
    """
    return UserIdentity(
        git_name=_or_placeholder(_git_config("user.name", run), Placeholders.name),
        git_email=_or_placeholder(_git_config("user.email", run), Placeholders.email),
    )


def _lookup_username(email: str, fetch: UsernameFetcher) -> Lookup:
    if email == Placeholders.email:
        return Missing()
    try:
        return Found(fetch(email))
    except Exception as e:  # noqa: BLE001 - identity is cosmetic, never fatal
        LOG.debug("GitHub username lookup failed for %s: %s", email, e)
        return Missing()


def get_github_username(email: str, *, fetch: UsernameFetcher | None = None) -> str:
    """
    Return the GitHub login for email, or the username placeholder.
    """
    if fetch is None:
        fetch = GitHubClient().find_username
    return _or_placeholder(_lookup_username(email, fetch), Placeholders.username)


def initial_commit(
    project_name: str,
    project_dir: str | Path,
    *,
    identity: UserIdentity | None = None,
    commit_hash: str = "",
    run: ProcessRunner = run_process,
) -> None:
    """
    Initialize a fresh repository in project_dir and commit everything.

    The author is passed explicitly so the commit succeeds even where no
    global git identity is configured.
    """
    identity = identity or UserIdentity(git_name=Placeholders.name, git_email=Placeholders.email)
    message = f"Initial commit of {project_name}\n\nCreated with bitjson/typescript-starter"
    if commit_hash:
        message = f"{message}@{commit_hash}"

    steps = [
        ["init"],
        ["add", "-A"],
        ["-c", f"user.name={identity.git_name}", "-c", f"user.email={identity.git_email}", "commit", "-m", message],
    ]
    for args in steps:
        try:
            run("git", args, cwd=project_dir)
        except ProcessError as e:
            raise CommitFailedError(e.exit_code, e.exit_code_name, e.command) from e


def install(runner: Runner, project_dir: str | Path, *, run: ProcessRunner = run_process) -> None:
    """
    Run `<runner> install` inside project_dir.
    """
    try:
        run(runner.value, ["install"], cwd=project_dir, quiet=False)
    except ProcessError as e:
        LOG.debug("%s install failed (%s, exit code %s)", runner.value, e.exit_code_name, e.exit_code)
        raise InstallFailedError() from e
