"""
pipeline.py

Responsibility: run the scaffolding steps in their fixed order.

check version -> resolve config -> clone -> identity -> customize -> commit -> install

Each step finishes before the next starts; the first failure propagates
unchanged to the caller. Nothing is retried and nothing is cleaned up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from rich.console import Console

from typescript_starter import __version__
from typescript_starter.args import PromptForMissing, resolve_config
from typescript_starter.config import Config, ConfigSource
from typescript_starter.errors import TargetExistsError
from typescript_starter.inquire import prompt_for_missing
from typescript_starter.process import ProcessRunner, run_process
from typescript_starter.registry_client import GitHubClient, RegistryClient
from typescript_starter.renderer import customize_project
from typescript_starter.tasks import (
    UsernameFetcher,
    clone_repo,
    get_github_username,
    get_user_info,
    initial_commit,
    install,
)
from typescript_starter.version_check import LatestVersionFetcher

LOG = logging.getLogger(__name__)


def _default_fetch_latest(name: str) -> str:
    return RegistryClient().fetch_latest_version(name)


@dataclass(frozen=True)
class Tasks:
    """The external collaborators a run is allowed to use."""

    run: ProcessRunner = run_process
    fetch_latest: LatestVersionFetcher = _default_fetch_latest
    find_username: UsernameFetcher | None = None
    prompt: PromptForMissing = prompt_for_missing
    console: Console = field(default_factory=Console)


def run_pipeline(
    source: ConfigSource,
    tasks: Tasks | None = None,
    *,
    working_directory: str | Path = ".",
    current_version: str = __version__,
    on_config: Callable[[Config], None] | None = None,
) -> Config:
    """
    Scaffold one project and return the Config it was built from.
    """
    tasks = tasks or Tasks()
    console = tasks.console

    config = resolve_config(
        source,
        prompt=tasks.prompt,
        fetch_latest=tasks.fetch_latest,
        current_version=current_version,
    )
    config = config.with_inferred(working_directory=str(working_directory))
    if on_config is not None:
        on_config(config)

    project_dir = config.project_dir
    if project_dir.exists():
        raise TargetExistsError(str(project_dir))

    console.print(f"Cloning [bold]{config.repo.repo}[/bold] ({config.repo.branch}) into {project_dir} ...")
    cloned = clone_repo(config.repo, working_directory, config.project_name, run=tasks.run)

    identity = get_user_info(run=tasks.run)
    find_username = tasks.find_username or GitHubClient(token=source.env.get("GITHUB_TOKEN")).find_username
    username = get_github_username(identity.git_email, fetch=find_username)
    config = config.with_inferred(
        full_name=identity.git_name,
        email=identity.git_email,
        github_username=username,
    )
    LOG.info("Author: %s <%s> (GitHub: %s)", config.full_name, config.email, config.github_username)

    customize_project(config, project_dir)

    initial_commit(
        config.project_name,
        project_dir,
        identity=identity,
        commit_hash=cloned.commit_hash,
        run=tasks.run,
    )

    if config.install:
        console.print(f"Installing dependencies with {config.runner.value} ...")
        install(config.runner, project_dir, run=tasks.run)
    else:
        LOG.info("Skipping dependency installation")

    return config
