"""
args.py

Responsibility: turn a ConfigSource (argv + env) and, when needed, the
user's interactive answers into one immutable `Config`.

Precedence, highest first: flags given on the command line, answers
from the interactive prompt, built-in defaults.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Callable, Mapping, NoReturn

from typescript_starter import __version__
from typescript_starter.config import Config, ConfigSource, Runner, get_repo_info, validate_name
from typescript_starter.errors import InvalidNameError, MissingInputError, UsageError
from typescript_starter.version_check import LatestVersionFetcher, check_version

LOG = logging.getLogger(__name__)

# Config field -> value used when neither the command line nor the prompt set it.
FLAG_DEFAULTS: dict[str, Any] = {
    "description": "",
    "appveyor": False,
    "circleci": True,
    "cspell": True,
    "dom_definitions": False,
    "editorconfig": True,
    "functional": True,
    "install": True,
    "node_definitions": False,
    "strict": False,
    "travis": False,
    "vscode": True,
    "runner": Runner.Npm,
}

# (flag, Config field, help) for options that only switch a feature on.
_ENABLE_FLAGS = [
    ("--appveyor", "appveyor", "Include an AppVeyor CI configuration."),
    ("--dom", "dom_definitions", "Include DOM type definitions."),
    ("--node", "node_definitions", "Include Node.js type definitions."),
    ("--strict", "strict", "Enable stricter type-checking."),
    ("--travis", "travis", "Include a Travis CI configuration."),
]

# (name, Config field, help) for options with a --no-<name> counterpart.
_TOGGLE_FLAGS = [
    ("circleci", "circleci", "CircleCI configuration"),
    ("cspell", "cspell", "cspell spell-checking configuration"),
    ("editorconfig", "editorconfig", ".editorconfig file"),
    ("functional", "functional", "eslint-plugin-functional linting"),
    ("install", "install", "dependency installation after scaffolding"),
    ("vscode", "vscode", "VS Code debugging configuration"),
]

PromptForMissing = Callable[[Mapping[str, Any]], Mapping[str, Any]]


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{self.prog}: {message}")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="typescript-starter",
        description="Create a new TypeScript project from the typescript-starter template.",
    )

    parser.add_argument("project_name", nargs="?", default=None, help="Name of the new project (npm package name).")
    parser.add_argument("--description", default=None, help="Package description.")

    for flag, dest, help_text in _ENABLE_FLAGS:
        parser.add_argument(flag, dest=dest, action="store_true", default=None, help=help_text)

    for name, dest, what in _TOGGLE_FLAGS:
        parser.add_argument(f"--{name}", dest=dest, action="store_true", default=None, help=f"Include {what}.")
        parser.add_argument(f"--no-{name}", dest=dest, action="store_false", default=None, help=f"Omit {what}.")

    runners = parser.add_mutually_exclusive_group()
    runners.add_argument("--npm", dest="runner", action="store_const", const=Runner.Npm, default=None, help="Use npm (default).")
    runners.add_argument("--yarn", dest="runner", action="store_const", const=Runner.Yarn, default=None, help="Use yarn.")

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )

    return parser


def _strip_quotes(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def parse_cli_args(args: list[str]) -> dict[str, Any]:
    """
    Return only the values the user actually supplied on the command line.
    """
    ns = build_arg_parser().parse_args(args)
    supplied = {k: v for k, v in vars(ns).items() if v is not None and k != "verbose"}
    if "description" in supplied:
        supplied["description"] = _strip_quotes(supplied["description"])
    return supplied


def resolve_config(
    source: ConfigSource,
    *,
    prompt: PromptForMissing | None = None,
    fetch_latest: LatestVersionFetcher | None = None,
    current_version: str = __version__,
) -> Config:
    """
    Produce the final Config for this run.

    The version check runs first; a stale or unreachable tool never
    yields a Config. When the project name is missing and the session is
    interactive, `prompt` is asked to fill the gaps.
    """
    check_version(current_version, fetch_latest=fetch_latest)

    supplied = parse_cli_args(source.args)

    if "project_name" not in supplied:
        if not (source.interactive and prompt is not None):
            raise MissingInputError("A project name is required, e.g. `typescript-starter my-project`.")
        LOG.debug("Project name missing; asking interactively")
        answers = dict(prompt(supplied))
        supplied = {**answers, **supplied}
        if not supplied.get("project_name"):
            raise MissingInputError("A project name is required.")

    project_name = str(supplied.pop("project_name"))
    if not validate_name(project_name):
        raise InvalidNameError(project_name)

    unknown = set(supplied) - set(FLAG_DEFAULTS)
    if unknown:
        LOG.debug("Ignoring unknown answers: %s", ", ".join(sorted(unknown)))

    values = {key: supplied.get(key, default) for key, default in FLAG_DEFAULTS.items()}
    for key, value in values.items():
        if key not in ("description", "runner"):
            values[key] = bool(value)
    values["description"] = str(values["description"])
    values["runner"] = Runner(values["runner"])

    return Config(
        project_name=project_name,
        repo=get_repo_info(current_version, source.env),
        starter_version=current_version,
        **values,
    )
