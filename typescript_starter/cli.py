"""
cli.py

Responsibility: CLI entrypoint for typescript-starter.

Builds the ConfigSource from the real process, runs the pipeline and
maps errors to exit codes:
- 0: project created and dependencies installed (or skipped)
- 1: any failure; an install failure still reports that the project exists
- 2: malformed command line
- 130: interrupted
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console

from typescript_starter.args import build_arg_parser
from typescript_starter.config import Config, ConfigSource
from typescript_starter.errors import InstallFailedError, StarterError, UsageError
from typescript_starter.logging_utils import configure_logging
from typescript_starter.pipeline import Tasks, run_pipeline


def _verbosity(args: Sequence[str]) -> int:
    ns, _unknown = build_arg_parser().parse_known_args(list(args))
    return int(ns.verbose or 0)


def main(argv: Sequence[str] | None = None, tasks: Tasks | None = None) -> int:
    source = ConfigSource.from_process(argv)
    tasks = tasks or Tasks()
    console = tasks.console
    err_console = Console(stderr=True)

    resolved: list[Config] = []
    try:
        configure_logging(verbosity=_verbosity(source.args))
        config = run_pipeline(source, tasks, on_config=resolved.append)
    except KeyboardInterrupt:
        err_console.print("Aborted.", markup=False)
        return 130
    except UsageError as exc:
        err_console.print(str(exc), markup=False, soft_wrap=True)
        return 2
    except InstallFailedError as exc:
        err_console.print(f"[yellow]{exc}[/yellow]", soft_wrap=True)
        if resolved:
            console.print(f"Created [bold]{resolved[0].project_name}[/bold] without installing dependencies.")
        return 1
    except StarterError as exc:
        err_console.print(f"typescript-starter: error: {exc}", markup=False, soft_wrap=True)
        return 1

    console.print(f"[green]Created [bold]{config.project_name}[/bold][/green] in {config.project_dir}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
