"""
Exception types used across typescript-starter.

Each failure kind is its own class and carries only the fields it needs,
so callers discriminate by type rather than by message text. The CLI is
the only place that turns these into exit codes.
"""

from __future__ import annotations


class StarterError(Exception):
    """Base class for all typescript-starter errors."""


class OutdatedToolError(StarterError):
    def __init__(self, current: str, latest: str) -> None:
        self.current = current
        self.latest = latest
        super().__init__(
            f"Your version of typescript-starter is outdated. "
            f"Upgrade with 'pip install --upgrade typescript-starter' and try again. "
            f"(installed: {current}, latest: {latest})"
        )


class RegistryLookupError(StarterError):
    def __init__(self, package_name: str, detail: str = "") -> None:
        self.package_name = package_name
        message = f'The package "{package_name}" could not be found on the registry.'
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidVersionError(StarterError):
    def __init__(self, version: str, origin: str) -> None:
        self.version = version
        self.origin = origin
        super().__init__(f"The {origin} version {version!r} is not a valid version number.")


class InvalidNameError(StarterError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'"{name}" is not a valid package name. Use lowercase, hyphen-separated '
            "words, optionally scoped (e.g. @scope/my-project)."
        )


class MissingInputError(StarterError):
    """Raised when required input is absent and nobody can be asked for it."""


class GitNotInstalledError(StarterError):
    def __init__(self) -> None:
        super().__init__(
            "Git is not installed on your PATH. Please install Git and try again.\n\n"
            "For more information, visit: "
            "https://git-scm.com/book/en/v2/Getting-Started-Installing-Git"
        )


class CloneFailedError(StarterError):
    def __init__(self, exit_code: int, exit_code_name: str) -> None:
        self.exit_code = exit_code
        self.exit_code_name = exit_code_name
        super().__init__("Git clone failed.")


class RevParseFailedError(StarterError):
    def __init__(self, exit_code: int, exit_code_name: str) -> None:
        self.exit_code = exit_code
        self.exit_code_name = exit_code_name
        super().__init__("Git rev-parse failed.")


class CommitFailedError(StarterError):
    def __init__(self, exit_code: int, exit_code_name: str, command: str = "") -> None:
        self.exit_code = exit_code
        self.exit_code_name = exit_code_name
        self.command = command
        super().__init__(f"Command failed ({exit_code_name}, exit code {exit_code}): {command}")


class InstallFailedError(StarterError):
    def __init__(self) -> None:
        super().__init__("Installation failed. You'll need to install manually.")


class CustomizeError(StarterError):
    """Raised when the cloned template cannot be rewritten."""


class UsageError(StarterError):
    """Raised for malformed command lines (unknown or conflicting flags)."""


class TargetExistsError(StarterError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'The "{path}" path already exists in this directory.')
