"""
renderer.py

Responsibility: turn a freshly cloned template into the user's project.

Rules:
- The template's own git history is removed; a new one is created later.
- package.json is rewritten with the new name, description, author and repository.
- README.md and LICENSE are rendered from the Jinja2 templates shipped with this package.
- Files belonging to disabled features are deleted.
- Template files that do not exist are skipped, not treated as errors.

This module intentionally does NOT run git or talk to the network.
"""

from __future__ import annotations

import datetime
import json
import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from typescript_starter.config import Config
from typescript_starter.errors import CustomizeError

LOG = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Config flag -> paths that only make sense when the flag is enabled.
FEATURE_PATHS = {
    "travis": [".travis.yml"],
    "appveyor": ["appveyor.yml"],
    "circleci": [".circleci"],
    "cspell": [".cspell.json"],
    "editorconfig": [".editorconfig"],
    "vscode": [".vscode"],
}

_STRICT_OPTIONS = (
    "noUnusedLocals",
    "noUnusedParameters",
    "noImplicitReturns",
    "noFallthroughCasesInSwitch",
)


@dataclass(frozen=True)
class CustomizeResult:
    removed: tuple[str, ...]
    rewritten: tuple[str, ...]


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def _remove(path: Path) -> bool:
    if path.is_dir():
        shutil.rmtree(path)
        return True
    if path.exists():
        path.unlink()
        return True
    return False


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise CustomizeError(f"Could not parse {path.name}: {e}") from e


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8", newline="\n")


def _rewrite_package_json(path: Path, config: Config) -> None:
    pkg = _read_json(path)
    pkg["name"] = config.project_name
    pkg["version"] = "1.0.0"
    pkg["description"] = config.description
    pkg["author"] = config.full_name
    pkg["repository"] = {
        "type": "git",
        "url": f"https://github.com/{config.github_username}/{config.project_name}",
    }
    pkg.pop("bin", None)

    scripts = pkg.get("scripts") or {}
    dev_deps = pkg.get("devDependencies") or {}
    if not config.cspell:
        for key in [k for k, v in scripts.items() if "cspell" in k or "cspell" in str(v)]:
            del scripts[key]
        dev_deps.pop("cspell", None)
    if not config.functional:
        dev_deps.pop("eslint-plugin-functional", None)

    _write_json(path, pkg)


def _strip_functional_lint(path: Path) -> None:
    eslintrc = _read_json(path)
    for key in ("plugins", "extends"):
        entries = eslintrc.get(key)
        if isinstance(entries, list):
            eslintrc[key] = [e for e in entries if "functional" not in str(e)]
    _write_json(path, eslintrc)


def _set_list_entry(text: str, key: str, entry: str, enabled: bool) -> str:
    """
    Add or remove `entry` in a one-line `"key": [...]` array of a JSONC file.
    """
    pattern = re.compile(rf'("{key}"\s*:\s*\[)([^\]]*)(\])')
    match = pattern.search(text)
    if match is None:
        return text
    items = [i.strip() for i in match.group(2).split(",") if i.strip()]
    quoted = f'"{entry}"'
    items = [i for i in items if i != quoted]
    if enabled:
        items.append(quoted)
    return text[: match.start(2)] + ", ".join(items) + text[match.end(2) :]


def _rewrite_tsconfig(path: Path, config: Config) -> None:
    text = path.read_text(encoding="utf-8")
    text = _set_list_entry(text, "lib", "dom", config.dom_definitions)
    text = _set_list_entry(text, "types", "node", config.node_definitions)
    if config.strict:
        for option in _STRICT_OPTIONS:
            text = re.sub(rf'//\s*("{option}"\s*:)', r"\1", text)
    path.write_text(text, encoding="utf-8", newline="\n")


def customize_project(
    config: Config,
    project_dir: str | Path,
    *,
    year: int | None = None,
) -> CustomizeResult:
    """
    Rewrite the cloned template in project_dir for `config`.
    """
    root = Path(project_dir)
    if not root.is_dir():
        raise CustomizeError(f"Project directory not found: {root}")

    removed: list[str] = []
    rewritten: list[str] = []
    context = {
        "project_name": config.project_name,
        "description": config.description,
        "author": config.full_name,
        "runner": config.runner.value,
        "starter_version": config.starter_version,
        "year": year or datetime.date.today().year,
    }

    try:
        if _remove(root / ".git"):
            removed.append(".git")

        for flag, paths in FEATURE_PATHS.items():
            if getattr(config, flag):
                continue
            for rel in paths:
                if _remove(root / rel):
                    removed.append(rel)

        if (root / "package.json").exists():
            _rewrite_package_json(root / "package.json", config)
            rewritten.append("package.json")

        if not config.functional and (root / ".eslintrc.json").exists():
            _strip_functional_lint(root / ".eslintrc.json")
            rewritten.append(".eslintrc.json")

        if (root / "tsconfig.json").exists():
            _rewrite_tsconfig(root / "tsconfig.json", config)
            rewritten.append("tsconfig.json")

        env = _environment()
        for template_name, target in (("README.md.j2", "README.md"), ("LICENSE.j2", "LICENSE")):
            out = env.get_template(template_name).render(**context)
            (root / target).write_text(out, encoding="utf-8", newline="\n")
            rewritten.append(target)
    except TemplateError as e:
        raise CustomizeError(f"Failed rendering project template: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CustomizeError(f"Failed customizing {root}: {e}") from e

    LOG.info("Customized %s (removed: %s)", root, ", ".join(removed) or "nothing")
    return CustomizeResult(removed=tuple(removed), rewritten=tuple(rewritten))
