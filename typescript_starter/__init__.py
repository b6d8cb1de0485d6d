"""
typescript_starter package

This package scaffolds a new TypeScript project from the typescript-starter
template repository.

Key responsibilities are split across modules:
- `args.py`: turn argv/env/prompt answers into one immutable `Config`
- `version_check.py`: refuse to run when a newer release is published
- `registry_client.py`: isolated HTTP interactions (npm registry / GitHub search)
- `tasks.py`: clone, identity lookup, initial commit, dependency install
- `renderer.py`: rewrite the cloned template with the new project's identity
- `pipeline.py`: fixed-order orchestration of the steps above
- `cli.py`: CLI entrypoint and exit-code mapping
"""

from __future__ import annotations

__all__ = ["__version__", "PACKAGE_NAME"]

__version__ = "10.1.1"

PACKAGE_NAME = "typescript-starter"
