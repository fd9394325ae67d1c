"""Centralized path management for billsplit.

The only on-disk state billsplit ever reads is optional configuration; this
module is the single place that decides where it lives.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory.

    BILLSPLIT_ROOT wins when set; otherwise the current working directory,
    which is where a deployed service keeps its config/ directory.
    """
    env_root = os.environ.get("BILLSPLIT_ROOT")
    if env_root:
        return Path(env_root)
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for project-related paths, resolved against the project root."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def receipt_parser_rules(self) -> Path:
        """Heuristic receipt parser tuning TOML file."""
        return self.config / "receipt_parser.toml"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths so the next call re-reads the environment."""
    global _paths
    _paths = None
