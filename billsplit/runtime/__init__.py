"""Runtime infrastructure for billsplit.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Parser tuning via load_parser_config()

The inference client, remote parser and HTTP server live in their own
modules (``billsplit.runtime.inference_client``, ``.remote_parser``,
``.receipt_server``) and are imported explicitly.

Usage:
    from billsplit.runtime import get_logger, load_parser_config

    logger = get_logger(__name__)
    config = load_parser_config()
"""

from billsplit.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from billsplit.runtime.parser_rules import load_parser_config
from billsplit.runtime.paths import ProjectPaths, get_paths, reset_paths

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_parser_config",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
