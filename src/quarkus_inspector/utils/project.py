"""Locating the Quarkus project whose application.properties the tools read.

Sources, first hit wins: the client's MCP roots, QUARKUS_PROJECT_ROOT or
MCP_PROJECT_ROOT, --project, then the startup directory (searched upward for
a build file when --project-from-cwd is given).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

if TYPE_CHECKING:
    from mcp.server.fastmcp import Context

logger = logging.getLogger(__name__)

PROJECT_ROOT_ENV_VARS = ("QUARKUS_PROJECT_ROOT", "MCP_PROJECT_ROOT")

# Searched in order; each group is tried across all ancestors before the next
BUILD_MARKER_GROUPS = (
    ("pom.xml",),
    ("build.gradle", "build.gradle.kts"),
    (".git",),
)


@dataclass(frozen=True)
class ProjectRootConfig:
    """Startup options that decide the fallback project root."""

    startup_cwd: Path | None = None
    use_project_from_cwd: bool = False
    explicit_project_path: Path | None = None


_config = ProjectRootConfig()


def configure_project_root(
    *,
    use_project_from_cwd: bool = False,
    explicit_project_path: str | Path | None = None,
    startup_cwd: str | Path | None = None,
) -> None:
    """Set the startup options. Called once by create_server."""
    global _config
    _config = ProjectRootConfig(
        startup_cwd=Path(startup_cwd) if startup_cwd else None,
        use_project_from_cwd=use_project_from_cwd,
        explicit_project_path=Path(explicit_project_path) if explicit_project_path else None,
    )
    logger.debug(f"Project root options: {_config}")


def get_config() -> ProjectRootConfig:
    return _config


def parse_file_uri(uri: str) -> Path | None:
    """Absolute path of a file:// URI, or None for anything else."""
    parsed = urlparse(str(uri))
    if parsed.scheme != "file":
        logger.warning(f"Not a file URI: {uri}")
        return None

    path_str = unquote(parsed.path)
    # file:///C:/x parses to "/C:/x"
    if len(path_str) > 2 and path_str[0] == "/" and path_str[2] == ":":
        path_str = path_str[1:]

    path = Path(path_str)
    return path if path.is_absolute() else None


def find_quarkus_project_root(start_dir: Path | None = None) -> Path:
    """Nearest directory holding pom.xml, else build.gradle(.kts), else .git.

    Falls back to start_dir (or the CWD) when no marker is found.
    """
    start = (start_dir or Path.cwd()).resolve()
    candidates = [start, *start.parents]
    for markers in BUILD_MARKER_GROUPS:
        for directory in candidates:
            if any((directory / marker).exists() for marker in markers):
                return directory
    return start


def _root_from_env() -> Path | None:
    for name in PROJECT_ROOT_ENV_VARS:
        value = os.environ.get(name)
        if not value:
            continue
        if Path(value).is_dir():
            return Path(value)
        logger.warning(f"Ignoring {name}={value}: not a directory")
    return None


def get_project_root_sync() -> Path | None:
    """Project root from environment and startup options (no MCP roots)."""
    env_root = _root_from_env()
    if env_root is not None:
        return env_root

    config = get_config()
    explicit = config.explicit_project_path
    if explicit is not None:
        if explicit.is_dir():
            return explicit
        logger.warning(f"Ignoring --project {explicit}: not a directory")

    if config.startup_cwd is None:
        logger.warning("Could not determine project root")
        return None
    if config.use_project_from_cwd:
        return find_quarkus_project_root(config.startup_cwd)
    return config.startup_cwd


async def get_project_root(ctx: Context | None = None) -> Path | None:
    """Project root, preferring the first root advertised by the MCP client."""
    if ctx is not None:
        try:
            roots = await ctx.list_roots()
        except Exception as e:
            # Client may not support roots
            logger.info(f"Could not get roots from client: {e}")
            roots = []

        if roots:
            path = parse_file_uri(str(roots[0].uri))
            if path is not None and path.is_dir():
                logger.info(f"Using project root from MCP client: {path}")
                return path
            logger.warning(f"MCP root is not a local directory: {roots[0].uri}")

    return get_project_root_sync()
