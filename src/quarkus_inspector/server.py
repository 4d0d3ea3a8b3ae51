"""MCP Server exposing Quarkus project inspection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from .host import InMemoryProject, StaticModule
from .inspector import (
    QUARKUS_FACET_TYPE_ID,
    check_quarkus_version,
    detect_quarkus_version,
    get_application_url,
    get_dev_ui_url,
    get_module_dir_path,
    get_content_roots,
    is_quarkus_module,
    is_quarkus_properties_file,
    is_quarkus_web_app_module,
    is_quarkus_yaml_file,
)
from .utils.project import configure_project_root, get_project_root
from .utils.properties import PropertiesFile, find_application_properties
from .utils.version import QuarkusVersion, version_at_least

logger = logging.getLogger(__name__)


def parse_min_version(text: str) -> tuple[int, int, int]:
    """Parse '3', '3.2' or '3.2.1' into a (major, minor, patch) tuple."""
    parts = text.strip().split(".")
    if not 1 <= len(parts) <= 3:
        raise ValueError(f"Invalid version: {text!r}")
    numbers = [int(part) for part in parts]
    numbers += [0] * (3 - len(numbers))
    return numbers[0], numbers[1], numbers[2]


def build_module(
    name: str = "module",
    libraries: list[str] | None = None,
    classpath: list[str] | None = None,
    content_roots: list[str] | None = None,
    module_dir: str | None = None,
    quarkus_facet: bool = False,
) -> tuple[InMemoryProject, StaticModule]:
    """Build a single-module project from tool arguments."""
    module = StaticModule(
        name=name,
        libraries=list(libraries or []),
        classpath=list(classpath or []),
        content_roots=list(content_roots or []),
        module_dir=module_dir,
        facets={QUARKUS_FACET_TYPE_ID} if quarkus_facet else set(),
    )
    return InMemoryProject([module]), module


async def resolve_properties(ctx: Context | None, properties_file: str | None) -> PropertiesFile:
    """Load the given properties file, or the project's application.properties."""
    if properties_file:
        return PropertiesFile.load(properties_file)

    project_root = await get_project_root(ctx)
    if project_root is None:
        logger.info("No project root, using default Quarkus properties")
        return PropertiesFile()

    path = find_application_properties(project_root)
    if path is None:
        logger.info(f"No application.properties under {project_root}, using defaults")
        return PropertiesFile(source=project_root)
    return PropertiesFile.load(path)


def create_server(project_path: str | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        project_path: Default project root, used to locate
            src/main/resources/application.properties when a tool call
            names no properties file.
    """
    if project_path:
        configure_project_root(explicit_project_path=project_path, startup_cwd=project_path)

    mcp = FastMCP("quarkus-inspector")

    # ============== URL Tools ==============

    @mcp.tool()
    async def quarkus_application_url(ctx: Context, properties_file: str | None = None) -> dict:
        """
        URL at which the running Quarkus application is reachable.

        Uses quarkus.http.port (overridden by %dev.quarkus.http.port) and
        quarkus.http.root-path. The URL is computed, never requested.

        Args:
            properties_file: Path to application.properties. Defaults to the
                project's src/main/resources/application.properties.
        """
        try:
            properties = await resolve_properties(ctx, properties_file)
            return {"success": True, "data": {"url": get_application_url(properties)}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @mcp.tool()
    async def quarkus_dev_ui_url(ctx: Context, properties_file: str | None = None) -> dict:
        """
        URL of the Quarkus Dev UI.

        Uses quarkus.http.non-application-root-path (default "q"), relative to
        quarkus.http.root-path unless it starts with "/".

        Args:
            properties_file: Path to application.properties. Defaults to the
                project's src/main/resources/application.properties.
        """
        try:
            properties = await resolve_properties(ctx, properties_file)
            return {"success": True, "data": {"url": get_dev_ui_url(properties)}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    # ============== Module Tools ==============

    @mcp.tool()
    async def quarkus_detect_module(
        libraries: list[str],
        classpath: list[str] | None = None,
    ) -> dict:
        """
        Detect whether a module is a Quarkus (web app) module and its version.

        Args:
            libraries: Library names of the module (e.g. Maven: io.quarkus:quarkus-core:3.8.1)
            classpath: Runtime classpath entries (jar paths) used for version detection
        """
        try:
            project, module = build_module(libraries=libraries, classpath=classpath)
            raw_version = detect_quarkus_version(module, project)
            version = QuarkusVersion.from_string(raw_version) if raw_version else None
            return {
                "success": True,
                "data": {
                    "quarkus": is_quarkus_module(module, project),
                    "webApp": is_quarkus_web_app_module(module, project),
                    "version": raw_version,
                    "standardVersion": str(version) if version else None,
                },
            }
        except Exception as e:
            return {"success": False, "error": str(e)}

    @mcp.tool()
    async def quarkus_check_version(
        classpath: list[str],
        min_version: str,
        assume_if_missing: bool = False,
    ) -> dict:
        """
        Check that the Quarkus version on the classpath is at least min_version.

        Non-standard versions (e.g. 999-SNAPSHOT) never satisfy the check.

        Args:
            classpath: Runtime classpath entries (jar paths)
            min_version: Minimum version, e.g. "3" or "2.13.5"
            assume_if_missing: Result when no quarkus-core jar is on the classpath
        """
        try:
            project, module = build_module(classpath=classpath)
            predicate = version_at_least(*parse_min_version(min_version))
            result = check_quarkus_version(module, project, predicate, assume_if_missing)
            return {"success": True, "data": {"satisfied": result}}
        except Exception as e:
            return {"success": False, "error": str(e)}

    @mcp.tool()
    async def quarkus_classify_file(
        file: str,
        content_roots: list[str],
        libraries: list[str] | None = None,
        quarkus_facet: bool = False,
    ) -> dict:
        """
        Classify a configuration file as a Quarkus properties or YAML file.

        The file belongs to the module described by content_roots; the module
        is Quarkus-enabled if it has the Quarkus facet or a quarkus-core library.

        Args:
            file: Path of the configuration file
            content_roots: Content roots of the module owning the file
            libraries: Library names of the module
            quarkus_facet: Whether the module was explicitly set up as Quarkus
        """
        try:
            project, _ = build_module(
                libraries=libraries, content_roots=content_roots, quarkus_facet=quarkus_facet
            )
            return {
                "success": True,
                "data": {
                    "properties": is_quarkus_properties_file(file, project),
                    "yaml": is_quarkus_yaml_file(file, project),
                },
            }
        except Exception as e:
            return {"success": False, "error": str(e)}

    @mcp.tool()
    async def quarkus_primary_content_root(
        content_roots: list[str],
        module_dir: str | None = None,
    ) -> dict:
        """
        Pick the primary content root (shortest path first, which demotes
        generated sources roots), falling back to the module directory.

        Args:
            content_roots: Content roots of the module
            module_dir: Declared module directory, used when there are no roots
        """
        try:
            project, module = build_module(content_roots=content_roots, module_dir=module_dir)
            primary: Path | None = get_module_dir_path(module, project)
            data: dict[str, Any] = {
                "primary": str(primary) if primary else None,
                "contentRoots": get_content_roots(module, project),
            }
            return {"success": True, "data": data}
        except Exception as e:
            return {"success": False, "error": str(e)}

    return mcp
