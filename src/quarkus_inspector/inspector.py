"""Quarkus awareness for host project modules.

Detection is proxied through library names (io.quarkus:quarkus-core*), since
class metadata is not always available when a module is added. All functions
are stateless; the host capabilities they need are passed in explicitly.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path, PurePath
from typing import Any

from .host import ContentRootLookup, ModuleLibraryLookup, ProjectLookup, PropertyLookup

logger = logging.getLogger(__name__)

QUARKUS_CORE_PREFIX = "quarkus-core"
QUARKUS_VERTX_HTTP_PREFIX = "quarkus-vertx-http"
QUARKUS_FACET_TYPE_ID = "quarkus"

# Loose: is this a quarkus-core jar at all
QUARKUS_CORE_PATTERN = re.compile(r"quarkus-core-(\d[a-zA-Z\d\-.]+?)\.jar")

# Strict: major.minor.patch with optional .Final and -redhat-N qualifiers
QUARKUS_STANDARD_VERSIONING = re.compile(r"(\d+)\.(\d+)\.(\d+)(\.Final)?(-redhat-\d+)?$")

APPLICATION_PROPERTIES = re.compile(r"application(-.+)?\.properties")
MICROPROFILE_CONFIG_PROPERTIES = re.compile(r"microprofile-config(-.+)?\.properties")
APPLICATION_YAML = re.compile(r"application(-.+)?\.ya?ml")

DEFAULT_HTTP_PORT = 8080

VersionPredicate = Callable[[re.Match[str] | None], bool]


def is_quarkus_module(module: Any | None, libraries: ModuleLibraryLookup) -> bool:
    """Check if the module is a Quarkus project.

    Args:
        module: Host module reference, may be None
        libraries: Library lookup for the module

    Returns:
        True if any library name contains "quarkus-core"
    """
    return module is not None and has_library(module, libraries, QUARKUS_CORE_PREFIX)


def is_quarkus_web_app_module(module: Any | None, libraries: ModuleLibraryLookup) -> bool:
    """Check if the module is a Quarkus web application (quarkus-vertx-http)."""
    return module is not None and has_library(module, libraries, QUARKUS_VERTX_HTTP_PREFIX)


def has_library(module: Any, libraries: ModuleLibraryLookup, library_name_prefix: str) -> bool:
    """Return True if any library-only entry name contains the given prefix."""
    return any(
        name is not None and library_name_prefix in name
        for name in libraries.library_names(module)
    )


def _root_name(root: str) -> str:
    # Jar roots may be given in jar URL form: .../foo.jar!/, with either separator
    return re.split(r"[/\\]", root.rstrip("/\\").removesuffix("!"))[-1]


def _find_quarkus_core_jar(module: Any, libraries: ModuleLibraryLookup) -> str | None:
    for root in libraries.classpath_roots(module):
        name = _root_name(root)
        if QUARKUS_CORE_PATTERN.fullmatch(name):
            return name
    return None


def detect_quarkus_version(module: Any, libraries: ModuleLibraryLookup) -> str | None:
    """Return the raw quarkus-core version found on the runtime classpath, if any."""
    jar_name = _find_quarkus_core_jar(module, libraries)
    if jar_name is None:
        return None
    match = QUARKUS_CORE_PATTERN.fullmatch(jar_name)
    return match.group(1) if match else None


def check_quarkus_version(
    module: Any,
    libraries: ModuleLibraryLookup,
    predicate: VersionPredicate,
    return_if_no_quarkus_detected: bool,
) -> bool:
    """Check whether the Quarkus version used by the module matches a predicate.

    The predicate receives the result of matching the detected version against
    QUARKUS_STANDARD_VERSIONING: group(1) is the major version, group(2) the
    minor and group(3) the patch. A version that does not follow the standard
    versioning is passed as None, and the predicate decides what that means.

    Args:
        module: Host module reference
        libraries: Classpath lookup for the module
        predicate: Called with the strict version match (or None)
        return_if_no_quarkus_detected: Returned as-is when no quarkus-core jar
            is on the classpath

    Returns:
        The predicate result, or return_if_no_quarkus_detected
    """
    jar_name = _find_quarkus_core_jar(module, libraries)
    if jar_name is None:
        return return_if_no_quarkus_detected

    artifact_match = QUARKUS_CORE_PATTERN.fullmatch(jar_name)
    if not artifact_match:
        return False

    quarkus_version = artifact_match.group(1)
    logger.debug(f"Detected Quarkus version = {quarkus_version}")
    version_match = QUARKUS_STANDARD_VERSIONING.fullmatch(quarkus_version)
    return bool(predicate(version_match))


def get_modules_uris(project: ProjectLookup) -> set[str]:
    """Return the URIs of all modules of the project that have a location."""
    uris = (project.module_uri(module) for module in project.modules())
    return {uri for uri in uris if uri is not None}


def _is_quarkus_enabled(file: str | PurePath, project: ProjectLookup) -> bool:
    module = project.module_for_file(file)
    return module is not None and (
        project.has_facet(module, QUARKUS_FACET_TYPE_ID) or is_quarkus_module(module, project)
    )


def is_quarkus_properties_file(file: str | PurePath, project: ProjectLookup) -> bool:
    """Check for application(-profile).properties or microprofile-config(-profile).properties
    owned by a Quarkus module."""
    name = PurePath(file).name
    if APPLICATION_PROPERTIES.fullmatch(name) or MICROPROFILE_CONFIG_PROPERTIES.fullmatch(name):
        return _is_quarkus_enabled(file, project)
    return False


def is_quarkus_yaml_file(file: str | PurePath, project: ProjectLookup | None = None) -> bool:
    """Check for application(-profile).yaml/yml.

    Without a project only the name is checked; with one, the owning module
    must also be Quarkus-enabled.
    """
    if not APPLICATION_YAML.fullmatch(PurePath(file).name):
        return False
    if project is None:
        return True
    return _is_quarkus_enabled(file, project)


def sort_roots(roots: list[str]) -> None:
    """Sort roots in place, smallest path first (eliminates generated sources roots)."""
    roots.sort(key=len)


def get_content_roots(module: Any, roots: ContentRootLookup) -> list[str]:
    """Return the module content roots sorted with smallest path first."""
    content_roots = list(roots.content_roots(module))
    if len(content_roots) <= 1:
        return content_roots
    sort_roots(content_roots)
    return content_roots


def get_module_dir_path(module: Any, roots: ContentRootLookup) -> Path | None:
    """Return the primary content root, or the declared module directory if it exists."""
    content_roots = get_content_roots(module, roots)
    if content_roots:
        return Path(content_roots[0])

    declared = roots.module_dir_path(module)
    if not declared:
        return None
    path = Path(declared)
    if not path.exists():
        logger.debug(f"Module directory not found: {path}")
        return None
    return path


def get_port(properties: PropertyLookup) -> int:
    port = properties.get_property_as_int("quarkus.http.port", DEFAULT_HTTP_PORT)
    return properties.get_property_as_int("%dev.quarkus.http.port", port)


def get_application_url(properties: PropertyLookup) -> str:
    """URL of the running application, e.g. http://localhost:8080/."""
    port = get_port(properties)
    path = properties.get_property("quarkus.http.root-path", "/")
    return f"http://localhost:{port}{normalize(path)}"


def get_dev_ui_url(properties: PropertyLookup) -> str:
    """URL of the Dev UI, e.g. http://localhost:8080/q/dev."""
    port = get_port(properties)
    path = properties.get_property("quarkus.http.non-application-root-path", "q")
    if not path.startswith("/"):
        root_path = properties.get_property("quarkus.http.root-path", "/")
        path = normalize(root_path) + path
    return f"http://localhost:{port}{normalize(path)}dev"


def normalize(path: str) -> str:
    """Ensure the path starts and ends with '/'."""
    if not path.startswith("/"):
        path = "/" + path
    if not path.endswith("/"):
        path = path + "/"
    return path
