"""Utility modules for quarkus-inspector."""

from .project import (
    ProjectRootConfig,
    configure_project_root,
    find_quarkus_project_root,
    get_project_root,
    get_project_root_sync,
    parse_file_uri,
)
from .properties import PropertiesFile, find_application_properties, parse_properties
from .version import QuarkusVersion, version_at_least

__all__ = [
    "ProjectRootConfig",
    "configure_project_root",
    "find_quarkus_project_root",
    "get_project_root",
    "get_project_root_sync",
    "parse_file_uri",
    "PropertiesFile",
    "find_application_properties",
    "parse_properties",
    "QuarkusVersion",
    "version_at_least",
]
