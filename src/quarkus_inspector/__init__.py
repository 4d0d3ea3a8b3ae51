"""Quarkus project inspection: module detection, version checks, config files and URLs."""

from .host import (
    ContentRootLookup,
    InMemoryProject,
    ModuleLibraryLookup,
    ProjectLookup,
    PropertyLookup,
    StaticModule,
)
from .inspector import (
    check_quarkus_version,
    detect_quarkus_version,
    get_application_url,
    get_content_roots,
    get_dev_ui_url,
    get_module_dir_path,
    get_modules_uris,
    has_library,
    is_quarkus_module,
    is_quarkus_properties_file,
    is_quarkus_web_app_module,
    is_quarkus_yaml_file,
    normalize,
    sort_roots,
)
from .utils import PropertiesFile, QuarkusVersion, version_at_least

__version__ = "0.1.0"

__all__ = [
    "ContentRootLookup",
    "InMemoryProject",
    "ModuleLibraryLookup",
    "ProjectLookup",
    "PropertyLookup",
    "StaticModule",
    "check_quarkus_version",
    "detect_quarkus_version",
    "get_application_url",
    "get_content_roots",
    "get_dev_ui_url",
    "get_module_dir_path",
    "get_modules_uris",
    "has_library",
    "is_quarkus_module",
    "is_quarkus_properties_file",
    "is_quarkus_web_app_module",
    "is_quarkus_yaml_file",
    "normalize",
    "sort_roots",
    "PropertiesFile",
    "QuarkusVersion",
    "version_at_least",
]
