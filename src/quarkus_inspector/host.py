"""Host collaborator interfaces.

The inspector never looks modules, libraries or properties up on its own.
Every operation receives the capability it needs as a parameter:

- ModuleLibraryLookup: library names and runtime classpath roots of a module
- ContentRootLookup: content roots and declared directory of a module
- PropertyLookup: project-scoped configuration properties
- ProjectLookup: file-to-module resolution and facet markers

InMemoryProject is a plain implementation of the module-side protocols, used
by the MCP server (where the caller describes the module in tool arguments)
and by the tests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ModuleLibraryLookup(Protocol):
    """Library and classpath access for a module."""

    def library_names(self, module: Any) -> Iterable[str | None]:
        """Names of library-only dependency entries (no module or SDK entries)."""
        ...

    def classpath_roots(self, module: Any) -> Iterable[str]:
        """Runtime class roots (jars or class directories) of the module."""
        ...


@runtime_checkable
class ContentRootLookup(Protocol):
    """Content root access for a module."""

    def content_roots(self, module: Any) -> Sequence[str]:
        ...

    def module_dir_path(self, module: Any) -> str | None:
        ...


@runtime_checkable
class PropertyLookup(Protocol):
    """Read-only configuration properties."""

    def get_property(self, key: str, default: str) -> str:
        ...

    def get_property_as_int(self, key: str, default: int) -> int:
        ...


@runtime_checkable
class ProjectLookup(ModuleLibraryLookup, Protocol):
    """Project-level view: which module owns a file, and its facets."""

    def module_for_file(self, file: str | PurePath) -> Any | None:
        ...

    def has_facet(self, module: Any, facet_type_id: str) -> bool:
        ...

    def modules(self) -> Iterable[Any]:
        ...

    def module_uri(self, module: Any) -> str | None:
        """File URI of the module, or None when it has no location."""
        ...


@dataclass
class StaticModule:
    """A module described by plain values."""

    name: str
    libraries: list[str | None] = field(default_factory=list)
    classpath: list[str] = field(default_factory=list)
    content_roots: list[str] = field(default_factory=list)
    module_dir: str | None = None
    facets: set[str] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "libraries": list(self.libraries),
            "classpath": list(self.classpath),
            "contentRoots": list(self.content_roots),
            "moduleDir": self.module_dir,
            "facets": sorted(self.facets),
        }


class InMemoryProject:
    """Project made of StaticModule instances.

    Implements ModuleLibraryLookup, ContentRootLookup and ProjectLookup.
    """

    def __init__(self, modules: Iterable[StaticModule] | None = None):
        self._modules: list[StaticModule] = list(modules or [])

    def add(self, module: StaticModule) -> None:
        """Add a module."""
        self._modules.append(module)

    # ModuleLibraryLookup

    def library_names(self, module: StaticModule) -> Iterable[str | None]:
        return module.libraries

    def classpath_roots(self, module: StaticModule) -> Iterable[str]:
        return module.classpath

    # ContentRootLookup

    def content_roots(self, module: StaticModule) -> Sequence[str]:
        return list(module.content_roots)

    def module_dir_path(self, module: StaticModule) -> str | None:
        return module.module_dir

    # ProjectLookup

    def modules(self) -> Iterable[StaticModule]:
        return list(self._modules)

    def has_facet(self, module: StaticModule, facet_type_id: str) -> bool:
        return facet_type_id in module.facets

    def module_uri(self, module: StaticModule) -> str | None:
        """File URI of the module directory (or its first content root)."""
        base = module.module_dir or (module.content_roots[0] if module.content_roots else None)
        if base is None:
            return None
        return Path(base).absolute().as_uri()

    def module_for_file(self, file: str | PurePath) -> StaticModule | None:
        """Module whose deepest content root (or module dir) contains the file."""
        file_path = PurePath(file)
        best: StaticModule | None = None
        best_depth = -1
        for module in self._modules:
            candidates = list(module.content_roots)
            if module.module_dir:
                candidates.append(module.module_dir)
            for root in candidates:
                root_path = PurePath(root)
                if file_path == root_path or root_path in file_path.parents:
                    depth = len(root_path.parts)
                    if depth > best_depth:
                        best, best_depth = module, depth
        if best is None:
            logger.debug(f"No module owns {file_path}")
        return best
