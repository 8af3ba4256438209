"""Application introspection: which packages and modules make up the running app."""

from __future__ import annotations

from typing import Hashable, Iterable

from commonx.introspection.context import (
    BuildContext,
    LoadedDistributions,
    ProjectResolver,
    detect_build_env,
    main_application,
    main_project,
)
from commonx.introspection.manifest import (
    InMemoryManifest,
    ManifestAccessor,
    MetadataManifest,
    canonical_name,
)
from commonx.introspection.walker import DependencyGraphWalker, _as_seeds
from commonx.models import IntrospectionConfig


def default_walker(
    config: IntrospectionConfig | None = None,
    context: BuildContext | None = None,
) -> DependencyGraphWalker:
    """Walker over the installed distributions of this interpreter."""
    config = config or IntrospectionConfig()
    return DependencyGraphWalker(
        MetadataManifest(),
        exclude=config.exclude,
        registry=LoadedDistributions(),
        context=context,
    )


def applications(apps: Hashable | Iterable[Hashable] | None = None) -> list[Hashable]:
    """Installed packages of the main application and its dependencies.

    Without *apps*, starts from the current project, or from every loaded
    distribution when there is none.
    """
    walker = default_walker()
    if apps is None:
        return walker.applications()
    return walker.closure([canonical_name(a) for a in _names(apps)])


def modules(apps: Hashable | Iterable[Hashable] | None = None) -> list[Hashable]:
    """Modules owned by :func:`applications`."""
    walker = default_walker()
    if apps is None:
        return walker.modules()
    return walker.modules_of([canonical_name(a) for a in _names(apps)])


def _names(apps: Hashable | Iterable[Hashable]) -> list[str]:
    return [str(a) for a in _as_seeds(apps)]


__all__ = [
    "BuildContext",
    "DependencyGraphWalker",
    "InMemoryManifest",
    "LoadedDistributions",
    "ManifestAccessor",
    "MetadataManifest",
    "ProjectResolver",
    "applications",
    "default_walker",
    "detect_build_env",
    "main_application",
    "main_project",
    "modules",
]
