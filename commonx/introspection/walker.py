"""Dependency graph walker: transitive package closure and owned modules.

Breadth-first walk over the depends-on relation, queried lazily from a
manifest accessor. Each package is expanded at most once, so cycles and
self-loops terminate. Packages in the exclusion set are never queued as
discovered dependencies, though an excluded package passed explicitly as a
seed is still visited.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from typing import Hashable

from commonx.introspection.context import BuildContext, PackageRegistry
from commonx.introspection.manifest import ManifestAccessor
from commonx.models import DEFAULT_EXCLUDE
from commonx.symbols import Symbol

logger = logging.getLogger(__name__)


def _as_seeds(seeds: Hashable | Iterable[Hashable]) -> list[Hashable]:
    # A bare name or symbol is one package, not a sequence of characters.
    if isinstance(seeds, (str, Symbol)) or not isinstance(seeds, Iterable):
        return [seeds]
    return list(seeds)


class DependencyGraphWalker:
    """Discover packages and modules reachable from a seed set.

    Args:
        manifest: Answers dependency and module queries per package.
        exclude: System packages never queued as discovered dependencies.
        registry: Active-package registry, used when no current package is known.
        context: Build context for the no-seed entry points.
    """

    def __init__(
        self,
        manifest: ManifestAccessor,
        exclude: Iterable[Hashable] = DEFAULT_EXCLUDE,
        registry: PackageRegistry | None = None,
        context: BuildContext | None = None,
    ):
        self.manifest = manifest
        self.exclude = frozenset(exclude)
        self.registry = registry
        self.context = context

    # ── Explicit seeds ──────────────────────────────────────

    def closure(self, seeds: Hashable | Iterable[Hashable]) -> list[Hashable]:
        """All packages reachable from *seeds*, seeds included.

        Returned in first-discovery order: seeds in the order given, then
        breadth-first. Unknown packages are kept as leaves.
        """
        visited: dict[Hashable, None] = {}
        self._walk(_as_seeds(seeds), visited, with_modules=False)
        return list(visited)

    def modules_of(self, seeds: Hashable | Iterable[Hashable]) -> list[Hashable]:
        """Modules owned by every package reachable from *seeds*.

        Grouped per package in visitation order, each group in the order the
        manifest reports it. Modules are not de-duplicated across packages.
        """
        visited: dict[Hashable, list[Hashable]] = {}
        self._walk(_as_seeds(seeds), visited, with_modules=True)
        return [module for owned in visited.values() for module in owned]

    # ── Seeds from the build context ────────────────────────

    def seeds(self, context: BuildContext | None = None) -> list[Hashable]:
        """Seed set for the no-seed entry points.

        The current package when the context names one, otherwise every
        active package minus the exclusion set.
        """
        context = context or self.context or BuildContext.detect()
        if context.current_package is not None:
            return [context.current_package]
        if self.registry is None:
            logger.debug("no current package and no registry; nothing to seed")
            return []
        return [
            pkg for pkg in self.registry.list_active_packages()
            if pkg not in self.exclude
        ]

    def applications(self, context: BuildContext | None = None) -> list[Hashable]:
        return self.closure(self.seeds(context))

    def modules(self, context: BuildContext | None = None) -> list[Hashable]:
        return self.modules_of(self.seeds(context))

    # ── Traversal ───────────────────────────────────────────

    def _walk(self, seeds: list[Hashable], visited: dict, with_modules: bool) -> None:
        queue = deque(seeds)
        while queue:
            pkg = queue.popleft()
            if pkg in visited:
                continue

            found, dependencies = self.manifest.get_dependencies(pkg)
            if not found:
                logger.debug("unknown package %s, kept as a leaf", pkg)
                visited[pkg] = [] if with_modules else None
                continue

            if with_modules:
                _, owned = self.manifest.get_modules(pkg)
                visited[pkg] = list(owned)
            else:
                visited[pkg] = None

            queue.extend(dep for dep in dependencies if dep not in self.exclude)

        logger.debug("walked %d package(s) from %d seed(s)", len(visited), len(seeds))
