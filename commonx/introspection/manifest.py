"""Package manifest accessors.

A manifest accessor answers two questions about a package: which packages
it depends on, and which modules it owns. Both answers come back as a
``(found, items)`` pair; unknown packages report ``(False, ())``.
"""

from __future__ import annotations

import logging
import re
import threading
from importlib import metadata
from typing import Hashable, Mapping, Protocol, Sequence

from commonx.models import PackageManifest

logger = logging.getLogger(__name__)

_NAME_SEPARATORS = re.compile(r"[-_.]+")
_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")
_EXTRA_MARKER = re.compile(r"\bextra\s*==")


class ManifestAccessor(Protocol):
    def get_dependencies(self, pkg: Hashable) -> tuple[bool, Sequence[Hashable]]: ...

    def get_modules(self, pkg: Hashable) -> tuple[bool, Sequence[Hashable]]: ...


def canonical_name(name: str) -> str:
    """Normalise a distribution name (PEP 503): lowercase, runs of ``-_.`` to ``-``."""
    return _NAME_SEPARATORS.sub("-", name).lower()


def requirement_name(requirement: str) -> str | None:
    """Canonical distribution name of a ``Requires-Dist`` entry.

    Returns None for requirements that only apply to an optional extra, and
    for entries that carry no parsable name.
    """
    spec, _, marker = requirement.partition(";")
    if marker and _EXTRA_MARKER.search(marker):
        return None
    m = _REQUIREMENT_NAME.match(spec)
    if not m:
        return None
    return canonical_name(m.group(1))


class InMemoryManifest:
    """Manifest accessor over a fixed ``package -> PackageManifest`` mapping."""

    def __init__(self, packages: Mapping[Hashable, PackageManifest]):
        self._packages = dict(packages)

    def get_dependencies(self, pkg: Hashable) -> tuple[bool, Sequence[Hashable]]:
        manifest = self._packages.get(pkg)
        if manifest is None:
            return False, ()
        return True, manifest.dependencies

    def get_modules(self, pkg: Hashable) -> tuple[bool, Sequence[Hashable]]:
        manifest = self._packages.get(pkg)
        if manifest is None:
            return False, ()
        return True, manifest.modules


class MetadataManifest:
    """Manifest accessor over the installed distributions (``importlib.metadata``).

    Each distribution is resolved once by :meth:`ensure_loaded` and cached, so
    repeated queries are idempotent. The cache is guarded by a lock and may be
    shared between threads.
    """

    def __init__(self, path: list[str] | None = None):
        self._path = path
        self._cache: dict[str, PackageManifest | None] = {}
        self._lock = threading.Lock()

    def ensure_loaded(self, pkg: Hashable) -> PackageManifest | None:
        """Resolve and cache the manifest of *pkg*; None if it is not installed.

        ``OSError`` raised while reading metadata files propagates.
        """
        key = canonical_name(str(pkg))
        with self._lock:
            if key in self._cache:
                return self._cache[key]

        manifest = self._read(key)

        with self._lock:
            return self._cache.setdefault(key, manifest)

    def get_dependencies(self, pkg: Hashable) -> tuple[bool, Sequence[str]]:
        manifest = self.ensure_loaded(pkg)
        if manifest is None:
            return False, ()
        return True, manifest.dependencies

    def get_modules(self, pkg: Hashable) -> tuple[bool, Sequence[str]]:
        manifest = self.ensure_loaded(pkg)
        if manifest is None:
            return False, ()
        return True, manifest.modules

    def _find(self, name: str) -> metadata.Distribution | None:
        if self._path is None:
            try:
                return metadata.distribution(name)
            except metadata.PackageNotFoundError:
                return None
        for dist in metadata.distributions(path=self._path):
            dist_name = dist.metadata["Name"]
            if dist_name and canonical_name(dist_name) == name:
                return dist
        return None

    def _read(self, name: str) -> PackageManifest | None:
        dist = self._find(name)
        if dist is None:
            logger.debug("distribution %s is not installed", name)
            return None

        dependencies: list[str] = []
        for requirement in dist.requires or []:
            dep = requirement_name(requirement)
            if dep and dep not in dependencies:
                dependencies.append(dep)

        return PackageManifest(
            dependencies=tuple(dependencies),
            modules=tuple(_owned_modules(dist)),
        )


def _owned_modules(dist: metadata.Distribution) -> list[str]:
    files = dist.files
    if files is None:
        top_level = dist.read_text("top_level.txt") or ""
        return [line.strip() for line in top_level.splitlines() if line.strip()]

    modules: set[str] = set()
    for file in files:
        parts = file.parts
        if not parts or file.suffix != ".py" or parts[0] == "..":
            continue
        if any(part.endswith((".dist-info", ".egg-info", ".data")) for part in parts):
            continue
        names = list(parts[:-1])
        stem = parts[-1][: -len(".py")]
        if stem != "__init__":
            names.append(stem)
        if not names or not all(n.isidentifier() for n in names):
            logger.debug("skipping non-module file %s of %s", file, dist.metadata["Name"])
            continue
        modules.add(".".join(names))
    return sorted(modules)
