"""Build context: which project is running, in which environment, with what loaded.

The walker's no-seed entry points take a :class:`BuildContext` instead of
probing the process themselves, so tests can hand in a fake one.
"""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from dataclasses import dataclass, field
from importlib import metadata
from pathlib import Path
from typing import Any, Hashable, Protocol, Sequence

from commonx.introspection.manifest import canonical_name
from commonx.models import BuildEnv, IntrospectionConfig

logger = logging.getLogger(__name__)


class PackageRegistry(Protocol):
    def list_active_packages(self) -> Sequence[Hashable]: ...


class LoadedDistributions:
    """Registry of distributions with at least one module currently imported."""

    def __init__(self, modules: dict[str, Any] | None = None):
        self._modules = modules

    def list_active_packages(self) -> list[str]:
        modules = sys.modules if self._modules is None else self._modules
        owners = metadata.packages_distributions()
        active: dict[str, None] = {}
        for name in list(modules):
            top = name.partition(".")[0]
            for dist_name in owners.get(top, ()):
                active.setdefault(canonical_name(dist_name), None)
        return list(active)


class ProjectResolver:
    """Resolve the current project from its ``pyproject.toml``.

    The start directory is probed first, then the configured parent
    directories (a dependency checked out inside another project finds the
    outer project this way).
    """

    def __init__(self, config: IntrospectionConfig | None = None, start: Path | None = None):
        self.config = config or IntrospectionConfig()
        self.start = start

    def find_project_file(self) -> Path | None:
        start = self.start or Path.cwd()
        for rel in self.config.search_dirs:
            candidate = (start / rel / self.config.project_file).resolve()
            if candidate.is_file():
                return candidate
        return None

    def project(self) -> dict[str, Any]:
        """The ``[project]`` table of the current project, or ``{}``."""
        path = self.find_project_file()
        if path is None:
            return {}
        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as e:
            logger.debug("ignoring unparsable %s: %s", path, e)
            return {}
        project = data.get("project", {})
        return project if isinstance(project, dict) else {}

    def current_package(self) -> str | None:
        return _project_name(self.project())


def _project_name(project: dict[str, Any]) -> str | None:
    name = project.get("name")
    if isinstance(name, str) and name.strip():
        return canonical_name(name.strip())
    return None


def detect_build_env(
    config: IntrospectionConfig | None = None,
    resolver: ProjectResolver | None = None,
    environ: dict[str, str] | None = None,
    has_project: bool | None = None,
) -> BuildEnv:
    """Work out the environment the process runs in.

    Order: the explicit environment variable, a running pytest session, a
    resolvable project (development), and production otherwise. Pass
    *has_project* when the project has already been resolved.
    """
    config = config or IntrospectionConfig()
    environ = os.environ if environ is None else environ

    explicit = environ.get(config.env_var)
    if explicit:
        return BuildEnv.parse(explicit)
    if "PYTEST_CURRENT_TEST" in environ or "pytest" in sys.modules:
        return BuildEnv.TEST
    if has_project is None:
        resolver = resolver or ProjectResolver(config)
        has_project = resolver.current_package() is not None
    if has_project:
        return BuildEnv.DEVELOPMENT
    return BuildEnv.PRODUCTION


@dataclass(frozen=True)
class BuildContext:
    """Snapshot of the current project and build environment."""
    current_package: Hashable | None = None
    project: dict[str, Any] = field(default_factory=dict)
    env: BuildEnv = BuildEnv.PRODUCTION

    @classmethod
    def detect(
        cls,
        config: IntrospectionConfig | None = None,
        start: Path | None = None,
    ) -> "BuildContext":
        config = config or IntrospectionConfig()
        resolver = ProjectResolver(config, start=start)
        project = resolver.project()
        package = _project_name(project)
        context = cls(
            current_package=package,
            project=project,
            env=detect_build_env(config, has_project=package is not None),
        )
        logger.debug(
            "detected build context: package=%s env=%s",
            context.current_package, context.env.value,
        )
        return context


def main_application(context: BuildContext) -> Hashable | None:
    """The package of the main application, also when called from a dependency."""
    return context.current_package


def main_project(context: BuildContext) -> dict[str, Any]:
    """The ``[project]`` metadata of the main application."""
    return dict(context.project)
