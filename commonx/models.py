"""Data models for application introspection."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXCLUDE: frozenset[str] = frozenset({"pip", "setuptools", "wheel"})


class BuildEnv(enum.Enum):
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value: str) -> "BuildEnv":
        """Parse an environment name; accepts the short ``dev``/``prod`` forms."""
        key = value.strip().lower()
        aliases = {"dev": cls.DEVELOPMENT, "prod": cls.PRODUCTION}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(e.value for e in cls)
            raise ValueError(
                f"unknown build environment {value!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class PackageManifest:
    """Declared dependencies and owned modules of one package."""
    dependencies: tuple[str, ...] = ()
    modules: tuple[str, ...] = ()


@dataclass
class IntrospectionConfig:
    """Configuration for dependency discovery and build-context detection."""
    exclude: frozenset[str] = DEFAULT_EXCLUDE
    env_var: str = "COMMONX_ENV"
    project_file: str = "pyproject.toml"
    # Directories probed for the project file, relative to the start directory.
    search_dirs: list[Path] = field(default_factory=lambda: [
        Path("."), Path("../.."),
    ])
