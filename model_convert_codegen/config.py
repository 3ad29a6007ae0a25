"""
Configuration for the convert code generator.

Describes the backend, frontend and output packages, the plugin options
that influence generated SQL, and the formatter and writer settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .naming import DEFAULT_ACRONYMS

# Prefix given to generated functions that user code overrides
DEFAULT_OVERRIDE_PREFIX = "original"


class DatabaseDriver(str, Enum):
    """Database dialect used by filter and sort code."""

    MYSQL = "mysql"
    POSTGRES = "postgres"


@dataclass(frozen=True)
class PackageConfig:
    """A generation target: a package name and the directory holding it.

    Attributes:
        directory: Directory of the package, relative to the project root
        package_name: Name used as import alias in generated code
    """

    directory: str = ""
    package_name: str = ""

    def import_path(self, root_import_path: str = "") -> str:
        """Dotted module path of the package ("app/models" -> "app.models")."""
        parts = [root_import_path.strip(".")] if root_import_path else []
        parts.extend(p for p in self.directory.replace("\\", "/").split("/") if p and p != ".")
        return ".".join(parts)

    @staticmethod
    def from_dict(d: dict) -> PackageConfig:
        return PackageConfig(directory=d.get("directory", ""), package_name=d.get("package_name", ""))


@dataclass(frozen=True)
class PluginConfig:
    """Plugin level options passed to every template."""

    database_driver: DatabaseDriver | None = None

    @property
    def is_postgres(self) -> bool:
        return self.database_driver == DatabaseDriver.POSTGRES


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting is enabled
    enabled: bool = True

    # Formatter backend ("black" or "ruff")
    backend: str = "black"

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    # Whether to respect magic trailing commas
    magic_trailing_comma: bool = True


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        atomic_write: Whether to use atomic file writes
        validate_before_write: Whether to validate code before writing
    """

    atomic_write: bool = True
    validate_before_write: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Backend (database) models package
    backend: PackageConfig = field(default_factory=PackageConfig)

    # Frontend (API) models package
    frontend: PackageConfig = field(default_factory=PackageConfig)

    # Package the generated files are written to
    output: PackageConfig = field(default_factory=PackageConfig)

    # Plugin options
    plugin: PluginConfig = field(default_factory=PluginConfig)

    # Dotted prefix prepended to package directories in imports
    root_import_path: str = ""

    # Acronyms emitted in a fixed form, keyed by upper-case spelling
    acronyms: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ACRONYMS))

    # Prefix given to generated functions overridden by user code
    override_prefix: str = DEFAULT_OVERRIDE_PREFIX

    # Number of files generated in parallel
    workers: int = 1

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output file handling
    writer: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k in ("backend", "frontend", "output") and isinstance(v, dict):
                setattr(config, k, PackageConfig.from_dict(v))
            elif k == "plugin" and isinstance(v, dict):
                driver = v.get("database_driver")
                config.plugin = PluginConfig(database_driver=DatabaseDriver(driver) if driver else None)
            elif k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "writer" and isinstance(v, dict):
                config.writer = OutputConfig(**v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "backend": {"directory": self.backend.directory, "package_name": self.backend.package_name},
            "frontend": {"directory": self.frontend.directory, "package_name": self.frontend.package_name},
            "output": {"directory": self.output.directory, "package_name": self.output.package_name},
            "plugin": {
                "database_driver": self.plugin.database_driver.value if self.plugin.database_driver else None,
            },
            "root_import_path": self.root_import_path,
            "acronyms": dict(self.acronyms),
            "override_prefix": self.override_prefix,
            "workers": self.workers,
            "formatter": {
                "enabled": self.formatter.enabled,
                "backend": self.formatter.backend,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "string_normalization": self.formatter.string_normalization,
                "magic_trailing_comma": self.formatter.magic_trailing_comma,
            },
            "writer": {
                "atomic_write": self.writer.atomic_write,
                "validate_before_write": self.writer.validate_before_write,
            },
        }
