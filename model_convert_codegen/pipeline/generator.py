"""
Convert code generator.

Drives generation of the fixed set of convert modules: each template is
read, rendered against the entity model, formatted, rewritten so that user
overrides win, and written to the output package.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .. import __version__
from ..cli_utils import reconstruct_command_line
from ..config import GeneratorConfig, PackageConfig, PluginConfig
from ..customization import get_user_defined_functions
from ..naming import NamingEngine
from ..structs import EntityModel, Enum, Interface, Model
from ..template_functions import TemplateFunctions
from .errors import GenerationError, TemplateReadError
from .formatters import DEFAULT_KNOWN_IMPORTS, CodeFormatter, ImportSpec
from .renderer import TemplateRenderer
from .rewriter import OverrideRewriter
from .writer import AtomicWriter

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "template_files"

FILES_TO_GENERATE = (
    "generated_convert.py",
    "generated_convert_batch.py",
    "generated_convert_input.py",
    "generated_filter.py",
    "generated_preload.py",
    "generated_filter_parser.py",
    "generated_sort.py",
)

# Import aliases used when the config leaves a package name empty
DEFAULT_FRONTEND_PACKAGE = "fm"
DEFAULT_BACKEND_PACKAGE = "dm"


@dataclass(frozen=True)
class Import:
    alias: str
    import_path: str


@dataclass(frozen=True)
class ConvertTemplateData:
    """Everything a convert template can see, exposed as top-level variables."""

    backend: PackageConfig
    frontend: PackageConfig
    plugin_config: PluginConfig
    package_name: str
    models: tuple[Model, ...]
    enums: tuple[Enum, ...]
    interfaces: tuple[Interface, ...]
    scalars: tuple[str, ...]
    generation_comment: str
    root_import_path: str = ""

    @property
    def imports(self) -> list[Import]:
        """Package imports of generated modules, frontend first."""
        return [
            Import(self.frontend.package_name, self.frontend.import_path(self.root_import_path)),
            Import(self.backend.package_name, self.backend.import_path(self.root_import_path)),
        ]

    def template_vars(self) -> dict[str, Any]:
        return {
            "backend": self.backend,
            "frontend": self.frontend,
            "plugin_config": self.plugin_config,
            "package_name": self.package_name,
            "models": self.models,
            "enums": self.enums,
            "interfaces": self.interfaces,
            "scalars": self.scalars,
            "imports": self.imports,
            "generation_comment": self.generation_comment,
        }


@dataclass(frozen=True)
class FileResult:
    """Outcome of generating one file."""

    file_name: str
    path: Path
    error: GenerationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stage(self) -> str | None:
        """Stage that failed, None on success."""
        return self.error.stage if self.error is not None else None


@dataclass(frozen=True)
class GenerationReport:
    results: tuple[FileResult, ...] = ()
    skipped: bool = False

    @property
    def written(self) -> list[Path]:
        return [r.path for r in self.results if r.ok]

    @property
    def failed(self) -> list[FileResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


def generation_comment() -> str:
    """Header comment identifying the command that generated a file."""
    try:
        from .. import model_convert_codegen as cli  # noqa

        command_line = reconstruct_command_line(cli.model_convert_codegen)
    except (ImportError, AttributeError):
        command_line = "model_convert_codegen"
    return f"Code generated by model_convert_codegen v{__version__} : {command_line}, DO NOT EDIT."


class ConvertGenerator:
    """Generates the convert modules of one output package.

    Example:
        >>> generator = ConvertGenerator(entity_model, config)
        >>> report = generator.generate()
        >>> report.ok
        True
    """

    def __init__(
        self,
        entity_model: EntityModel,
        config: GeneratorConfig,
        functions: TemplateFunctions | None = None,
    ):
        self.entity_model = entity_model
        self.config = config
        self.frontend = _with_default_name(config.frontend, DEFAULT_FRONTEND_PACKAGE)
        self.backend = _with_default_name(config.backend, DEFAULT_BACKEND_PACKAGE)

        self.functions = functions or TemplateFunctions.from_engine(NamingEngine(config.acronyms))
        self.renderer = TemplateRenderer(self.functions, template_dir=TEMPLATE_DIR)
        self.formatter = CodeFormatter(
            config.formatter,
            known_imports=self._known_imports(),
            local_packages=[
                self.frontend.import_path(config.root_import_path),
                self.backend.import_path(config.root_import_path),
                config.output.import_path(config.root_import_path),
            ],
        )
        self.writer = AtomicWriter(atomic=config.writer.atomic_write)

    @property
    def output_dir(self) -> Path:
        return Path(self.config.output.directory or ".")

    def _known_imports(self) -> dict[str, ImportSpec]:
        known = dict(DEFAULT_KNOWN_IMPORTS)
        for package in (self.frontend, self.backend):
            import_path = package.import_path(self.config.root_import_path)
            if import_path:
                known[package.package_name] = ImportSpec(import_path, alias=package.package_name)
        return known

    def build_template_data(self, comment: str | None = None) -> ConvertTemplateData:
        return ConvertTemplateData(
            backend=self.backend,
            frontend=self.frontend,
            plugin_config=self.config.plugin,
            package_name=self.config.output.package_name or self.output_dir.resolve().name,
            models=self.entity_model.models,
            enums=self.entity_model.enums,
            interfaces=self.entity_model.interfaces,
            scalars=self.entity_model.scalars,
            generation_comment=generation_comment() if comment is None else comment,
            root_import_path=self.config.root_import_path,
        )

    def generate(self) -> GenerationReport:
        """Generate every file of FILES_TO_GENERATE.

        A file that fails is logged and reported; the others are still generated.
        """
        output_dir = self.output_dir
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("could not create output directory %s: %s", output_dir, e)

        if self.config.plugin.database_driver is None:
            logger.warning("no database driver configured, generated SQL uses generic syntax")

        if not self.entity_model.models:
            logger.warning("no models found, skipping convert generation")
            return GenerationReport(skipped=True)

        user_defined_functions = MappingProxyType(get_user_defined_functions(output_dir, FILES_TO_GENERATE))
        data = self.build_template_data()

        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                results = list(
                    pool.map(
                        lambda file_name: self.generate_file(data, file_name, user_defined_functions),
                        FILES_TO_GENERATE,
                    )
                )
        else:
            results = [self.generate_file(data, f, user_defined_functions) for f in FILES_TO_GENERATE]

        report = GenerationReport(results=tuple(results))
        logger.info("generated %d of %d files in %s", len(report.written), len(results), output_dir)
        return report

    def generate_file(
        self,
        data: ConvertTemplateData,
        file_name: str,
        user_defined_functions: Mapping[str, str] = MappingProxyType({}),
    ) -> FileResult:
        """Render, format, rewrite and write one generated file.

        user_defined_functions maps each user function name to the module of
        the output package that defines it.
        """
        path = self.output_dir / file_name
        try:
            template_source = self._read_template(file_name)
            content = self.renderer.render(template_source, data.template_vars())
            content = self.formatter.format(content)
            content = OverrideRewriter(user_defined_functions, self.config.override_prefix).rewrite(content)
            self.writer.write(path, content, validate=self.config.writer.validate_before_write)
        except GenerationError as e:
            logger.error("%s: %s failed: %s", file_name, e.stage, e)
            return FileResult(file_name, path, e)

        logger.debug("wrote %s", path)
        return FileResult(file_name, path)

    @staticmethod
    def _read_template(file_name: str) -> str:
        template_path = TEMPLATE_DIR / f"{file_name}.jinja2"
        try:
            return template_path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateReadError(f"could not read template {template_path}: {e}") from e


def _with_default_name(package: PackageConfig, default: str) -> PackageConfig:
    return package if package.package_name else replace(package, package_name=default)
