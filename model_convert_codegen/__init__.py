"""Model Convert Code Generator

Generates the Python modules that convert between API (frontend) models
and database (backend) models, together with filter, sort and preload
helpers, from a JSON entity model.
"""

__version__ = "1.0.0"

from .config import DatabaseDriver, FormatterConfig, GeneratorConfig, OutputConfig, PackageConfig, PluginConfig
from .pipeline import ConvertGenerator, GenerationError, GenerationReport
from .structs import EntityModel

__all__ = [
    "ConvertGenerator",
    "GenerationReport",
    "GenerationError",
    "GeneratorConfig",
    "PackageConfig",
    "PluginConfig",
    "DatabaseDriver",
    "FormatterConfig",
    "OutputConfig",
    "EntityModel",
]
