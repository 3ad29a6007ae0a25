"""
Template renderer for generated code.

Wraps a sandboxed Jinja2 environment whose only callables are the
naming functions from TemplateFunctions.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jinja2
from jinja2.sandbox import ImmutableSandboxedEnvironment, SecurityError

from ..template_functions import TemplateFunctions
from .errors import TemplateExecutionError, TemplateParseError


class TemplateRenderer:
    """Renders template strings against a read-only context."""

    def __init__(self, functions: TemplateFunctions, template_dir: Path | None = None):
        self.functions = functions
        # The loader only serves {% import %} / {% include %} of shared macro files
        loader = jinja2.FileSystemLoader(str(template_dir)) if template_dir is not None else None
        self.jinja_env = ImmutableSandboxedEnvironment(
            loader=loader,
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        # Naming functions are usable both as filters and as plain calls
        for name, function in functions.registry().items():
            self.jinja_env.filters[name] = function
            self.jinja_env.globals[name] = function

    def render(self, template_source: str, context: Mapping[str, Any]) -> str:
        """Render a template string with the given context.

        Args:
            template_source: Template content as string
            context: Variables to pass to the template

        Returns:
            Rendered content

        Raises:
            TemplateParseError: If the template syntax is malformed
            TemplateExecutionError: If rendering fails
        """
        try:
            template = self.jinja_env.from_string(template_source)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateParseError(f"parse: line {e.lineno}: {e.message}") from e

        try:
            return template.render(**context)
        except SecurityError as e:
            raise TemplateExecutionError(f"execute: forbidden operation: {e}") from e
        except jinja2.TemplateError as e:
            raise TemplateExecutionError(f"execute: {e}") from e
        except (TypeError, ValueError, AttributeError) as e:
            raise TemplateExecutionError(f"execute: {type(e).__name__}: {e}") from e
