"""
Rendering Registries

Centralized registry for loading and caching the Jinja2 templates that make up
a rendered document.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from cvgen.contexts.rendering.exceptions import TemplateRenderError

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("CVGEN_TEMPLATES_PATH") or Path(__file__).parent / "templates")


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for HTML generation.

    Templates are stored in rendering/templates/:
    - document.html.jinja: page skeleton (header, regions, stylesheet)
    - styles.css.jinja: stylesheet driven by theme tokens
    - sections/{section_id}.html.jinja: one template per resume section,
      shared by every theme
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Base path for templates. Defaults to
                            CVGEN_TEMPLATES_PATH from environment, else the packaged templates
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=select_autoescape(enabled_extensions=("html", "html.jinja")),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template path relative to the templates directory
                  (e.g., 'sections/work.html.jinja')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.templates_path / name}"
            ) from e

        self._cache[name] = template
        return template

    def get_section_template(self, section_id) -> Template:
        """Get the template for a resume section (accepts SectionId or str)."""
        return self.get_template(self.section_template_name(section_id))

    @staticmethod
    def section_template_name(section_id) -> str:
        value = getattr(section_id, "value", section_id)
        return f"sections/{value}.html.jinja"

    def render(self, name: str, theme_id: str = None, **context: Any) -> str:
        """
        Render a template, wrapping Jinja2 failures in TemplateRenderError.

        Args:
            name: Template name
            theme_id: Theme in use (for error reporting)
            **context: Template variables

        Returns:
            Rendered text
        """
        template = self.get_template(name)
        try:
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                "Template rendering failed", template_name=name, theme_id=theme_id, original_error=e
            ) from e

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a template name."""
        return self.templates_path / name

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a template is in the cache."""
        return name in self._cache
