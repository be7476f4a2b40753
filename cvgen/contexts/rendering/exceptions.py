"""Custom exceptions for the rendering context with template references."""

from pathlib import Path
from typing import List, Optional


class UnknownThemeError(ValueError):
    """
    Exception raised when a theme id is not registered.

    Attributes:
        theme_id: The requested theme id
        available: Registered theme ids
    """

    def __init__(self, theme_id: str, available: List[str]):
        self.theme_id = theme_id
        self.available = available
        super().__init__(f"Theme '{theme_id}' not found. Available themes: {available}")


class ThemeConfigError(ValueError):
    """
    Exception raised when a theme descriptor YAML is invalid.

    Attributes:
        message: Error description
        config_path: Path to the offending descriptor
    """

    def __init__(self, message: str, config_path: Optional[Path] = None):
        self.message = message
        self.config_path = config_path
        if config_path:
            message = f"{message}\nDescriptor: {config_path}"
        super().__init__(message)


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        theme_id: Theme in use when rendering failed
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        theme_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.theme_id = theme_id
        self.original_error = original_error

        parts = [message]

        if template_name:
            parts.append(f"\nTemplate: {template_name}")
        if theme_id:
            parts.append(f"Theme: {theme_id}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
