"""
Rendering Context

Responsibilities:
- Loads theme descriptors (layout, typography and color tokens as YAML data)
- Formats field values shared by every theme (date ranges, degrees, locations)
- Renders a resume to a print-ready HTML5 document through one section template per section
- Renders the same section set as markdown for previews

Owns: Theme registry, template registry, HTML/markdown output
Never: Mutates resume data or decides which sections have content
"""

from cvgen.contexts.rendering.engine import (
    RenderedDocument,
    ResumeRenderer,
    render_resume,
    render_to_file,
)
from cvgen.contexts.rendering.exceptions import (
    TemplateRenderError,
    ThemeConfigError,
    UnknownThemeError,
)
from cvgen.contexts.rendering.formatting import (
    format_date,
    format_date_range,
    format_degree,
    format_location,
    join_names,
    safe_url,
)
from cvgen.contexts.rendering.markdown_formatter import render_resume_markdown
from cvgen.contexts.rendering.registries import TemplateRegistry
from cvgen.contexts.rendering.themes import (
    ThemeDescriptor,
    ThemeInfo,
    ThemeRegistry,
    get_default_theme_id,
)
