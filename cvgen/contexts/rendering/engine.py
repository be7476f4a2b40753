"""
Resume Renderer

Renders a JSONResume into a complete HTML5 document for a theme.

There is a single renderer for every theme. A ThemeDescriptor only decides
region assignment, header style, typography and color tokens; which sections
appear is decided by section_has_content(), so every theme emits the same
section set for the same resume.
"""

import time
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from markupsafe import Markup

from cvgen import __version__
from cvgen.contexts.profile.json_resume import Basics, JSONResume
from cvgen.contexts.profile.sections import (
    RESUME_SECTIONS,
    SectionId,
    section_has_content,
)
from cvgen.contexts.profile.visibility import filter_hidden_sections
from cvgen.contexts.rendering.formatting import (
    format_date,
    format_date_range,
    format_degree,
    format_location,
    join_names,
    safe_url,
)
from cvgen.contexts.rendering.logger import log_render_result, log_render_start
from cvgen.contexts.rendering.registries import TemplateRegistry
from cvgen.contexts.rendering.themes import DEFAULT_THEME_ID, ThemeDescriptor, ThemeRegistry

NAME_PLACEHOLDER = "Your Name"
DOCUMENT_TEMPLATE = "document.html.jinja"


@dataclass
class RenderedDocument:
    """
    Result of rendering a resume.

    Attributes:
        theme_id: Theme actually used (after fallback to the default)
        html: Complete HTML5 document
        sections: Sections emitted, in document order (basics excluded)
    """

    theme_id: str
    html: str
    sections: List[SectionId] = field(default_factory=list)


@dataclass
class HeaderLink:
    kind: str
    text: str
    href: Optional[str] = None


@dataclass
class HeaderView:
    """Display values for the document header."""

    name: str
    has_content: bool
    label: str = ""
    summary: str = ""
    contacts: List[HeaderLink] = field(default_factory=list)
    profiles: List[HeaderLink] = field(default_factory=list)


def build_header(basics: Optional[Basics], has_content: bool) -> HeaderView:
    """
    Collect the header values of a resume, dropping every empty field.

    The header is always rendered; an empty name shows a placeholder.
    """
    if basics is None:
        return HeaderView(name=NAME_PLACEHOLDER, has_content=False)

    contacts = []
    if basics.email:
        contacts.append(HeaderLink("email", basics.email, f"mailto:{basics.email}"))
    if basics.phone:
        contacts.append(HeaderLink("phone", basics.phone, f"tel:{basics.phone.replace(' ', '')}"))
    if basics.url:
        contacts.append(HeaderLink("url", basics.url, safe_url(basics.url)))
    location = format_location(basics.location)
    if location:
        contacts.append(HeaderLink("location", location))

    profiles = []
    for profile in basics.profiles:
        text = join_names([profile.network, profile.username], ": ") or (profile.url or "")
        if text:
            profiles.append(HeaderLink("profile", text, safe_url(profile.url)))

    return HeaderView(
        name=(basics.name or "").strip() or NAME_PLACEHOLDER,
        has_content=has_content,
        label=basics.label or "",
        summary=basics.summary or "",
        contacts=contacts,
        profiles=profiles,
    )


class ResumeRenderer:
    """Renders resumes to HTML through the shared section templates."""

    def __init__(
        self,
        theme_registry: ThemeRegistry = None,
        template_registry: TemplateRegistry = None,
    ):
        self.theme_registry = theme_registry or ThemeRegistry()
        self.template_registry = template_registry or TemplateRegistry()

    def _helpers(self, theme: ThemeDescriptor) -> Dict[str, object]:
        """Formatting helpers bound to the theme's tokens."""
        return {
            "date_range": partial(format_date_range, month_style=theme.month_style),
            "format_date": partial(format_date, month_style=theme.month_style),
            "keywords": partial(join_names, separator=theme.keyword_separator),
            "join_names": join_names,
            "format_location": format_location,
            "format_degree": format_degree,
            "safe_url": safe_url,
        }

    def render_section(self, resume: JSONResume, section_id: SectionId, theme: ThemeDescriptor) -> Markup:
        """
        Render one list section with its shared template.

        Args:
            resume: Resume to read entries from
            section_id: Section to render (must not be basics)
            theme: Resolved theme descriptor

        Returns:
            Rendered HTML fragment
        """
        html = self.template_registry.render(
            self.template_registry.section_template_name(section_id),
            theme_id=theme.id,
            section_id=section_id.value,
            title=theme.section_title(section_id),
            entries=getattr(resume, section_id.value),
            theme=theme,
            **self._helpers(theme),
        )
        return Markup(html)

    def render(
        self,
        resume: JSONResume,
        theme_id: str = DEFAULT_THEME_ID,
        hidden_sections: Optional[Iterable[SectionId]] = None,
    ) -> RenderedDocument:
        """
        Render a resume as a complete HTML document.

        Args:
            resume: Resume to render (not modified)
            theme_id: Theme id; unknown ids fall back to the default theme
            hidden_sections: Sections to leave out of the document

        Returns:
            RenderedDocument

        Raises:
            TemplateRenderError: If a packaged template is broken
        """
        start_time = time.perf_counter()
        theme = self.theme_registry.resolve(theme_id)
        basics_name = resume.basics.name if resume.basics else ""
        log_render_start(theme.id, basics_name)

        if hidden_sections:
            resume = filter_hidden_sections(resume, hidden_sections)

        regions = {"main": [], "sidebar": []}
        emitted = []
        for info in RESUME_SECTIONS:
            if info.id is SectionId.BASICS or not section_has_content(resume, info.id):
                continue
            regions[theme.region_for(info.id)].append(self.render_section(resume, info.id, theme))
            emitted.append(info.id)

        header = build_header(resume.basics, section_has_content(resume, SectionId.BASICS))
        html = self.template_registry.render(
            DOCUMENT_TEMPLATE,
            theme_id=theme.id,
            theme=theme,
            header=header,
            regions=regions,
            version=__version__,
        )

        document = RenderedDocument(theme_id=theme.id, html=html, sections=emitted)
        log_render_result(document, time.perf_counter() - start_time)
        return document


_default_renderer: Optional[ResumeRenderer] = None


def get_default_renderer() -> ResumeRenderer:
    """Shared renderer so templates and descriptors are loaded once per process."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = ResumeRenderer()
    return _default_renderer


def render_resume(
    resume: JSONResume,
    theme_id: str = DEFAULT_THEME_ID,
    hidden_sections: Optional[Iterable[SectionId]] = None,
    renderer: ResumeRenderer = None,
) -> RenderedDocument:
    """
    Render a resume to HTML with the given theme.

    Example:
        >>> document = render_resume(resume, "modern")
        >>> document.sections
        [<SectionId.WORK: 'work'>, <SectionId.SKILLS: 'skills'>]
    """
    renderer = renderer or get_default_renderer()
    return renderer.render(resume, theme_id, hidden_sections)


def render_to_file(
    resume: JSONResume,
    output_path: Path,
    theme_id: str = DEFAULT_THEME_ID,
    hidden_sections: Optional[Iterable[SectionId]] = None,
    renderer: ResumeRenderer = None,
) -> RenderedDocument:
    """
    Render a resume and write the HTML document to output_path.

    Parent directories are created as needed.
    """
    document = render_resume(resume, theme_id, hidden_sections, renderer)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document.html, encoding="utf-8")
    return document
