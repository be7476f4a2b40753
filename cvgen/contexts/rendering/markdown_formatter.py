"""
Markdown Formatting

Renders a JSONResume as markdown text for terminal preview and plain-text export.

Uses the same section set, section titles, month style and keyword separator
as the HTML renderer for the chosen theme. Empty fields are omitted the same way.
"""

from typing import Callable, Dict, Iterable, List, Optional

from cvgen.contexts.profile.json_resume import JSONResume
from cvgen.contexts.profile.sections import RESUME_SECTIONS, SectionId, section_has_content
from cvgen.contexts.profile.visibility import filter_hidden_sections
from cvgen.contexts.rendering.engine import NAME_PLACEHOLDER, build_header, get_default_renderer
from cvgen.contexts.rendering.formatting import (
    format_date,
    format_date_range,
    format_degree,
    join_names,
    safe_url,
)
from cvgen.contexts.rendering.themes import DEFAULT_THEME_ID, ThemeDescriptor, ThemeRegistry


def _bullets(items: Iterable[str]) -> List[str]:
    return [f"- {item}" for item in items if item]


def format_work_markdown(job, theme: ThemeDescriptor) -> List[str]:
    """
    Format single work entry as markdown.

    Position is formatted as ### (section header added separately by caller).
    """
    parts = []
    if job.position:
        parts.append(f"### {job.position}")
    company = join_names([job.name, job.location], " | ")
    if company:
        parts.append(f"**{company}**")
    dates = format_date_range(job.start_date, job.end_date, theme.month_style)
    if dates:
        parts.append(f"*{dates}*")
    if job.summary:
        parts.append("")
        parts.append(job.summary)
    highlights = _bullets(job.highlights)
    if highlights:
        parts.append("")
        parts.extend(highlights)
    return parts


def format_volunteer_markdown(vol, theme: ThemeDescriptor) -> List[str]:
    parts = []
    if vol.position:
        parts.append(f"### {vol.position}")
    if vol.organization:
        parts.append(f"**{vol.organization}**")
    dates = format_date_range(vol.start_date, vol.end_date, theme.month_style)
    if dates:
        parts.append(f"*{dates}*")
    if vol.summary:
        parts.append("")
        parts.append(vol.summary)
    highlights = _bullets(vol.highlights)
    if highlights:
        parts.append("")
        parts.extend(highlights)
    return parts


def format_education_markdown(edu, theme: ThemeDescriptor) -> List[str]:
    parts = []
    degree = format_degree(edu.study_type, edu.area)
    if degree:
        parts.append(f"### {degree}")
    if edu.institution:
        parts.append(f"**{edu.institution}**")
    dates = format_date_range(edu.start_date, edu.end_date, theme.month_style)
    if dates:
        parts.append(f"*{dates}*")
    if edu.score:
        parts.append(f"GPA: {edu.score}")
    courses = join_names(edu.courses, theme.keyword_separator)
    if courses:
        parts.append(f"Courses: {courses}")
    return parts


def format_skill_markdown(skill, theme: ThemeDescriptor) -> List[str]:
    name = join_names([skill.name, f"({skill.level})" if skill.level else None], " ")
    keywords = join_names(skill.keywords, theme.keyword_separator)
    if name and keywords:
        return [f"- **{name}**: {keywords}"]
    if name:
        return [f"- **{name}**"]
    return [f"- {keywords}"] if keywords else []


def format_project_markdown(project, theme: ThemeDescriptor) -> List[str]:
    parts = []
    if project.name:
        title = f"[{project.name}]({project.url})" if safe_url(project.url) else project.name
        parts.append(f"### {title}")
    subtitle = join_names([project.entity, join_names(project.roles)], " | ")
    if subtitle:
        parts.append(f"**{subtitle}**")
    dates = format_date_range(project.start_date, project.end_date, theme.month_style)
    if dates:
        parts.append(f"*{dates}*")
    if project.description:
        parts.append("")
        parts.append(project.description)
    highlights = _bullets(project.highlights)
    if highlights:
        parts.append("")
        parts.extend(highlights)
    technologies = join_names(project.keywords, theme.keyword_separator)
    if technologies:
        parts.append("")
        parts.append(f"Technologies: {technologies}")
    return parts


def format_certificate_markdown(cert, theme: ThemeDescriptor) -> List[str]:
    name = f"[{cert.name}]({cert.url})" if cert.name and safe_url(cert.url) else cert.name
    line = join_names([name, cert.issuer, format_date(cert.date, theme.month_style)], " | ")
    return [f"- {line}"] if line else []


def format_award_markdown(award, theme: ThemeDescriptor) -> List[str]:
    line = join_names(
        [
            f"**{award.title}**" if award.title else None,
            award.awarder,
            format_date(award.date, theme.month_style),
        ],
        " | ",
    )
    parts = [f"- {line}"] if line else []
    if award.summary:
        parts.append(f"  {award.summary}")
    return parts


def format_publication_markdown(publication, theme: ThemeDescriptor) -> List[str]:
    parts = []
    if publication.name:
        title = f"[{publication.name}]({publication.url})" if safe_url(publication.url) else publication.name
        parts.append(f"### {title}")
    published = join_names(
        [publication.publisher, format_date(publication.release_date, theme.month_style)], " | "
    )
    if published:
        parts.append(f"*{published}*")
    if publication.summary:
        parts.append("")
        parts.append(publication.summary)
    return parts


def format_language_markdown(lang, theme: ThemeDescriptor) -> List[str]:
    line = join_names([lang.language, lang.fluency], ": ")
    return [f"- {line}"] if line else []


def format_interest_markdown(interest, theme: ThemeDescriptor) -> List[str]:
    keywords = join_names(interest.keywords, theme.keyword_separator)
    if interest.name and keywords:
        return [f"- **{interest.name}**: {keywords}"]
    line = interest.name or keywords
    return [f"- {line}"] if line else []


def format_reference_markdown(ref, theme: ThemeDescriptor) -> List[str]:
    parts = []
    if ref.reference:
        parts.append(f"> {ref.reference}")
    if ref.name:
        parts.append(f"> – {ref.name}" if ref.reference else f"- {ref.name}")
    return parts


# Entries of these sections are separated by a blank line; the others are list items
BLOCK_SECTIONS = {
    SectionId.WORK,
    SectionId.VOLUNTEER,
    SectionId.EDUCATION,
    SectionId.PROJECTS,
    SectionId.PUBLICATIONS,
    SectionId.REFERENCES,
}

SECTION_FORMATTERS: Dict[SectionId, Callable] = {
    SectionId.WORK: format_work_markdown,
    SectionId.EDUCATION: format_education_markdown,
    SectionId.SKILLS: format_skill_markdown,
    SectionId.PROJECTS: format_project_markdown,
    SectionId.CERTIFICATES: format_certificate_markdown,
    SectionId.AWARDS: format_award_markdown,
    SectionId.PUBLICATIONS: format_publication_markdown,
    SectionId.LANGUAGES: format_language_markdown,
    SectionId.VOLUNTEER: format_volunteer_markdown,
    SectionId.INTERESTS: format_interest_markdown,
    SectionId.REFERENCES: format_reference_markdown,
}


def format_header_markdown(resume: JSONResume) -> List[str]:
    header = build_header(resume.basics, section_has_content(resume, SectionId.BASICS))
    parts = [f"# {header.name or NAME_PLACEHOLDER}"]
    if header.label:
        parts.append(f"**{header.label}**")
    contacts = " | ".join(contact.text for contact in header.contacts)
    if contacts:
        parts.append("")
        parts.append(contacts)
    profiles = " | ".join(
        f"[{profile.text}]({profile.href})" if profile.href else profile.text
        for profile in header.profiles
    )
    if profiles:
        parts.append(profiles)
    if header.summary:
        parts.append("")
        parts.append("## Summary")
        parts.append("")
        parts.append(header.summary)
    return parts


def format_section_markdown(resume: JSONResume, section_id: SectionId, theme: ThemeDescriptor) -> str:
    """
    Format one list section as markdown, including its ## header.

    Args:
        resume: Resume to read entries from
        section_id: Section to format (must not be basics)
        theme: Theme supplying the title, month style and keyword separator

    Returns:
        Markdown text for the section
    """
    formatter = SECTION_FORMATTERS[section_id]
    blocks = [formatter(entry, theme) for entry in getattr(resume, section_id.value)]
    blocks = [block for block in blocks if block]

    parts = [f"## {theme.section_title(section_id)}", ""]
    if section_id in BLOCK_SECTIONS:
        for i, block in enumerate(blocks):
            if i:
                parts.append("")
            parts.extend(block)
    else:
        for block in blocks:
            parts.extend(block)
    return "\n".join(parts)


def render_resume_markdown(
    resume: JSONResume,
    theme_id: str = DEFAULT_THEME_ID,
    hidden_sections: Optional[Iterable[SectionId]] = None,
    theme_registry: ThemeRegistry = None,
) -> str:
    """
    Render a resume as a markdown document.

    Args:
        resume: Resume to render (not modified)
        theme_id: Theme whose titles and tokens to use; unknown ids fall back to the default
        hidden_sections: Sections to leave out
        theme_registry: Registry to resolve the theme from (default: packaged themes)

    Returns:
        Markdown text ending with a newline
    """
    theme = (theme_registry or get_default_renderer().theme_registry).resolve(theme_id)
    if hidden_sections:
        resume = filter_hidden_sections(resume, hidden_sections)

    chunks = ["\n".join(format_header_markdown(resume))]
    for info in RESUME_SECTIONS:
        if info.id is SectionId.BASICS or not section_has_content(resume, info.id):
            continue
        chunks.append(format_section_markdown(resume, info.id, theme))

    return "\n\n".join(chunks) + "\n"
