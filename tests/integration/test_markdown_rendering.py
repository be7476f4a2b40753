"""
Integration tests for markdown rendering.
"""

import pytest

from cvgen.contexts.profile import JSONResume, SectionId
from cvgen.contexts.rendering import render_resume_markdown
from cvgen.contexts.rendering.engine import NAME_PLACEHOLDER


@pytest.mark.integration
def test_markdown_document(sample_resume):
    """Test header, sections and entries of the sample resume."""
    markdown = render_resume_markdown(sample_resume, "professional")

    assert markdown.startswith("# Jane Doe\n**Backend Engineer**\n")
    assert "jane@x.com | +1 555 0100 | https://jane.dev | Berlin, DE" in markdown
    assert "[GitHub: janedoe](https://github.com/janedoe)" in markdown
    assert "## Summary" in markdown
    assert "## Experience\n\n### Engineer\n**Acme**\n*Jan 2021 – Present*" in markdown
    assert "**Globex | Remote**\n*Jun 2019 – Mar 2021*" in markdown
    assert "- Cut p99 latency by 40%" in markdown
    assert "## Skills\n\n- **Python**" in markdown
    assert markdown.endswith("\n")


@pytest.mark.integration
def test_markdown_matches_html_section_set(sample_resume):
    """Test the markdown output has the same sections as the HTML renderer."""
    markdown = render_resume_markdown(sample_resume, "minimal")
    headings = [line for line in markdown.splitlines() if line.startswith("## ")]

    assert headings == ["## Summary", "## Experience", "## Skills"]


@pytest.mark.integration
def test_markdown_uses_theme_tokens():
    """Test month style and keyword separator follow the theme."""
    resume = JSONResume.from_dict(
        {
            "work": [{"name": "Acme", "startDate": "2021-01"}],
            "skills": [{"name": "Python", "keywords": ["asyncio", "pytest"]}],
        }
    )

    assert "*January 2021 – Present*" in render_resume_markdown(resume, "academic")
    assert "asyncio · pytest" in render_resume_markdown(resume, "minimal")


@pytest.mark.integration
def test_markdown_omits_empty_fields(minimal_resume):
    """Test missing fields leave no separators or empty lines of markup."""
    markdown = render_resume_markdown(minimal_resume)

    assert "**Acme**" in markdown
    assert "|" not in markdown
    assert "None" not in markdown
    assert "## Summary" not in markdown


@pytest.mark.integration
def test_markdown_hidden_sections(sample_resume):
    """Test hidden sections are left out."""
    markdown = render_resume_markdown(sample_resume, hidden_sections=[SectionId.WORK])

    assert "## Experience" not in markdown
    assert "## Skills" in markdown


@pytest.mark.integration
def test_markdown_placeholder_name(empty_resume):
    """Test an empty resume renders only the placeholder heading."""
    assert render_resume_markdown(empty_resume) == f"# {NAME_PLACEHOLDER}\n"


@pytest.mark.integration
def test_markdown_references_and_projects():
    """Test quote and link formatting."""
    resume = JSONResume.from_dict(
        {
            "references": [{"name": "John Roe", "reference": "A great colleague."}],
            "projects": [{"name": "cvgen", "url": "https://example.com/cvgen", "keywords": ["jinja2"]}],
        }
    )
    markdown = render_resume_markdown(resume)

    assert "> A great colleague.\n> – John Roe" in markdown
    assert "### [cvgen](https://example.com/cvgen)" in markdown
    assert "Technologies: jinja2" in markdown


@pytest.mark.integration
def test_markdown_unsafe_urls_are_not_linked():
    """Test javascript: URLs are left out of markdown links."""
    resume = JSONResume.from_dict(
        {
            "basics": {"profiles": [{"network": "GitHub", "username": "janedoe", "url": "javascript:x"}]},
            "projects": [{"name": "cvgen", "url": "javascript:alert(1)"}],
        }
    )
    markdown = render_resume_markdown(resume)

    assert "javascript" not in markdown
    assert "### cvgen" in markdown
    assert "GitHub: janedoe" in markdown
