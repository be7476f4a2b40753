"""
Integration tests for HTML rendering across every packaged theme.
"""

import re

import pytest

from cvgen.contexts.profile import JSONResume, SectionId, sections_with_content
from cvgen.contexts.rendering import ResumeRenderer, ThemeRegistry, render_resume, render_to_file
from cvgen.contexts.rendering.engine import NAME_PLACEHOLDER

THEMES = ["professional", "modern", "minimal", "academic"]

FULL_RESUME = {
    "basics": {"name": "Jane Doe", "email": "jane@x.com", "summary": "Builds reliable services."},
    "work": [{"name": "Acme", "position": "Engineer", "startDate": "2021-01"}],
    "volunteer": [{"organization": "Code Club", "position": "Mentor", "startDate": "2018"}],
    "education": [{"institution": "MIT", "studyType": "BSc", "area": "Physics", "score": "3.9"}],
    "awards": [{"title": "Best Paper", "awarder": "ACM", "date": "2020-05"}],
    "certificates": [{"name": "CKA", "issuer": "CNCF", "url": "https://cncf.io/cka"}],
    "publications": [{"name": "On Caches", "publisher": "ACM", "releaseDate": "2020-05"}],
    "skills": [{"name": "Python", "level": "Expert", "keywords": ["asyncio", "pytest"]}],
    "languages": [{"language": "German", "fluency": "Native"}],
    "interests": [{"name": "Climbing"}],
    "references": [{"name": "John Roe", "reference": "A great colleague."}],
    "projects": [{"name": "cvgen", "roles": ["Author"], "keywords": ["jinja2"]}],
}


def rendered_sections(html):
    return re.findall(r'data-section="(\w+)"', html)


@pytest.fixture(scope="module")
def renderer():
    return ResumeRenderer()


@pytest.mark.integration
@pytest.mark.parametrize("theme_id", THEMES)
def test_theme_emits_exactly_populated_sections(renderer, sample_resume, theme_id):
    """Test each theme renders the sections with content and no others."""
    document = renderer.render(sample_resume, theme_id)

    assert document.theme_id == theme_id
    assert document.sections == [SectionId.WORK, SectionId.SKILLS]
    assert sorted(rendered_sections(document.html)) == ["basics", "skills", "work"]


@pytest.mark.integration
def test_themes_agree_on_section_set(renderer, sample_resume):
    """Test all four themes emit the same section set as the content predicate."""
    expected = {s.value for s in sections_with_content(sample_resume)}

    for theme_id in THEMES:
        html = renderer.render(sample_resume, theme_id).html
        assert set(rendered_sections(html)) == expected, theme_id


@pytest.mark.integration
@pytest.mark.parametrize("theme_id", THEMES)
def test_every_section_renders(renderer, theme_id):
    """Test a fully populated resume renders all twelve sections in every theme."""
    document = renderer.render(JSONResume.from_dict(FULL_RESUME), theme_id)

    assert set(rendered_sections(document.html)) == {s.value for s in SectionId}
    assert len(document.sections) == 11


@pytest.mark.integration
@pytest.mark.parametrize("theme_id", THEMES)
def test_empty_sections_have_no_headings(renderer, minimal_resume, theme_id):
    """Test unpopulated sections leave no heading behind."""
    html = renderer.render(minimal_resume, theme_id).html

    assert "cv-section--skills" not in html
    assert "Education" not in html
    assert "References" not in html


@pytest.mark.integration
@pytest.mark.parametrize("theme_id", THEMES)
def test_missing_work_location_is_omitted(renderer, minimal_resume, theme_id):
    """Test a work entry without location has no separator or placeholder."""
    html = renderer.render(minimal_resume, theme_id).html

    assert '<p class="cv-entry__subtitle">Acme</p>' in html
    assert "Acme |" not in html
    assert "None" not in html


@pytest.mark.integration
def test_work_location_is_rendered_when_present(renderer, sample_resume):
    """Test location joins the company line when set."""
    html = renderer.render(sample_resume, "professional").html
    assert '<p class="cv-entry__subtitle">Globex | Remote</p>' in html


@pytest.mark.integration
def test_end_to_end_professional(minimal_resume):
    """Test the professional theme shows name, company, position and an open range."""
    html = render_resume(minimal_resume, "professional").html

    assert "Jane Doe" in html
    assert "Acme" in html
    assert "Engineer" in html
    assert "Jan 2021 – Present" in html
    assert re.search(r'class="cv-entry__dates">[^<]*Present</span>', html)


@pytest.mark.integration
def test_end_to_end_minimal(minimal_resume):
    """Test the minimal theme shows name and company."""
    html = render_resume(minimal_resume, "minimal").html

    assert "Jane Doe" in html
    assert "Acme" in html
    assert "cv--minimal" in html


@pytest.mark.integration
def test_entry_order_follows_document(renderer, sample_resume):
    """Test entries are rendered in array order, not by date."""
    sample_resume.work.reverse()
    html = renderer.render(sample_resume, "professional").html

    assert html.index("Globex") < html.index("Acme")


@pytest.mark.integration
def test_academic_uses_long_month_names(renderer, minimal_resume):
    """Test the academic theme formats months in full."""
    html = renderer.render(minimal_resume, "academic").html
    assert "January 2021 – Present" in html


@pytest.mark.integration
def test_modern_places_skills_in_sidebar(renderer, sample_resume):
    """Test the two-column theme routes sidebar sections into the aside."""
    html = renderer.render(sample_resume, "modern").html
    sidebar = html[html.index('<aside class="cv-sidebar">'):html.index("</aside>")]

    assert 'data-section="skills"' in sidebar
    assert 'data-section="work"' not in sidebar
    assert "cv--header-band" in html


@pytest.mark.integration
def test_modern_without_sidebar_content_is_single_column(renderer, minimal_resume):
    """Test no empty aside is rendered when no sidebar section has content."""
    html = renderer.render(minimal_resume, "modern").html
    assert "cv-sidebar" not in html.split("</style>")[1]


@pytest.mark.integration
def test_skill_without_keywords(renderer, sample_resume):
    """Test a skill with no keywords renders its name without an empty list."""
    html = renderer.render(sample_resume, "professional").html
    skills = html[html.index('data-section="skills"'):]
    skills = skills[:skills.index("</section>")]

    assert "Python" in skills
    assert "cv-keywords" not in skills


@pytest.mark.integration
def test_minimal_keyword_separator(renderer):
    """Test theme keyword separators are applied."""
    resume = JSONResume.from_dict(FULL_RESUME)

    assert "asyncio, pytest" in renderer.render(resume, "professional").html
    assert "asyncio · pytest" in renderer.render(resume, "minimal").html


@pytest.mark.integration
def test_header_contacts(renderer, sample_resume):
    """Test header contact links and the summary."""
    html = renderer.render(sample_resume, "professional").html

    assert '<a href="mailto:jane@x.com">jane@x.com</a>' in html
    assert 'href="tel:+15550100"' in html
    assert "Berlin, DE" in html
    assert "GitHub: janedoe" in html
    assert "Engineer focused on reliable services." in html


@pytest.mark.integration
@pytest.mark.parametrize("theme_id", THEMES)
def test_missing_name_renders_placeholder(renderer, empty_resume, theme_id):
    """Test a resume without a name still renders, with a placeholder."""
    document = renderer.render(empty_resume, theme_id)

    assert NAME_PLACEHOLDER in document.html
    assert document.sections == []
    assert rendered_sections(document.html) == []


@pytest.mark.integration
def test_resume_without_basics(renderer):
    """Test a resume with no basics object renders the placeholder header."""
    document = renderer.render(JSONResume.from_dict({"skills": [{"name": "Go"}]}), "modern")

    assert NAME_PLACEHOLDER in document.html
    assert document.sections == [SectionId.SKILLS]


@pytest.mark.integration
def test_user_text_is_escaped(renderer):
    """Test markup in resume fields is escaped."""
    resume = JSONResume.from_dict({"basics": {"name": "<script>alert(1)</script>"}})
    html = renderer.render(resume, "professional").html

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.integration
def test_hidden_sections(renderer, sample_resume):
    """Test hidden sections are left out without changing the resume."""
    document = renderer.render(sample_resume, "professional", hidden_sections=[SectionId.SKILLS])

    assert document.sections == [SectionId.WORK]
    assert 'data-section="skills"' not in document.html
    assert len(sample_resume.skills) == 1


@pytest.mark.integration
def test_unknown_theme_falls_back(renderer, sample_resume):
    """Test an unknown template id renders with the default theme."""
    document = renderer.render(sample_resume, "neon")

    assert document.theme_id == "professional"
    assert "cv--professional" in document.html


@pytest.mark.integration
def test_rendering_is_deterministic(renderer, sample_resume):
    """Test the same input renders the same document."""
    first = renderer.render(sample_resume, "academic").html
    second = ResumeRenderer(ThemeRegistry()).render(sample_resume, "academic").html

    assert first == second


@pytest.mark.integration
def test_render_to_file(tmp_path, sample_resume):
    """Test the document is written with parent directories created."""
    output = tmp_path / "out" / "jane.html"
    document = render_to_file(sample_resume, output, "modern")

    assert output.read_text(encoding="utf-8") == document.html
    assert document.html.startswith("<!DOCTYPE html>")
    assert "@page" in document.html


@pytest.mark.integration
@pytest.mark.parametrize("theme_id", THEMES)
def test_unsafe_urls_render_as_text(renderer, theme_id):
    """Test javascript: URLs never become href targets."""
    resume = JSONResume.from_dict(
        {
            "basics": {
                "name": "Jane Doe",
                "url": "javascript:alert(1)",
                "profiles": [{"network": "GitHub", "username": "janedoe", "url": "javascript:alert(2)"}],
            },
            "projects": [{"name": "cvgen", "url": "javascript:alert(3)"}],
            "certificates": [{"name": "CKA", "url": "https://cncf.io/cka"}],
        }
    )
    html = renderer.render(resume, theme_id).html

    assert 'href="javascript' not in html
    assert "javascript:alert(1)" in html
    assert "GitHub: janedoe" in html
    assert '<a href="https://cncf.io/cka">CKA</a>' in html
