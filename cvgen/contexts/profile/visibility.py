"""
Section visibility for CV rendering.

Produces a filtered copy of a resume with user-hidden sections emptied. The
filtered copy exists only for rendering and is never persisted.
"""

import copy
from typing import FrozenSet, Iterable, Set

from cvgen.contexts.profile.json_resume import JSONResume
from cvgen.contexts.profile.logger import _log_debug
from cvgen.contexts.profile.sections import SectionId, parse_section_id


def filter_hidden_sections(resume: JSONResume, hidden: Iterable[SectionId]) -> JSONResume:
    """
    Return a copy of the resume with hidden list sections replaced by empty lists.

    basics cannot be hidden: the document header is always rendered, so a
    hidden basics entry is ignored.

    Args:
        resume: Source resume (not modified)
        hidden: Sections to suppress

    Returns:
        New JSONResume sharing no mutable state with the input
    """
    filtered = copy.deepcopy(resume)
    for section_id in hidden:
        section_id = parse_section_id(section_id)
        if section_id is SectionId.BASICS:
            _log_debug("Ignoring request to hide basics; the header is always rendered")
            continue
        setattr(filtered, section_id.value, [])
    return filtered


class SectionVisibility:
    """
    Per-CV set of hidden sections, toggled from the section list.

    Example:
        visibility = SectionVisibility()
        visibility.toggle(SectionId.REFERENCES)
        render_resume(visibility.apply(cv.cv_data), cv.template_id)
    """

    def __init__(self, hidden: Iterable[SectionId] = ()):
        self._hidden: Set[SectionId] = {parse_section_id(s) for s in hidden}

    @property
    def hidden(self) -> FrozenSet[SectionId]:
        return frozenset(self._hidden)

    def is_hidden(self, section_id: SectionId) -> bool:
        return parse_section_id(section_id) in self._hidden

    def toggle(self, section_id: SectionId) -> bool:
        """
        Flip a section between shown and hidden.

        Returns:
            True if the section is hidden after the toggle
        """
        section_id = parse_section_id(section_id)
        if section_id in self._hidden:
            self._hidden.remove(section_id)
            return False
        self._hidden.add(section_id)
        return True

    def apply(self, resume: JSONResume) -> JSONResume:
        """Filtered copy of the resume for rendering."""
        return filter_hidden_sections(resume, self._hidden)
