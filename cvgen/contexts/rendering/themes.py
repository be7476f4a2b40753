"""
Theme Descriptors

Themes are layout data, not code. Each theme is a YAML descriptor in
rendering/themes/ merged over _defaults.yaml (later keys override earlier ones):

    layout.columns / layout.sidebar_sections   region assignment
    header.style                               plain | band | centered
    typography.*                               font stack, month style, heading case
    colors.*                                   style tokens for the stylesheet
    keyword_separator, section_titles          text tokens

Example:
    >>> registry = ThemeRegistry()
    >>> registry.resolve("modern").sidebar_sections
    (<SectionId.SKILLS: 'skills'>, ...)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from cvgen.contexts.profile.exceptions import UnknownSectionError
from cvgen.contexts.profile.sections import SectionId, parse_section_id
from cvgen.contexts.rendering.exceptions import ThemeConfigError, UnknownThemeError
from cvgen.contexts.rendering.formatting import MONTH_STYLES
from cvgen.contexts.rendering.logger import _log_debug, _log_warning

load_dotenv()
THEMES_PATH = Path(os.getenv("CVGEN_THEMES_PATH") or Path(__file__).parent / "themes")

DEFAULTS_FILENAME = "_defaults.yaml"
DEFAULT_THEME_ID = "professional"

HEADER_STYLES = ("plain", "band", "centered")
HEADING_CASES = ("normal", "upper")


@dataclass(frozen=True)
class ThemeInfo:
    """Theme metadata shown in the template selector."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class ThemeDescriptor:
    """
    Resolved layout descriptor for one theme.

    Attributes:
        id: Theme identifier (matches the CV template_id)
        columns: 1 for single column, 2 for main + sidebar
        sidebar_sections: Sections placed in the sidebar when columns == 2
        header_style: "plain", "band" (accent-colored) or "centered"
        font_family: CSS font stack
        month_style: "short" or "long" month names in dates
        heading_case: "normal" or "upper" section headings
        colors: Color tokens (accent, text, muted, rule, header_background, header_text)
        keyword_separator: Separator for keyword lists
        section_titles: Heading text per section
    """

    id: str
    name: str
    description: str
    columns: int = 1
    sidebar_sections: Tuple[SectionId, ...] = ()
    header_style: str = "plain"
    font_family: str = "sans-serif"
    base_size: str = "10.5pt"
    month_style: str = "short"
    heading_case: str = "normal"
    colors: Dict[str, str] = field(default_factory=dict)
    keyword_separator: str = ", "
    section_titles: Dict[SectionId, str] = field(default_factory=dict)
    order: int = 100

    @property
    def info(self) -> ThemeInfo:
        return ThemeInfo(self.id, self.name, self.description)

    def section_title(self, section_id: SectionId) -> str:
        """Heading text for a section (falls back to the capitalized id)."""
        return self.section_titles.get(section_id, section_id.value.capitalize())

    def region_for(self, section_id: SectionId) -> str:
        """Region a section renders into: "sidebar" or "main"."""
        if self.columns == 2 and section_id in self.sidebar_sections:
            return "sidebar"
        return "main"


def _descriptor_from_config(config: Dict[str, Any], config_path: Path) -> ThemeDescriptor:
    """Validate a merged config dict and build the descriptor."""
    try:
        theme_id = config["id"]
        layout = config["layout"]
        typography = config["typography"]
        header = config["header"]
    except KeyError as e:
        raise ThemeConfigError(f"Missing required key {e}", config_path) from e

    columns = layout.get("columns", 1)
    if columns not in (1, 2):
        raise ThemeConfigError(f"layout.columns must be 1 or 2, got {columns}", config_path)

    if header.get("style") not in HEADER_STYLES:
        raise ThemeConfigError(
            f"header.style must be one of {HEADER_STYLES}, got {header.get('style')!r}", config_path
        )
    if typography.get("month_style") not in MONTH_STYLES:
        raise ThemeConfigError(
            f"typography.month_style must be one of {tuple(MONTH_STYLES)}, "
            f"got {typography.get('month_style')!r}",
            config_path,
        )
    if typography.get("heading_case") not in HEADING_CASES:
        raise ThemeConfigError(
            f"typography.heading_case must be one of {HEADING_CASES}, "
            f"got {typography.get('heading_case')!r}",
            config_path,
        )

    try:
        sidebar = tuple(parse_section_id(s) for s in layout.get("sidebar_sections") or [])
        titles = {
            parse_section_id(key): str(value)
            for key, value in (config.get("section_titles") or {}).items()
        }
    except UnknownSectionError as e:
        raise ThemeConfigError(str(e), config_path) from e

    if SectionId.BASICS in sidebar:
        raise ThemeConfigError("basics renders in the header and cannot be in the sidebar", config_path)

    return ThemeDescriptor(
        id=str(theme_id),
        name=str(config.get("name", theme_id)),
        description=str(config.get("description", "")),
        columns=columns,
        sidebar_sections=sidebar,
        header_style=header["style"],
        font_family=str(typography.get("font_family", "sans-serif")),
        base_size=str(typography.get("base_size", "10.5pt")),
        month_style=typography["month_style"],
        heading_case=typography["heading_case"],
        colors={str(k): str(v) for k, v in (config.get("colors") or {}).items()},
        keyword_separator=str(config.get("keyword_separator", ", ")),
        section_titles=titles,
        order=int(config.get("order", 100)),
    )


def load_theme_descriptor(config_path: Path, defaults_path: Optional[Path] = None) -> ThemeDescriptor:
    """
    Load a theme descriptor YAML merged over the shared defaults.

    Args:
        config_path: Path to the theme YAML
        defaults_path: Path to the defaults YAML (default: _defaults.yaml beside config_path)

    Returns:
        ThemeDescriptor

    Raises:
        ThemeConfigError: If the YAML cannot be read or fails validation
    """
    if defaults_path is None:
        defaults_path = config_path.parent / DEFAULTS_FILENAME

    try:
        layers = [OmegaConf.load(defaults_path)] if defaults_path.exists() else []
        layers.append(OmegaConf.load(config_path))
        merged = OmegaConf.to_container(OmegaConf.merge(*layers), resolve=True)
    except (OSError, OmegaConfBaseException) as e:
        raise ThemeConfigError(f"Could not load theme descriptor: {e}", config_path) from e

    return _descriptor_from_config(merged, config_path)


class ThemeRegistry:
    """
    Registry for loading and caching theme descriptors.

    Descriptors are read once from themes_path on first use.
    """

    def __init__(self, themes_path: Path = None, default_theme_id: str = DEFAULT_THEME_ID):
        """
        Initialize the theme registry.

        Args:
            themes_path: Directory containing theme YAML files. Defaults to
                         CVGEN_THEMES_PATH from environment, else the packaged themes
            default_theme_id: Theme used when resolve() gets an unknown id
        """
        self.themes_path = Path(themes_path) if themes_path is not None else THEMES_PATH
        self.default_theme_id = default_theme_id
        self._cache: Optional[Dict[str, ThemeDescriptor]] = None

    def _load(self) -> Dict[str, ThemeDescriptor]:
        if self._cache is not None:
            return self._cache

        if not self.themes_path.is_dir():
            raise ThemeConfigError(f"Themes directory not found: {self.themes_path}")

        descriptors = []
        for config_path in sorted(self.themes_path.glob("*.yaml")):
            if config_path.name == DEFAULTS_FILENAME:
                continue
            descriptors.append(load_theme_descriptor(config_path))

        themes = {}
        for descriptor in sorted(descriptors, key=lambda d: (d.order, d.id)):
            if descriptor.id in themes:
                raise ThemeConfigError(f"Duplicate theme id '{descriptor.id}'", self.themes_path)
            themes[descriptor.id] = descriptor

        if self.default_theme_id not in themes:
            raise ThemeConfigError(
                f"Default theme '{self.default_theme_id}' is not defined", self.themes_path
            )

        _log_debug(f"Loaded {len(themes)} theme(s) from {self.themes_path}: {list(themes)}")
        self._cache = themes
        return themes

    def list_themes(self) -> List[ThemeInfo]:
        """Registered themes in display order."""
        return [descriptor.info for descriptor in self._load().values()]

    def theme_ids(self) -> List[str]:
        return list(self._load())

    def get(self, theme_id: str) -> ThemeDescriptor:
        """
        Get a theme by id.

        Raises:
            UnknownThemeError: If theme_id is not registered
        """
        themes = self._load()
        if theme_id not in themes:
            raise UnknownThemeError(theme_id, list(themes))
        return themes[theme_id]

    def resolve(self, theme_id: Optional[str]) -> ThemeDescriptor:
        """
        Get a theme by id, falling back to the default theme.

        CVs store their template id as free text, so an unknown or empty id
        renders with the default theme instead of failing.
        """
        themes = self._load()
        if theme_id in themes:
            return themes[theme_id]
        if theme_id:
            _log_warning(f"Unknown theme '{theme_id}', using '{self.default_theme_id}'")
        return themes[self.default_theme_id]

    def clear_cache(self):
        """Clear the descriptor cache."""
        self._cache = None


def get_default_theme_id() -> str:
    return DEFAULT_THEME_ID
