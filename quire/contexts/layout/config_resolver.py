"""
Layout Preset Resolution

Resolves named page-geometry and typography presets from layout_presets.yaml.
Presets are grouped by category in the YAML and addressed by flattened name:

Examples:
    >>> geometry = resolve_page_geometry("a4")
    >>> geometry.usable_height
    1074.24

    >>> typography = resolve_typography("compact")
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from omegaconf import OmegaConf

from quire.contexts.layout.defaults import (
    DEFAULT_TYPOGRAPHY,
    HORIZONTAL_MARGIN_IN,
    PAGE_HEIGHT_IN,
    PAGE_WIDTH_IN,
    PIXELS_PER_INCH,
    VERTICAL_MARGIN_IN,
)

load_dotenv()
LAYOUT_PRESETS_PATH = Path(
    os.getenv("QUIRE_LAYOUT_PRESETS_PATH", Path(__file__).parent / "layout_presets.yaml")
)
DEFAULT_PAGE_PRESET = os.getenv("QUIRE_PAGE_PRESET", "letter")


@dataclass(frozen=True)
class PageGeometry:
    """
    Physical page size in layout pixels.

    Attributes:
        width_px: Page width
        height_px: Page height
        vertical_margin_px: Combined top+bottom margin budget
        horizontal_margin_px: Left (and right) margin
    """

    width_px: float = PAGE_WIDTH_IN * PIXELS_PER_INCH
    height_px: float = PAGE_HEIGHT_IN * PIXELS_PER_INCH
    vertical_margin_px: float = VERTICAL_MARGIN_IN * PIXELS_PER_INCH
    horizontal_margin_px: float = HORIZONTAL_MARGIN_IN * PIXELS_PER_INCH

    @property
    def usable_height(self) -> float:
        """Packing capacity per page."""
        return self.height_px - self.vertical_margin_px

    @property
    def content_width(self) -> float:
        return self.width_px - 2 * self.horizontal_margin_px

    @classmethod
    def from_inches(
        cls,
        width_in: float,
        height_in: float,
        vertical_margin_in: float = VERTICAL_MARGIN_IN,
        horizontal_margin_in: float = HORIZONTAL_MARGIN_IN,
    ) -> "PageGeometry":
        return cls(
            width_px=width_in * PIXELS_PER_INCH,
            height_px=height_in * PIXELS_PER_INCH,
            vertical_margin_px=vertical_margin_in * PIXELS_PER_INCH,
            horizontal_margin_px=horizontal_margin_in * PIXELS_PER_INCH,
        )


@dataclass(frozen=True)
class Typography:
    """Base font sizes (px at 100% scale) and spacing for height estimation."""

    name_px: float = DEFAULT_TYPOGRAPHY["name_px"]
    contact_px: float = DEFAULT_TYPOGRAPHY["contact_px"]
    section_title_px: float = DEFAULT_TYPOGRAPHY["section_title_px"]
    entry_header_px: float = DEFAULT_TYPOGRAPHY["entry_header_px"]
    body_px: float = DEFAULT_TYPOGRAPHY["body_px"]
    line_height: float = DEFAULT_TYPOGRAPHY["line_height"]
    avg_char_width_em: float = DEFAULT_TYPOGRAPHY["avg_char_width_em"]
    block_gap_px: float = DEFAULT_TYPOGRAPHY["block_gap_px"]
    section_gap_px: float = DEFAULT_TYPOGRAPHY["section_gap_px"]


def load_layout_presets(config_path: Path = None) -> Dict[str, Any]:
    """
    Load layout_presets.yaml and flatten to a single-level dict.

    Collapses nested structure: page.letter -> page_letter

    Args:
        config_path: Optional path to config file (defaults to QUIRE_LAYOUT_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to configs
        Example: {"page_letter": {...}, "typography_compact": {...}}
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def _get_preset(category: str, name: str, config_path: Path = None) -> Dict[str, Any]:
    presets = load_layout_presets(config_path)
    key = f"{category}_{name}"
    if key not in presets:
        available = [k[len(category) + 1 :] for k in presets if k.startswith(f"{category}_")]
        raise ValueError(f"{category.title()} preset '{name}' not found. Available presets: {available}")
    return presets[key]


def resolve_page_geometry(name: str = None, config_path: Path = None) -> PageGeometry:
    """
    Build PageGeometry from a named page preset.

    Args:
        name: Preset name under "page" (defaults to QUIRE_PAGE_PRESET, then "letter")
        config_path: Optional path to layout_presets.yaml

    Raises:
        ValueError: If the preset is not defined
    """
    preset = _get_preset("page", name or DEFAULT_PAGE_PRESET, config_path)
    return PageGeometry.from_inches(**preset)


def resolve_typography(name: str = "standard", config_path: Path = None) -> Typography:
    """
    Build Typography from a named typography preset.

    Keys missing from the preset keep their defaults; unknown keys are rejected.

    Raises:
        ValueError: If the preset is not defined or has unknown keys
    """
    preset = _get_preset("typography", name, config_path)
    known = {f.name for f in fields(Typography)}
    unknown = sorted(set(preset) - known)
    if unknown:
        raise ValueError(f"Typography preset '{name}' has unknown keys: {unknown}")
    return Typography(**{key: float(value) for key, value in preset.items()})
