"""
Measurement oracles for layout.

The paginator never computes font metrics itself; it asks a MeasurementOracle
for the rendered height of each block at the current text scale. Content must be
committed to the oracle before heights are read, so every pass runs:

    oracle.commit(blocks, text_scale)   # write content to the measurement surface
    oracle.measure(block, text_scale)   # read back real heights

TextMetricsOracle is the headless implementation: it estimates heights from text
length, font size and line height at the page's content width.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from typing_extensions import Protocol

from quire.contexts.document.resume_document import (
    AdditionalItem,
    AwardEntry,
    EducationEntry,
    ProjectEntry,
    PublicationEntry,
    ResumeData,
    WorkEntry,
)
from quire.contexts.layout.blocks import BlockKind, ContentBlock, Group
from quire.contexts.layout.config_resolver import PageGeometry, Typography
from quire.contexts.layout.exceptions import MeasurementNotCommittedError

# Bullet indentation in px at 100% scale
BULLET_INDENT_PX = 20.0

# Scales closer than this are treated as the same commit
SCALE_TOLERANCE = 1e-9


class MeasurementOracle(Protocol):
    """Rendered-height source for the paginator."""

    def commit(self, blocks: Sequence[ContentBlock], text_scale: float) -> None:
        """Write the pass's content to the measurement surface at text_scale."""
        ...

    def measure(self, block: ContentBlock, text_scale: float) -> float:
        """Height of a committed block, in page pixels."""
        ...


def measure_groups(
    groups: Sequence[Group], oracle: MeasurementOracle, text_scale: float
) -> Dict[str, float]:
    """
    Measure every group's total height.

    A group's height spans from the top of its first block to the bottom of its
    last block, i.e. the sum of its stacked block heights.

    Returns:
        Mapping of group key to height
    """
    return {
        group.key: sum(oracle.measure(block, text_scale) for block in group.blocks)
        for group in groups
    }


@dataclass(frozen=True)
class TextRun:
    """A run of text set in one typographic role."""

    text: str
    role: str
    indent: float = 0.0


def _join(*parts: str, sep: str = "  ") -> str:
    return sep.join(part for part in parts if part)


def header_contact_line(document: ResumeData) -> str:
    """Contact line as rendered under the name."""
    contact = document.contact
    parts = [
        contact.phone,
        contact.location,
        "LinkedIn" if contact.linkedin else "",
        "GitHub" if contact.github else "",
        contact.email,
    ]
    return " | ".join(part for part in parts if part)


def _entry_runs(entity) -> List[TextRun]:
    if isinstance(entity, WorkEntry):
        runs = [
            TextRun(_join(entity.company, entity.location), "entry_header"),
            TextRun(_join(entity.title, entity.dates), "entry_header"),
        ]
        if entity.tagline:
            runs.append(TextRun(entity.tagline, "body", BULLET_INDENT_PX))
        runs.extend(TextRun(line, "body", BULLET_INDENT_PX) for line in entity.responsibilities)
        return runs
    if isinstance(entity, EducationEntry):
        return [
            TextRun(_join(entity.institution, entity.location, entity.graduation_date), "entry_header"),
            TextRun(entity.details, "body"),
        ]
    if isinstance(entity, ProjectEntry):
        runs = [TextRun(_join(entity.name, entity.dates), "entry_header"), TextRun(entity.url, "body")]
        runs.extend(TextRun(line, "body", BULLET_INDENT_PX) for line in entity.bullets)
        return runs
    if isinstance(entity, AwardEntry):
        return [
            TextRun(_join(entity.title, entity.date), "entry_header"),
            TextRun(entity.issuer, "body"),
            TextRun(entity.details, "body"),
        ]
    if isinstance(entity, PublicationEntry):
        return [
            TextRun(entity.title, "entry_header"),
            TextRun(entity.authors, "body"),
            TextRun(_join(entity.venue, entity.date), "body"),
        ]
    return [TextRun(str(entity), "body")]


def block_text_runs(block: ContentBlock) -> List[TextRun]:
    """
    Break a block into the text runs it renders.

    Args:
        block: Content block

    Returns:
        Runs in rendering order; empty runs are dropped
    """
    if block.kind == BlockKind.HEADER:
        runs = [TextRun(block.entity.name, "name"), TextRun(header_contact_line(block.entity), "contact")]
    elif block.kind == BlockKind.SECTION_TITLE:
        runs = [TextRun(block.label, "section_title")]
    elif block.kind == BlockKind.FIXED:
        runs = [TextRun(block.label, "section_title")]
        runs.extend(TextRun(f"{label}: {value}", "body") for label, value in block.entity)
    elif block.kind == BlockKind.ITEM:
        item: AdditionalItem = block.entity
        runs = [TextRun(item.title, "section_title")]
        runs.extend(TextRun(line, "body") for line in item.body)
    else:
        runs = _entry_runs(block.entity)
    return [run for run in runs if run.text]


class TextMetricsOracle:
    """
    Deterministic height estimator.

    Each run wraps at the content width using an average glyph width; a block's
    height is the sum of its wrapped lines times the line height, plus the gap
    after the block. Everything scales uniformly with the text scale.
    """

    def __init__(self, geometry: PageGeometry = None, typography: Typography = None):
        self.geometry = geometry or PageGeometry()
        self.typography = typography or Typography()
        self._heights: Dict[str, float] = {}
        self._committed_scale: Optional[float] = None

    def _font_px(self, role: str) -> float:
        return getattr(self.typography, f"{role}_px")

    def _gap_after(self, block: ContentBlock) -> float:
        if block.kind in (BlockKind.HEADER, BlockKind.FIXED, BlockKind.ITEM):
            return self.typography.section_gap_px
        return self.typography.block_gap_px

    def run_height(self, run: TextRun, text_scale: float) -> float:
        font_px = self._font_px(run.role) * text_scale
        width = self.geometry.content_width - run.indent * text_scale
        chars_per_line = max(1, int(width / (self.typography.avg_char_width_em * font_px)))
        lines = max(1, math.ceil(len(run.text) / chars_per_line))
        return lines * font_px * self.typography.line_height

    def estimate(self, block: ContentBlock, text_scale: float) -> float:
        """Estimated height of a block at text_scale, without touching the commit state."""
        runs = block_text_runs(block)
        if not runs:
            return 0.0
        text_height = sum(self.run_height(run, text_scale) for run in runs)
        return text_height + self._gap_after(block) * text_scale

    def commit(self, blocks: Sequence[ContentBlock], text_scale: float) -> None:
        self._heights = {block.key: self.estimate(block, text_scale) for block in blocks}
        self._committed_scale = text_scale

    def measure(self, block: ContentBlock, text_scale: float) -> float:
        if self._committed_scale is None or abs(self._committed_scale - text_scale) > SCALE_TOLERANCE:
            raise MeasurementNotCommittedError(block.key, text_scale, self._committed_scale)
        if block.key not in self._heights:
            raise MeasurementNotCommittedError(block.key, text_scale, self._committed_scale)
        return self._heights[block.key]
