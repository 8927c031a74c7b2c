"""
Block collection for pagination.

Turns a normalized resume plus a section order into a flat, ordered sequence of
groups: atomic layout units that are never split across a page boundary.

Keep-together rules:
- A list section's title block always travels with its first entry
- Every other entry of a list section is its own group
- A fixed section (e.g., the skills table) is a single group
- Independently addressable items each form a group with their own identity
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Sequence, Tuple

from quire.contexts.document.resume_document import ResumeData
from quire.contexts.document.sections import SectionDefinition, SectionKind
from quire.contexts.layout.defaults import HEADER_SECTION_ID


class BlockKind(str, Enum):
    HEADER = "header"
    SECTION_TITLE = "section_title"
    ENTRY = "entry"
    FIXED = "fixed"
    ITEM = "item"


@dataclass(frozen=True)
class ContentBlock:
    """
    Smallest measurable unit of resume content.

    Attributes:
        key: Stable identifier for this block within one pass (e.g., "education:1")
        kind: What the block renders
        section_id: Identity the block is attributed to for pinning and UI feedback
        position: Ordinal position in the collected sequence
        label: Section heading text (titles and fixed sections)
        entity: The underlying resume entity (entry, header record, skill rows)
    """

    key: str
    kind: BlockKind
    section_id: str
    position: int
    label: str = ""
    entity: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Group:
    """One or more consecutive blocks that must stay on the same page."""

    blocks: Tuple[ContentBlock, ...]

    def __post_init__(self):
        if not self.blocks:
            raise ValueError("Group must contain at least one block")
        section_ids = {block.section_id for block in self.blocks}
        if len(section_ids) != 1:
            raise ValueError(f"Group blocks span several sections: {sorted(section_ids)}")

    @property
    def section_id(self) -> str:
        return self.blocks[0].section_id

    @property
    def key(self) -> str:
        """Key of the first block; unique within one collected sequence."""
        return self.blocks[0].key

    @property
    def is_header(self) -> bool:
        return self.blocks[0].kind == BlockKind.HEADER


class _BlockFactory:
    """Hands out blocks with increasing ordinal positions."""

    def __init__(self):
        self._position = 0

    def make(self, key: str, kind: BlockKind, section_id: str, label: str = "", entity: Any = None) -> ContentBlock:
        block = ContentBlock(
            key=key,
            kind=kind,
            section_id=section_id,
            position=self._position,
            label=label,
            entity=entity,
        )
        self._position += 1
        return block


def collect_groups(document: ResumeData, section_order: Sequence[SectionDefinition]) -> List[Group]:
    """
    Collect the ordered group sequence for one layout pass.

    Args:
        document: Normalized resume
        section_order: Sections in rendering order

    Returns:
        Groups in page order. The header group (if any) comes first. Empty and
        hidden sections contribute nothing; a list section never emits a title
        without an entry.
    """
    factory = _BlockFactory()
    groups: List[Group] = []

    if document.has_header:
        header = factory.make(HEADER_SECTION_ID, BlockKind.HEADER, HEADER_SECTION_ID, entity=document)
        groups.append(Group((header,)))

    for section in section_order:
        if section.hidden:
            continue

        entries = document.section_entries(section.id)
        if not entries:
            continue

        if section.kind == SectionKind.FIXED:
            block = factory.make(section.id, BlockKind.FIXED, section.id, section.label, entries)
            groups.append(Group((block,)))

        elif section.kind == SectionKind.ITEMS:
            for item in entries:
                identity = f"{section.id}:{item.id}"
                block = factory.make(identity, BlockKind.ITEM, identity, section.label, item)
                groups.append(Group((block,)))

        else:
            title = factory.make(f"{section.id}:title", BlockKind.SECTION_TITLE, section.id, section.label)
            first = factory.make(f"{section.id}:0", BlockKind.ENTRY, section.id, section.label, entries[0])
            groups.append(Group((title, first)))
            for i, entry in enumerate(entries[1:], start=1):
                block = factory.make(f"{section.id}:{i}", BlockKind.ENTRY, section.id, section.label, entry)
                groups.append(Group((block,)))

    return groups


def iter_blocks(groups: Sequence[Group]) -> List[ContentBlock]:
    """Flatten groups into their blocks, in order."""
    return [block for group in groups for block in group.blocks]
