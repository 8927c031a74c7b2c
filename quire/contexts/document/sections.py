"""
Section definitions and section-order editing.

A section order is a tuple of SectionDefinition values. Every edit (drag/drop,
move up/down, hide) returns a new tuple; nothing is mutated in place, so the
layout pipeline can always be re-run from the current value.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Sequence, Tuple

from quire.contexts.document.exceptions import UnknownSectionError


class SectionKind(str, Enum):
    """How a section breaks into layout units."""

    # One block (e.g., the skills table)
    FIXED = "fixed"
    # Title plus a list of entries (e.g., jobs)
    LIST = "list"
    # Items placed individually, each with its own identity
    ITEMS = "items"


@dataclass(frozen=True)
class SectionDefinition:
    """
    One logical resume section.

    Attributes:
        id: Stable identifier, also the key into ResumeData
        label: Heading shown on the page
        kind: How the section is split into groups
        hidden: Explicitly hidden by the user (skipped by the collector)
    """

    id: str
    label: str
    kind: SectionKind = SectionKind.LIST
    hidden: bool = False


SectionOrder = Tuple[SectionDefinition, ...]

DEFAULT_SECTIONS: SectionOrder = (
    SectionDefinition("work_experience", "Work Experience", SectionKind.LIST),
    SectionDefinition("education", "Education", SectionKind.LIST),
    SectionDefinition("projects", "Projects", SectionKind.LIST),
    SectionDefinition("awards", "Awards", SectionKind.LIST),
    SectionDefinition("publications", "Publications", SectionKind.LIST),
    SectionDefinition("skills", "Skills", SectionKind.FIXED),
    SectionDefinition("additional", "Additional", SectionKind.ITEMS),
)


def section_ids(order: Sequence[SectionDefinition]) -> list:
    return [section.id for section in order]


def _index_of(order: Sequence[SectionDefinition], section_id: str) -> int:
    for i, section in enumerate(order):
        if section.id == section_id:
            return i
    raise UnknownSectionError(section_id, section_ids(order))


def get_section(order: Sequence[SectionDefinition], section_id: str) -> SectionDefinition:
    return order[_index_of(order, section_id)]


def move_section(
    order: Sequence[SectionDefinition], section_id: str, new_index: int
) -> SectionOrder:
    """
    Move a section to a new position (drag/drop).

    Args:
        order: Current section order
        section_id: Section to move
        new_index: Target position; clamped into range

    Returns:
        New section order

    Raises:
        UnknownSectionError: If section_id is not in order
    """
    index = _index_of(order, section_id)
    remaining = list(order)
    section = remaining.pop(index)
    new_index = max(0, min(new_index, len(remaining)))
    remaining.insert(new_index, section)
    return tuple(remaining)


def move_up(order: Sequence[SectionDefinition], section_id: str) -> SectionOrder:
    return move_section(order, section_id, _index_of(order, section_id) - 1)


def move_down(order: Sequence[SectionDefinition], section_id: str) -> SectionOrder:
    return move_section(order, section_id, _index_of(order, section_id) + 1)


def reorder(order: Sequence[SectionDefinition], ids: Iterable[str]) -> SectionOrder:
    """
    Apply a full ordering (e.g., the result of a drag/drop list).

    Sections named in ids come first in that order; sections not named keep
    their relative order after them.

    Raises:
        UnknownSectionError: If ids names a section not in order
    """
    by_id = {section.id: section for section in order}
    ordered = []
    for section_id in ids:
        if section_id not in by_id:
            raise UnknownSectionError(section_id, section_ids(order))
        if by_id[section_id] not in ordered:
            ordered.append(by_id[section_id])
    ordered.extend(section for section in order if section not in ordered)
    return tuple(ordered)


def set_hidden(
    order: Sequence[SectionDefinition], section_id: str, hidden: bool = True
) -> SectionOrder:
    """Return a new order with one section's hidden flag set."""
    index = _index_of(order, section_id)
    updated = list(order)
    updated[index] = replace(updated[index], hidden=hidden)
    return tuple(updated)
