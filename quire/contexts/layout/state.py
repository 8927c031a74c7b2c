"""
Layout session state.

LayoutState is an immutable value. Every user action is a function from the
current state to a new one; the orchestration layer applies the transition and
then re-runs the pipeline. Nothing else writes to it.

Mode machine:
- AUTOMATIC (initial): no pins, no target page count
- MANUAL: target page count plus pins, seeded from the last computed layout so
  switching modes causes no visible jump
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional

from quire.contexts.document.sections import DEFAULT_SECTIONS, SectionOrder
from quire.contexts.layout.defaults import (
    PAGE_COUNT_MAX,
    PAGE_COUNT_MIN,
    TEXT_SCALE_DEFAULT,
    TEXT_SCALE_MAX,
    TEXT_SCALE_MIN,
    TEXT_SCALE_STEP,
)
from quire.contexts.layout.paginator import PaginationResult, clamp


class LayoutMode(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


@dataclass(frozen=True)
class LayoutState:
    """
    Everything that persists across layout passes within one editing session.

    Attributes:
        section_order: Current section order
        mode: Automatic or manual pagination
        target_page_count: Manual mode page budget (None in automatic mode)
        pin_map: Section identity -> 1-based page (manual mode only)
        text_scale_percent: Uniform text scale in percent
        last_assignment: Page assignment of the most recent pass
        last_page_count: Page count of the most recent pass
        overflowed: Whether the most recent pass overflowed its target
    """

    section_order: SectionOrder = DEFAULT_SECTIONS
    mode: LayoutMode = LayoutMode.AUTOMATIC
    target_page_count: Optional[int] = None
    pin_map: Dict[str, int] = field(default_factory=dict)
    text_scale_percent: int = TEXT_SCALE_DEFAULT
    last_assignment: Dict[str, int] = field(default_factory=dict)
    last_page_count: int = 0
    overflowed: bool = False

    @property
    def text_scale(self) -> float:
        return self.text_scale_percent / 100


def clamp_page_count(count: int) -> int:
    return clamp(int(count), PAGE_COUNT_MIN, PAGE_COUNT_MAX)


def initial_state(section_order: SectionOrder = DEFAULT_SECTIONS) -> LayoutState:
    """Fresh state for a newly loaded document."""
    return LayoutState(section_order=tuple(section_order))


def with_section_order(state: LayoutState, section_order: SectionOrder) -> LayoutState:
    return replace(state, section_order=tuple(section_order))


def enter_manual(state: LayoutState) -> LayoutState:
    """
    Switch to manual mode, freezing the current placement.

    The target page count comes from the last pass (clamped to the allowed range)
    and every section is pinned to the page it last landed on.
    """
    if state.mode == LayoutMode.MANUAL:
        return state
    return replace(
        state,
        mode=LayoutMode.MANUAL,
        target_page_count=clamp_page_count(state.last_page_count or PAGE_COUNT_MIN),
        pin_map=dict(state.last_assignment),
    )


def enter_automatic(state: LayoutState) -> LayoutState:
    """Switch to automatic mode; pins and target page count are dropped."""
    return replace(state, mode=LayoutMode.AUTOMATIC, target_page_count=None, pin_map={})


def set_mode(state: LayoutState, mode: LayoutMode) -> LayoutState:
    return enter_manual(state) if LayoutMode(mode) == LayoutMode.MANUAL else enter_automatic(state)


def set_target_page_count(state: LayoutState, count: int) -> LayoutState:
    """
    Change the manual page budget and redistribute everything.

    Pins are cleared. Called in automatic mode, this switches to manual mode
    with no pins.
    """
    return replace(
        state,
        mode=LayoutMode.MANUAL,
        target_page_count=clamp_page_count(count),
        pin_map={},
    )


def pin_section(state: LayoutState, section_id: str, page: int) -> LayoutState:
    """
    Move one section to a page without relocating the others.

    The whole last assignment is snapshotted into the pin map first, then the
    one entry is overridden. Called in automatic mode, this enters manual mode.
    """
    state = enter_manual(state)
    pins = dict(state.last_assignment)
    pins[section_id] = clamp(int(page), 1, state.target_page_count)
    return replace(state, pin_map=pins)


def set_text_scale(state: LayoutState, percent: int) -> LayoutState:
    return replace(state, text_scale_percent=clamp(int(percent), TEXT_SCALE_MIN, TEXT_SCALE_MAX))


def shrink_text(state: LayoutState) -> LayoutState:
    return set_text_scale(state, state.text_scale_percent - TEXT_SCALE_STEP)


def grow_text(state: LayoutState) -> LayoutState:
    return set_text_scale(state, state.text_scale_percent + TEXT_SCALE_STEP)


def reset_text(state: LayoutState) -> LayoutState:
    return set_text_scale(state, TEXT_SCALE_DEFAULT)


def record_result(state: LayoutState, result: PaginationResult) -> LayoutState:
    """Store the pass's assignment for UI feedback and later seeding."""
    return replace(
        state,
        last_assignment=dict(result.page_assignment),
        last_page_count=result.page_count,
        overflowed=result.overflowed,
    )
