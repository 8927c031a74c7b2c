"""
Layout orchestration.

run_pipeline() is one pure layout pass:

    collect_groups -> oracle.commit -> paginate (auto | manual)

LayoutSession owns the document, the LayoutState, and the collaborators. Every
action applies one state transition and then re-runs the full pipeline and the
page renderer before returning, so callers never observe a half-updated layout.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from typing_extensions import Protocol

from quire.contexts.document.exceptions import UnknownSectionError
from quire.contexts.document.resume_document import ResumeData
from quire.contexts.document import sections as section_ops
from quire.contexts.document.sections import DEFAULT_SECTIONS, SectionOrder
from quire.contexts.layout import state as transitions
from quire.contexts.layout.blocks import collect_groups, iter_blocks
from quire.contexts.layout.config_resolver import PageGeometry
from quire.contexts.layout.logger import _log_debug, _log_info, log_pass_result, log_pass_start
from quire.contexts.layout.measurement import MeasurementOracle
from quire.contexts.layout.paginator import PaginationResult, paginate_auto, paginate_manual
from quire.contexts.layout.state import LayoutMode, LayoutState
from quire.contexts.layout.text_fit import DocumentFitContainer, fit_scale


@dataclass
class LayoutResult(PaginationResult):
    """
    PaginationResult plus the state it was computed under.

    Attributes:
        mode: Layout mode of the pass
        target_page_count: Manual page budget (None in automatic mode)
        text_scale_percent: Text scale of the pass
        usable_height: Packing capacity per page
    """

    mode: LayoutMode = LayoutMode.AUTOMATIC
    target_page_count: Optional[int] = None
    text_scale_percent: int = 100
    usable_height: float = 0.0

    @property
    def is_empty(self) -> bool:
        """Nothing to render."""
        return not any(self.pages)


class PageRenderer(Protocol):
    def render(self, result: LayoutResult) -> Any:
        """Materialize each page of result as an independent physical page."""
        ...


def run_pipeline(
    document: ResumeData,
    state: LayoutState,
    oracle: MeasurementOracle,
    geometry: PageGeometry = None,
) -> LayoutResult:
    """
    Run one full layout pass.

    Args:
        document: Normalized resume
        state: Current layout state (not modified)
        oracle: Measurement oracle; committed with this pass's blocks before any read
        geometry: Page geometry (defaults to US Letter)

    Returns:
        LayoutResult for this state. Identical inputs give identical results.
    """
    geometry = geometry or PageGeometry()
    groups = collect_groups(document, state.section_order)
    log_pass_start(state, len(groups))

    oracle.commit(iter_blocks(groups), state.text_scale)

    if state.mode == LayoutMode.MANUAL:
        pagination = paginate_manual(
            groups,
            geometry.usable_height,
            state.target_page_count or 1,
            state.pin_map,
            oracle,
            state.text_scale,
        )
    else:
        pagination = paginate_auto(groups, geometry.usable_height, oracle, state.text_scale)

    result = LayoutResult(
        pages=pagination.pages,
        page_assignment=pagination.page_assignment,
        overflowed=pagination.overflowed,
        heights=pagination.heights,
        mode=state.mode,
        target_page_count=state.target_page_count if state.mode == LayoutMode.MANUAL else None,
        text_scale_percent=state.text_scale_percent,
        usable_height=geometry.usable_height,
    )
    log_pass_result(result)
    return result


class LayoutSession:
    """
    One editing session over one document.

    Example:
        >>> session = LayoutSession(TextMetricsOracle(), renderer=HtmlPageRenderer())
        >>> session.load_document(load_resume("resume.yaml"))
        >>> session.set_mode(LayoutMode.MANUAL)
        >>> result = session.pin_section("education", 2)
        >>> result.page_assignment["education"]
        2
    """

    def __init__(
        self,
        oracle: MeasurementOracle,
        renderer: Optional[PageRenderer] = None,
        geometry: PageGeometry = None,
    ):
        self.oracle = oracle
        self.renderer = renderer
        self.geometry = geometry or PageGeometry()
        self.document = ResumeData()
        self.state = transitions.initial_state()
        self.result: Optional[LayoutResult] = None
        self.rendered: Any = None

    def _apply(self, new_state: LayoutState) -> LayoutResult:
        result = run_pipeline(self.document, new_state, self.oracle, self.geometry)
        self.state = transitions.record_result(new_state, result)
        self.result = result
        if self.renderer is not None:
            self.rendered = self.renderer.render(result)
        return result

    # Document lifecycle

    def load_document(self, document: ResumeData, section_order: SectionOrder = DEFAULT_SECTIONS) -> LayoutResult:
        """Load a new document; order, mode, pins and text scale are reset together."""
        _log_info(f"Loading document: {document.name or '(unnamed)'}")
        self.document = document
        return self._apply(transitions.initial_state(section_order))

    def start_over(self) -> LayoutResult:
        return self.load_document(ResumeData())

    # Section order

    def reorder_sections(self, section_ids: Iterable[str]) -> LayoutResult:
        return self._apply(
            transitions.with_section_order(self.state, section_ops.reorder(self.state.section_order, section_ids))
        )

    def move_section(self, section_id: str, new_index: int) -> LayoutResult:
        order = section_ops.move_section(self.state.section_order, section_id, new_index)
        return self._apply(transitions.with_section_order(self.state, order))

    def move_section_up(self, section_id: str) -> LayoutResult:
        order = section_ops.move_up(self.state.section_order, section_id)
        return self._apply(transitions.with_section_order(self.state, order))

    def move_section_down(self, section_id: str) -> LayoutResult:
        order = section_ops.move_down(self.state.section_order, section_id)
        return self._apply(transitions.with_section_order(self.state, order))

    def hide_section(self, section_id: str, hidden: bool = True) -> LayoutResult:
        order = section_ops.set_hidden(self.state.section_order, section_id, hidden)
        return self._apply(transitions.with_section_order(self.state, order))

    # Pagination mode

    def set_mode(self, mode: LayoutMode) -> LayoutResult:
        return self._apply(transitions.set_mode(self.state, mode))

    def set_target_page_count(self, count: int) -> LayoutResult:
        return self._apply(transitions.set_target_page_count(self.state, count))

    def pin_section(self, section_id: str, page: int) -> LayoutResult:
        """
        Pin one section identity to a page (enters manual mode if needed).

        Raises:
            UnknownSectionError: If section_id was not laid out in the last pass
        """
        if section_id not in self.state.last_assignment:
            raise UnknownSectionError(section_id, self.state.last_assignment)
        _log_debug(f"Pinning '{section_id}' to page {page}")
        return self._apply(transitions.pin_section(self.state, section_id, page))

    # Text scale

    def set_text_scale(self, percent: int) -> LayoutResult:
        return self._apply(transitions.set_text_scale(self.state, percent))

    def shrink_text(self) -> LayoutResult:
        return self._apply(transitions.shrink_text(self.state))

    def grow_text(self) -> LayoutResult:
        return self._apply(transitions.grow_text(self.state))

    def reset_text(self) -> LayoutResult:
        return self._apply(transitions.reset_text(self.state))

    # Single-page flow

    def fit_single_page(self) -> float:
        """
        Find the largest text scale at which the whole document fits one page.

        Does not change the session's text scale.

        Returns:
            Scale factor in [0.1, 1.0]
        """
        groups = collect_groups(self.document, self.state.section_order)
        container = DocumentFitContainer(iter_blocks(groups), self.oracle)
        scale = fit_scale(container, container.elements, self.geometry.usable_height)
        _log_info(f"Single-page fit scale: {scale:.3f}")
        return scale
