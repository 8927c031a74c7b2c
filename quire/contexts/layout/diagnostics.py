"""
Layout diagnostics for UI feedback.

Inspects a LayoutResult and builds a hierarchical diagnostics tree
(Document -> Page -> Group / Section) describing what the section sidebar and
the overflow warning should show:

- Page-count overflow: manual layout needed more pages than targeted
- Page overfill: a page's content exceeds the usable height
- Oversized groups: a single group taller than a page (overflows visually)
- Displaced pins: a pinned section that did not land on its pinned page

Diagnostics never change the layout; they only describe it.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from quire.contexts.layout.engine import LayoutResult


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Document-level
    PAGE_COUNT_OVERFLOW = "Layout needs {actual} page(s) but the target is {target}"

    # Page-level
    PAGE_OVERFILLED = "Page {page} content is {used:.0f}px tall (usable height {usable:.0f}px)"

    # Group-level
    GROUP_TOO_TALL = "'{group}' on page {page} is taller than a page ({height:.0f}px)"

    # Section-level
    PIN_DISPLACED = "'{section}' is pinned to page {pinned} but starts on page {actual}"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class GroupDiagnostics(Diagnostics):
    group_key: str = ""
    page_number: int = 0
    height: float = 0.0
    usable_height: float = 0.0

    def get_issues(self) -> List[str]:
        if self.height > self.usable_height:
            return [
                IssueTemplates.GROUP_TOO_TALL.format(
                    group=self.group_key, page=self.page_number, height=self.height
                )
            ]
        return []


@dataclass
class SectionDiagnostics(Diagnostics):
    """Placement of one pinned section identity."""

    section_id: str = ""
    pinned_page: Optional[int] = None
    actual_page: Optional[int] = None

    def get_issues(self) -> List[str]:
        if self.pinned_page is not None and self.actual_page != self.pinned_page:
            return [
                IssueTemplates.PIN_DISPLACED.format(
                    section=self.section_id, pinned=self.pinned_page, actual=self.actual_page
                )
            ]
        return []


@dataclass
class PageDiagnostics(Diagnostics):
    page_number: int = 0
    used_height: float = 0.0
    usable_height: float = 0.0
    group_count: int = 0

    @property
    def fill_ratio(self) -> float:
        return self.used_height / self.usable_height if self.usable_height else 0.0

    def get_issues(self) -> List[str]:
        # A lone oversized group is reported at group level only
        if self.used_height > self.usable_height and self.group_count > 1:
            return [
                IssueTemplates.PAGE_OVERFILLED.format(
                    page=self.page_number, used=self.used_height, usable=self.usable_height
                )
            ]
        return []


@dataclass
class DocumentDiagnostics(Diagnostics):
    """Top-level diagnostics for the whole layout."""

    page_count: int = 0
    target_page_count: Optional[int] = None
    sections: List[SectionDiagnostics] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        if self.target_page_count is not None and self.page_count > self.target_page_count:
            return [
                IssueTemplates.PAGE_COUNT_OVERFLOW.format(
                    actual=self.page_count, target=self.target_page_count
                )
            ]
        return []

    def get_inherited_issues(self) -> List[str]:
        issues = super().get_inherited_issues()
        for section in self.sections:
            issues.extend(section.get_inherited_issues())
        return issues


# =============================================================================
# Main Analysis Function
# =============================================================================


def analyze_layout(result: LayoutResult, pin_map: Mapping[str, int] = None) -> DocumentDiagnostics:
    """
    Build the diagnostics tree for a layout pass.

    Args:
        result: Output of run_pipeline()
        pin_map: Pins the pass was computed with (manual mode); pins beyond the
            target page count are compared after clamping

    Returns:
        DocumentDiagnostics tree. Call .get_inherited_issues() for all issues,
        or .is_valid to check whether the layout needs attention.
    """
    document_diagnostics = DocumentDiagnostics(
        page_count=result.page_count,
        target_page_count=result.target_page_count,
    )

    for page_number, page in enumerate(result.pages, start=1):
        heights = [result.heights[group.key] for group in page]
        page_diagnostics = PageDiagnostics(
            page_number=page_number,
            used_height=sum(heights),
            usable_height=result.usable_height,
            group_count=len(page),
        )
        for group, height in zip(page, heights):
            page_diagnostics.components.append(
                GroupDiagnostics(
                    group_key=group.key,
                    page_number=page_number,
                    height=height,
                    usable_height=result.usable_height,
                )
            )
        document_diagnostics.components.append(page_diagnostics)

    last_page = result.target_page_count or result.page_count
    for section_id, pinned in (pin_map or {}).items():
        if section_id not in result.page_assignment:
            continue
        document_diagnostics.sections.append(
            SectionDiagnostics(
                section_id=section_id,
                pinned_page=max(1, min(int(pinned), last_page)),
                actual_page=result.page_assignment[section_id],
            )
        )

    return document_diagnostics
