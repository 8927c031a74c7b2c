"""
Paginator: partitions a group sequence into fixed-height pages.

Two modes:
- Automatic: greedy forward fill, never reconsiders earlier placement
- Manual: user-fixed page count with optional section pins, first-fit for the
  rest, then overflow splitting so nothing is ever dropped

Neither mode splits a group. A group taller than a page is placed on a page by
itself and overflows visually.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from quire.contexts.layout.blocks import Group
from quire.contexts.layout.measurement import MeasurementOracle, measure_groups

Pages = List[List[Group]]


@dataclass
class PaginationResult:
    """
    Output of one pagination run.

    Attributes:
        pages: Groups per physical page, in order (pages may be empty in manual mode)
        page_assignment: Section identity -> 1-based page its first group landed on
        overflowed: Manual mode only, True if more pages were needed than targeted
        heights: Group key -> measured height used for this run
    """

    pages: Pages = field(default_factory=list)
    page_assignment: Dict[str, int] = field(default_factory=dict)
    overflowed: bool = False
    heights: Dict[str, float] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def assign_pages(pages: Sequence[Sequence[Group]]) -> Dict[str, int]:
    """
    Map each section identity to the first page it appears on (1-based).

    Later groups with the same identity never overwrite the first page.
    """
    assignment: Dict[str, int] = {}
    for page_number, page in enumerate(pages, start=1):
        for group in page:
            assignment.setdefault(group.section_id, page_number)
    return assignment


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def pack_greedy(groups: Sequence[Group], heights: Mapping[str, float], usable_height: float) -> Pages:
    """
    Greedy forward fill over stacked offsets.

    Groups sit at cumulative offsets. A running break threshold starts at
    usable_height; when a group's bottom offset passes the threshold (strictly)
    and the current page is not empty, a new page starts at that group's top and
    the threshold moves to top + usable_height. A group exactly filling the
    remaining space stays on the current page.
    """
    pages: Pages = []
    current: List[Group] = []
    threshold = usable_height
    offset = 0.0

    for group in groups:
        top = offset
        bottom = top + heights[group.key]
        offset = bottom

        if current and bottom > threshold:
            pages.append(current)
            current = []
            threshold = top + usable_height

        current.append(group)

    if current:
        pages.append(current)

    return pages


def paginate_auto(
    groups: Sequence[Group],
    usable_height: float,
    oracle: MeasurementOracle,
    text_scale: float = 1.0,
) -> PaginationResult:
    """
    Paginate in automatic mode.

    Args:
        groups: Collected groups in document order
        usable_height: Packing capacity per page
        oracle: Committed measurement oracle
        text_scale: Uniform text scale the oracle measures at

    Returns:
        PaginationResult; zero pages for an empty group sequence. Never overflowed.
    """
    heights = measure_groups(groups, oracle, text_scale)
    pages = pack_greedy(groups, heights, usable_height)
    return PaginationResult(pages=pages, page_assignment=assign_pages(pages), heights=heights)


def _fill_buckets(
    groups: Sequence[Group],
    heights: Mapping[str, float],
    usable_height: float,
    target_page_count: int,
    pin_map: Mapping[str, int],
) -> List[List[Group]]:
    buckets: List[List[Group]] = [[] for _ in range(target_page_count)]
    totals = [0.0] * target_page_count
    last = target_page_count - 1

    # Header and pinned groups first. Once a pinned section has started, its
    # later groups stay on its current bucket or spill to the next one when full.
    unassigned = []
    section_bucket: Dict[str, int] = {}
    for group in groups:
        if group.is_header:
            index = 0
        elif group.section_id in pin_map:
            if group.section_id in section_bucket:
                index = section_bucket[group.section_id]
                if index < last and buckets[index] and totals[index] + heights[group.key] > usable_height:
                    index += 1
            else:
                index = clamp(int(pin_map[group.section_id]) - 1, 0, last)
            section_bucket[group.section_id] = index
        else:
            unassigned.append(group)
            continue
        buckets[index].append(group)
        totals[index] += heights[group.key]

    # First fit for the rest, in document order
    for group in unassigned:
        height = heights[group.key]
        index = last
        for candidate in range(target_page_count):
            if not buckets[candidate] or totals[candidate] + height <= usable_height:
                index = candidate
                break
        buckets[index].append(group)
        totals[index] += height

    return buckets


def _split_bucket(bucket: Sequence[Group], heights: Mapping[str, float], usable_height: float) -> Pages:
    """Flush one bucket to physical pages; an empty bucket yields one empty page."""
    pages: Pages = []
    current: List[Group] = []
    used = 0.0

    for group in bucket:
        height = heights[group.key]
        if current and used + height > usable_height:
            pages.append(current)
            current = []
            used = 0.0
        current.append(group)
        used += height

    pages.append(current)
    return pages


def paginate_manual(
    groups: Sequence[Group],
    usable_height: float,
    target_page_count: int,
    pin_map: Mapping[str, int],
    oracle: MeasurementOracle,
    text_scale: float = 1.0,
) -> PaginationResult:
    """
    Paginate in manual mode.

    Phase 1 assigns groups to target_page_count buckets: the header to the first
    bucket, pinned sections to their (clamped) pinned bucket, and everything else
    first-fit in document order. A bucket accepts a group if it is empty or the
    group still fits; otherwise the group falls through to the last bucket. Once
    a pinned section has started, a later group of it that no longer fits its
    current bucket spills to the following one.

    Phase 2 flushes each bucket to physical pages, starting a new page whenever
    the next group would not fit on a non-empty page. Within a bucket groups keep
    document order. An empty bucket keeps its blank page only when a later bucket
    has content, so pins on later pages keep their page number. Trailing blank
    pages are dropped and the result is then padded with empty pages up to
    target_page_count.

    Args:
        groups: Collected groups in document order
        usable_height: Packing capacity per page
        target_page_count: Requested number of pages; values below 1 count as 1
        pin_map: Section identity -> 1-based page; out-of-range pages are clamped
        oracle: Committed measurement oracle
        text_scale: Uniform text scale the oracle measures at

    Returns:
        PaginationResult with overflowed set iff more physical pages than targeted
    """
    heights = measure_groups(groups, oracle, text_scale)
    if not groups:
        return PaginationResult(heights=heights)

    target_page_count = max(1, int(target_page_count))
    buckets = _fill_buckets(groups, heights, usable_height, target_page_count, pin_map)

    position = {group.key: i for i, group in enumerate(groups)}
    pages: Pages = []
    for bucket in buckets:
        bucket.sort(key=lambda group: position[group.key])
        pages.extend(_split_bucket(bucket, heights, usable_height))

    while pages and not pages[-1]:
        pages.pop()
    overflowed = len(pages) > target_page_count
    pages.extend([] for _ in range(target_page_count - len(pages)))

    return PaginationResult(
        pages=pages,
        page_assignment=assign_pages(pages),
        overflowed=overflowed,
        heights=heights,
    )
