"""Unit tests for manual pagination (target page count plus section pins)."""

import pytest

from quire.contexts.layout.blocks import BlockKind
from quire.contexts.layout.paginator import paginate_auto, paginate_manual
from tests.conftest import FixedHeightOracle, make_group, make_groups, page_keys


@pytest.fixture
def four_groups():
    groups = make_groups("header", "a", "b", "c")
    oracle = FixedHeightOracle({"header": 100, "a": 400, "b": 400, "c": 400})
    return groups, oracle


@pytest.mark.unit
def test_first_fit_without_pins(four_groups):
    """Test first-fit placement without pins."""
    groups, oracle = four_groups

    result = paginate_manual(groups, 1000, 2, {}, oracle)

    assert page_keys(result.pages) == [["header", "a", "b"], ["c"]]
    assert result.overflowed is False


@pytest.mark.unit
def test_pinned_section_lands_on_its_page(four_groups):
    """Test that a pinned section lands on its page."""
    groups, oracle = four_groups

    result = paginate_manual(groups, 1000, 2, {"a": 2}, oracle)

    assert page_keys(result.pages) == [["header", "b", "c"], ["a"]]
    assert result.page_assignment["a"] == 2


@pytest.mark.unit
def test_header_always_on_first_page(four_groups):
    """Test that the header stays on the first page."""
    groups, oracle = four_groups

    result = paginate_manual(groups, 1000, 2, {"header": 2}, oracle)

    assert result.page_assignment["header"] == 1


@pytest.mark.unit
def test_pin_beyond_target_is_clamped(four_groups):
    """Test that a pin beyond the target is clamped."""
    groups, oracle = four_groups

    result = paginate_manual(groups, 1000, 2, {"a": 5}, oracle)

    assert result.page_assignment["a"] == 2
    assert result.page_count == 2


@pytest.mark.unit
def test_pin_below_one_is_clamped(four_groups):
    """Test that a pin below one is clamped."""
    groups, oracle = four_groups

    result = paginate_manual(groups, 1000, 2, {"c": 0}, oracle)

    assert result.page_assignment["c"] == 1


@pytest.mark.unit
def test_groups_keep_document_order_within_page():
    """Test that groups keep document order within a page."""
    groups = make_groups("a", "b", "c")
    oracle = FixedHeightOracle({"a": 100, "b": 100, "c": 100})

    # c is placed into page 1 before a and b, but renders after them
    result = paginate_manual(groups, 1000, 2, {"c": 1}, oracle)

    assert page_keys(result.pages) == [["a", "b", "c"], []]


@pytest.mark.unit
def test_unfitting_group_falls_through_to_last_page_and_overflows():
    """Test that a group that fits nowhere goes to the last page and overflows."""
    groups = make_groups("a", "b", "c")
    oracle = FixedHeightOracle({"a": 900, "b": 900, "c": 900})

    result = paginate_manual(groups, 1000, 2, {}, oracle)

    assert page_keys(result.pages) == [["a"], ["b"], ["c"]]
    assert result.overflowed is True
    assert result.page_count == 3


@pytest.mark.unit
def test_single_page_target_overflows_like_greedy():
    """Test that a one page target overflows like greedy packing."""
    groups = make_groups("a", "b", "c")
    oracle = FixedHeightOracle({"a": 600, "b": 600, "c": 600})

    manual = paginate_manual(groups, 1000, 1, {}, oracle)
    auto = paginate_auto(groups, 1000, oracle)

    assert manual.overflowed is True
    assert manual.page_count == auto.page_count == 3


@pytest.mark.unit
def test_empty_buckets_keep_later_pins_in_place():
    """Test that an empty page before a pinned page is kept."""
    groups = make_groups("a", "b")
    oracle = FixedHeightOracle({"a": 100, "b": 100})

    result = paginate_manual(groups, 1000, 3, {"b": 3}, oracle)

    assert page_keys(result.pages) == [["a"], [], ["b"]]
    assert result.page_assignment == {"a": 1, "b": 3}
    assert result.overflowed is False


@pytest.mark.unit
def test_result_has_at_least_target_pages():
    """Test that the result is padded to the target page count."""
    groups = make_groups("a")
    oracle = FixedHeightOracle({"a": 100})

    result = paginate_manual(groups, 1000, 3, {}, oracle)

    assert result.page_count == 3
    assert result.overflowed is False


@pytest.mark.unit
def test_target_below_one_counts_as_one():
    """Test that a target below one counts as one."""
    groups = make_groups("a", "b")
    oracle = FixedHeightOracle({"a": 100, "b": 100})

    result = paginate_manual(groups, 1000, 0, {}, oracle)

    assert page_keys(result.pages) == [["a", "b"]]
    assert result.overflowed is False


@pytest.mark.unit
def test_empty_sequence_gives_zero_pages():
    """Test paginating an empty group sequence."""
    result = paginate_manual([], 1000, 2, {"a": 1}, FixedHeightOracle())

    assert result.pages == []
    assert result.overflowed is False


@pytest.mark.unit
def test_pin_applies_to_every_group_of_a_section():
    """Test that a pin applies to every group of its section."""
    groups = [
        make_group("header", kind=BlockKind.HEADER, position=0),
        make_group("work:title", "work", position=1),
        make_group("work:1", "work", position=2),
        make_group("skills", position=3),
    ]
    oracle = FixedHeightOracle({"header": 100, "work:title": 300, "work:1": 300, "skills": 200})

    result = paginate_manual(groups, 1000, 2, {"work": 2}, oracle)

    assert page_keys(result.pages) == [["header", "skills"], ["work:title", "work:1"]]
    assert result.page_assignment == {"header": 1, "skills": 1, "work": 2}


@pytest.mark.unit
def test_no_group_is_dropped():
    """Test that every group is placed."""
    groups = make_groups("header", "a", "b", "c", "d")
    oracle = FixedHeightOracle({"header": 300, "a": 700, "b": 700, "c": 700, "d": 700})

    result = paginate_manual(groups, 1000, 2, {"d": 1}, oracle)

    placed = [key for page in page_keys(result.pages) for key in page]
    assert sorted(placed) == sorted(group.key for group in groups)


@pytest.mark.unit
def test_pinned_section_continues_on_next_page_when_full():
    """Test that a pinned section spills its later groups to the next page instead of overflowing."""
    groups = [
        make_group("header", kind=BlockKind.HEADER, position=0),
        make_group("work:title", "work", position=1),
        make_group("work:1", "work", position=2),
        make_group("work:2", "work", position=3),
        make_group("skills", position=4),
    ]
    oracle = FixedHeightOracle({"header": 100, "work:title": 450, "work:1": 400, "work:2": 400, "skills": 200})

    auto = paginate_auto(groups, 1008, oracle)
    manual = paginate_manual(groups, 1008, 2, {"work": 1, "skills": 2}, oracle)

    assert page_keys(manual.pages) == page_keys(auto.pages) == [["header", "work:title", "work:1"], ["work:2", "skills"]]
    assert manual.page_assignment == auto.page_assignment
    assert manual.overflowed is False


@pytest.mark.unit
def test_overfull_first_bucket_with_empty_last_bucket_does_not_overflow():
    """Test that an empty trailing bucket is not kept as a blank page after an earlier bucket splits."""
    groups = make_groups("header", "a", "b")
    oracle = FixedHeightOracle({"header": 100, "a": 600, "b": 600})

    result = paginate_manual(groups, 1000, 2, {"a": 1, "b": 1}, oracle)

    assert page_keys(result.pages) == [["header", "a"], ["b"]]
    assert result.overflowed is False
