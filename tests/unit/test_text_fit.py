"""Unit tests for the single-page text-fit search."""

import pytest

from quire.contexts.layout.text_fit import DocumentFitContainer, ResizableText, apply_scale, fit_scale
from tests.conftest import FixedHeightOracle, make_groups


class LinearContainer:
    """Content height grows linearly with the elements' scale."""

    def __init__(self, elements, full_height):
        self.elements = elements
        self.full_height = full_height
        self.calls = 0

    def content_height(self):
        self.calls += 1
        first = self.elements[0]
        return self.full_height * first.font_size / first.base_font_size


def _elements(count=3, base=12.0):
    return [ResizableText(f"block-{i}", base) for i in range(count)]


@pytest.mark.unit
def test_resizable_text_starts_at_base_size():
    """Test that resizable text starts at its base size."""
    element = ResizableText("a", 14.0)
    assert element.font_size == 14.0


@pytest.mark.unit
def test_apply_scale_is_uniform():
    """Test that scaling applies uniformly."""
    elements = [ResizableText("a", 10.0), ResizableText("b", 20.0)]
    apply_scale(elements, 0.5)
    assert [e.font_size for e in elements] == [5.0, 10.0]


@pytest.mark.unit
def test_content_that_fits_keeps_max_scale():
    """Test that content that fits keeps the max scale."""
    elements = _elements()
    container = LinearContainer(elements, full_height=800)

    scale = fit_scale(container, elements, target_height=1000)

    assert scale == 1.0
    assert container.calls == 1
    assert all(e.font_size == e.base_font_size for e in elements)


@pytest.mark.unit
def test_bisection_finds_largest_fitting_scale():
    """Test that bisection finds the largest fitting scale."""
    elements = _elements()
    container = LinearContainer(elements, full_height=1000)

    scale = fit_scale(container, elements, target_height=500)

    # 10 steps over [0.1, 1.0] leave the answer within 0.001 below the exact fit
    assert 0.499 < scale <= 0.5
    assert container.content_height() <= 500
    assert all(e.font_size == pytest.approx(e.base_font_size * scale) for e in elements)


@pytest.mark.unit
def test_runs_fixed_number_of_iterations():
    """Test that the search runs a fixed number of iterations."""
    elements = _elements()
    container = LinearContainer(elements, full_height=1000)

    fit_scale(container, elements, target_height=500, iterations=4)

    # One check at max_scale plus one per iteration
    assert container.calls == 5


@pytest.mark.unit
def test_nothing_fits_falls_back_to_min_scale():
    """Test that the min scale is applied when nothing fits."""
    elements = _elements()
    container = LinearContainer(elements, full_height=1000)

    scale = fit_scale(container, elements, target_height=10)

    assert scale == 0.1
    assert all(e.font_size == pytest.approx(e.base_font_size * 0.1) for e in elements)


@pytest.mark.unit
def test_no_elements_returns_max_scale():
    """Test fitting with no elements."""
    container = LinearContainer([], full_height=1000)

    assert fit_scale(container, [], target_height=500) == 1.0
    assert container.calls == 0


@pytest.mark.unit
def test_non_positive_target_returns_max_scale():
    """Test fitting to a non-positive target height."""
    elements = _elements()
    container = LinearContainer(elements, full_height=1000)

    assert fit_scale(container, elements, target_height=0) == 1.0


@pytest.mark.unit
def test_document_container_commits_before_measuring():
    """Test that the document container commits before measuring."""
    groups = make_groups("a", "b")
    blocks = [group.blocks[0] for group in groups]
    oracle = FixedHeightOracle({"a": 600, "b": 600})
    container = DocumentFitContainer(blocks, oracle)

    apply_scale(container.elements, 0.5)
    height = container.content_height()

    assert height == pytest.approx(600)
    assert oracle.commits[-1] == (["a", "b"], pytest.approx(0.5))


@pytest.mark.unit
def test_document_container_fit():
    """Test fitting a document to one page."""
    groups = make_groups("a", "b")
    blocks = [group.blocks[0] for group in groups]
    oracle = FixedHeightOracle({"a": 600, "b": 600})
    container = DocumentFitContainer(blocks, oracle)

    scale = fit_scale(container, container.elements, target_height=900)

    assert 0.749 < scale <= 0.75
    assert container.current_scale == pytest.approx(scale)
