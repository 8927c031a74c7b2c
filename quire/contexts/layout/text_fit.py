"""
Text-fit search for the single-page flow.

Finds the largest uniform text scale at which a container's content fits its box.
The search runs a fixed number of bisection steps instead of looping to a height
threshold, so cost is bounded: 10 steps over [0.1, 1.0] narrow the interval to
under 0.001.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from typing_extensions import Protocol

from quire.contexts.layout.blocks import ContentBlock
from quire.contexts.layout.config_resolver import Typography
from quire.contexts.layout.defaults import FIT_ITERATIONS, FIT_MAX_SCALE, FIT_MIN_SCALE
from quire.contexts.layout.logger import _log_debug
from quire.contexts.layout.measurement import MeasurementOracle


@dataclass
class ResizableText:
    """A text element whose font size follows the fit scale."""

    key: str
    base_font_size: float
    font_size: Optional[float] = field(default=None)

    def __post_init__(self):
        if self.font_size is None:
            self.font_size = self.base_font_size


class FitContainer(Protocol):
    def content_height(self) -> float:
        """Height of the container's content with the elements' current font sizes."""
        ...


def apply_scale(elements: Sequence[ResizableText], scale: float) -> None:
    for element in elements:
        element.font_size = element.base_font_size * scale


def fit_scale(
    container: FitContainer,
    elements: Sequence[ResizableText],
    target_height: float,
    min_scale: float = FIT_MIN_SCALE,
    max_scale: float = FIT_MAX_SCALE,
    iterations: int = FIT_ITERATIONS,
) -> float:
    """
    Find the largest scale in [min_scale, max_scale] whose content fits target_height.

    Content that already fits at max_scale keeps max_scale. Otherwise bisect: an
    overflowing midpoint moves the upper bound down, a fitting midpoint becomes
    the best so far and moves the lower bound up. If nothing fits, min_scale is
    applied (best effort).

    Args:
        container: Measures content height with the elements' current sizes
        elements: Resizable text elements, scaled uniformly
        target_height: Box height the content must not exceed
        min_scale: Lower search bound
        max_scale: Upper search bound
        iterations: Number of bisection steps

    Returns:
        The applied scale
    """
    if not elements or target_height <= 0:
        return max_scale

    apply_scale(elements, max_scale)
    if container.content_height() <= target_height:
        return max_scale

    # Bisection alone can only approach max_scale, so the check above keeps exact
    # full size for content that fits; when no midpoint fits the floor is min_scale
    low, high = min_scale, max_scale
    best = min_scale

    for _ in range(iterations):
        mid = (low + high) / 2
        apply_scale(elements, mid)
        if container.content_height() > target_height:
            high = mid
        else:
            best = mid
            low = mid

    apply_scale(elements, best)
    _log_debug(f"Text fit: scale {best:.4f} after {iterations} iterations")
    return best


class DocumentFitContainer:
    """
    Adapts a pass's blocks to the fit search.

    One resizable element per block, all sharing the body font as base size.
    Measuring commits the blocks at the elements' current scale first, so every
    height read follows a write.
    """

    def __init__(
        self,
        blocks: Sequence[ContentBlock],
        oracle: MeasurementOracle,
        typography: Typography = None,
    ):
        self.blocks = list(blocks)
        self.oracle = oracle
        base = (typography or Typography()).body_px
        self.elements: List[ResizableText] = [ResizableText(block.key, base) for block in self.blocks]

    @property
    def current_scale(self) -> float:
        if not self.elements:
            return 1.0
        first = self.elements[0]
        return first.font_size / first.base_font_size

    def content_height(self) -> float:
        scale = self.current_scale
        self.oracle.commit(self.blocks, scale)
        return sum(self.oracle.measure(block, scale) for block in self.blocks)
