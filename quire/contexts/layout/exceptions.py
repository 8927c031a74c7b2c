"""Custom exceptions for the layout context."""

from typing import Optional


class MeasurementNotCommittedError(RuntimeError):
    """
    Exception raised when a block is measured before it was committed.

    Heights are only meaningful once content has been written to the measurement
    surface at the requested text scale. Measuring earlier would read stale or
    missing geometry.

    Attributes:
        block_key: Key of the block that was measured
        text_scale: Scale the measurement was requested at
        committed_scale: Scale of the last commit (None if nothing was committed)
    """

    def __init__(self, block_key: str, text_scale: float, committed_scale: Optional[float] = None):
        self.block_key = block_key
        self.text_scale = text_scale
        self.committed_scale = committed_scale

        if committed_scale is None:
            message = f"Block '{block_key}' measured before any content was committed"
        else:
            message = (
                f"Block '{block_key}' measured at scale {text_scale:.2f} "
                f"but last commit was at scale {committed_scale:.2f}"
            )
        super().__init__(message)
