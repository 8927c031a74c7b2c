"""
Layout Context

Responsibilities:
- Collects resume content into keep-together groups
- Paginates groups automatically or with a user-fixed page count and pins
- Searches the largest text scale that fits a single page
- Holds per-session layout state and re-runs the pipeline on every action

Owns: Page partition, page assignment, overflow signal, layout state
Never: Renders markup or performs real font shaping (delegated to collaborators)
"""

from quire.contexts.layout.blocks import BlockKind, ContentBlock, Group, collect_groups
from quire.contexts.layout.config_resolver import (
    PageGeometry,
    Typography,
    resolve_page_geometry,
    resolve_typography,
)
from quire.contexts.layout.diagnostics import DocumentDiagnostics, analyze_layout
from quire.contexts.layout.engine import LayoutResult, LayoutSession, PageRenderer, run_pipeline
from quire.contexts.layout.exceptions import MeasurementNotCommittedError
from quire.contexts.layout.measurement import MeasurementOracle, TextMetricsOracle
from quire.contexts.layout.paginator import PaginationResult, paginate_auto, paginate_manual
from quire.contexts.layout.state import LayoutMode, LayoutState
from quire.contexts.layout.text_fit import ResizableText, fit_scale

__all__ = [
    # Blocks
    "BlockKind",
    "ContentBlock",
    "Group",
    "collect_groups",
    # Geometry and presets
    "PageGeometry",
    "Typography",
    "resolve_page_geometry",
    "resolve_typography",
    # Measurement
    "MeasurementOracle",
    "TextMetricsOracle",
    "MeasurementNotCommittedError",
    # Pagination
    "PaginationResult",
    "paginate_auto",
    "paginate_manual",
    # Text fit
    "ResizableText",
    "fit_scale",
    # State and orchestration
    "LayoutMode",
    "LayoutState",
    "LayoutResult",
    "LayoutSession",
    "PageRenderer",
    "run_pipeline",
    # Diagnostics
    "DocumentDiagnostics",
    "analyze_layout",
]
