"""
Layout context logger.

Provides logging interface for layout context with automatic [layout] prefix.
All layout modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from quire.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[layout]"


def setup_layout_logger(log_dir: Path, page_preset: str = "letter", verbose: bool = False) -> Path:
    """
    Setup logger for layout context.

    Args:
        log_dir: Directory for this layout session
        page_preset: Page preset name recorded in the provenance header
        verbose: Show DEBUG messages on the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="layout",
        log_dir=log_dir,
        extra_provenance={"Page preset": page_preset},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [layout] prefix


def _log_info(message: str) -> None:
    """Log info message with [layout] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [layout] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level layout-specific logging helpers


def log_pass_start(state, group_count: int) -> None:
    """Log start of a layout pass with the state it runs against."""
    _log_debug(
        f"Layout pass: {group_count} groups, mode={state.mode.value}, "
        f"text_scale={state.text_scale_percent}%"
    )
    if state.pin_map:
        _log_debug(f"  Pins: {dict(state.pin_map)}")
    if state.target_page_count is not None:
        _log_debug(f"  Target pages: {state.target_page_count}")


def log_pass_result(result) -> None:
    """
    Log result of a layout pass.

    Args:
        result: LayoutResult from run_pipeline()
    """
    _log_info(f"Laid out {result.page_count} page(s) ({result.mode.value})")
    for page_number, page in enumerate(result.pages, start=1):
        keys = ", ".join(group.key for group in page) or "(empty)"
        _log_debug(f"  Page {page_number}: {keys}")

    if result.overflowed:
        _log_warning(
            f"Content overflows target of {result.target_page_count} page(s): "
            f"{result.page_count} pages needed"
        )
