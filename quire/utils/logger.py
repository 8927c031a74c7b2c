"""
Loguru configuration shared by the QUIRE contexts.

setup_logger() points loguru at a per-run log directory (full DEBUG trail on disk,
colorized console at the requested level) and stamps the run with a provenance
header so a layout log can be traced back to the command and inputs that made it.

Context modules wrap this in contexts/{context}/logger.py and never call loguru
configuration directly.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

import quire

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors per level; INFO keeps loguru's default
LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output for one run of a context.

    Any previously added sinks are dropped, so calling this again (e.g., from a
    second CLI invocation in the same process) starts a fresh log.

    Args:
        context_name: Context identifier; names the log file ("layout" -> layout.log)
        log_dir: Directory for this run, created if missing
        extra_provenance: Key-value pairs appended to the provenance header
        level_colors: Overrides for LEVEL_COLORS (e.g., {"DEBUG": "<cyan>"})
        console_level: Minimum level echoed to stdout

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger(
            context_name="layout",
            log_dir=Path("outs/logs/layout_20251114_123456"),
            extra_provenance={"Page preset": "letter"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance({"Context": context_name, **(extra_provenance or {})})
    return log_file


def log_provenance(extra_context: Optional[Dict[str, str]] = None) -> None:
    """
    Write a provenance header to the active sinks.

    Always records the entry script, full command line, working directory, and the
    Python and QUIRE versions, followed by extra_context in insertion order.
    """
    rows = {
        "Script": sys.argv[0],
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
        "QUIRE": quire.__version__,
        **(extra_context or {}),
    }

    logger.info("=" * 80)
    for key, value in rows.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
