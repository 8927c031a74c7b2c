"""
Default values for QUIRE page layout.

Provides the shared constants used by:
- config_resolver.py (fallback geometry and typography when no preset is named)
- state.py (text-scale and page-count bounds)
- text_fit.py (single-page auto-fit search bounds)
"""

# CSS reference pixel
PIXELS_PER_INCH = 96

# US Letter with a 0.5in top+bottom margin budget
PAGE_WIDTH_IN = 8.5
PAGE_HEIGHT_IN = 11.0
VERTICAL_MARGIN_IN = 0.5
HORIZONTAL_MARGIN_IN = 0.5

# Section identity of the name/contact block
HEADER_SECTION_ID = "header"

# User-facing text scale control (percent)
TEXT_SCALE_MIN = 50
TEXT_SCALE_MAX = 100
TEXT_SCALE_DEFAULT = 100
TEXT_SCALE_STEP = 5

# Manual-mode target page count range
PAGE_COUNT_MIN = 1
PAGE_COUNT_MAX = 3

# Single-page auto-fit binary search
FIT_MIN_SCALE = 0.1
FIT_MAX_SCALE = 1.0
FIT_ITERATIONS = 10

# Font sizes (px) and spacing used to estimate rendered heights
DEFAULT_TYPOGRAPHY = {
    "name_px": 28.0,
    "contact_px": 12.0,
    "section_title_px": 16.0,
    "entry_header_px": 13.0,
    "body_px": 12.0,
    "line_height": 1.25,
    "avg_char_width_em": 0.5,
    "block_gap_px": 6.0,
    "section_gap_px": 10.0,
}
