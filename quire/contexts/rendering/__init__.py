"""
Rendering Context

Responsibilities:
- Materializes laid-out pages as standalone HTML (one fixed-size page per page)
- Scales font sizes with the layout's text scale so output matches measurement

Owns: Page markup, styling hooks, HTML output files
Never: Decides page placement
"""

from quire.contexts.rendering.exceptions import PageRenderError
from quire.contexts.rendering.html_renderer import HtmlPageRenderer

__all__ = ["HtmlPageRenderer", "PageRenderError"]
