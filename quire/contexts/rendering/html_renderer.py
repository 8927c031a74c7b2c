"""
HTML Page Renderer

Materializes a LayoutResult as a standalone HTML document in which every page is
an independent fixed-size <section class="page">, suitable for preview, browser
print, and HTML-to-PDF export.
"""

import time
from pathlib import Path
from typing import Any, Dict, List, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from quire.contexts.layout.config_resolver import PageGeometry, Typography
from quire.contexts.layout.engine import LayoutResult
from quire.contexts.layout.measurement import header_contact_line
from quire.contexts.rendering.exceptions import PageRenderError
from quire.contexts.rendering.logger import _log_debug, _log_info, log_render_result

TEMPLATES_PATH = Path(__file__).parent / "templates"
PAGE_TEMPLATE = "pages.html.jinja"


class HtmlPageRenderer:
    """
    Render laid-out pages with Jinja2.

    Font sizes in the output are the typography base sizes multiplied by the
    result's text scale, so the rendering matches what was measured.
    """

    def __init__(
        self,
        geometry: PageGeometry = None,
        typography: Typography = None,
        templates_path: Path = None,
    ):
        self.geometry = geometry or PageGeometry()
        self.typography = typography or Typography()
        self.templates_path = templates_path or TEMPLATES_PATH

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def _font_sizes(self, scale: float) -> Dict[str, float]:
        roles = ("name", "contact", "section_title", "entry_header", "body")
        return {role: round(getattr(self.typography, f"{role}_px") * scale, 2) for role in roles}

    def _page_context(self, result: LayoutResult) -> List[List[Dict[str, Any]]]:
        pages = []
        for page in result.pages:
            blocks = []
            for group in page:
                for block in group.blocks:
                    blocks.append(
                        {
                            "kind": block.kind.value,
                            "key": block.key,
                            "section_id": block.section_id,
                            "label": block.label,
                            "entity": block.entity,
                            "entry_type": type(block.entity).__name__,
                        }
                    )
            pages.append(blocks)
        return pages

    def render(self, result: LayoutResult, title: str = "Resume") -> str:
        """
        Render every page of a layout.

        Args:
            result: Output of run_pipeline()
            title: Document title

        Returns:
            HTML document

        Raises:
            PageRenderError: If the template fails to render
        """
        start = time.time()
        _log_debug(f"Rendering {result.page_count} page(s) with {self.templates_path / PAGE_TEMPLATE}")
        scale = result.text_scale_percent / 100
        context = {
            "title": title,
            "pages": self._page_context(result),
            "fonts": self._font_sizes(scale),
            "line_height": self.typography.line_height,
            "page_width": self.geometry.width_px,
            "page_height": self.geometry.height_px,
            "margin_top": self.geometry.vertical_margin_px / 2,
            "margin_side": self.geometry.horizontal_margin_px,
            "contact_line": header_contact_line,
        }

        try:
            html = self.env.get_template(PAGE_TEMPLATE).render(context)
        except TemplateError as e:
            raise PageRenderError(
                "Failed to render pages", template_path=self.templates_path / PAGE_TEMPLATE, original_error=e
            ) from e

        log_render_result(result.page_count, elapsed_time=time.time() - start)
        return html

    def write(self, result: LayoutResult, output_path: Union[str, Path], title: str = "Resume") -> Path:
        """Render and write the HTML document, creating parent directories."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(result, title=title), encoding="utf-8")
        _log_info(f"Wrote {output_path}")
        return output_path
