import logging
from collections.abc import Iterable

from svgfontembed.core.font_utils import FontResolution
from svgfontembed.exceptions import AnchorNotFoundError

logger = logging.getLogger(__name__)

DEFS_CLOSE_TAG = "</defs>"


def render_font_faces(fonts: Iterable[FontResolution]) -> str:
    """Render @font-face rules in a CSS <style> element.

    Fonts are sorted by family so the output is stable. Returns an empty
    string when there is nothing to render.
    """
    css_rules = [
        font.to_font_face_css()
        for font in sorted(fonts, key=lambda font: font.family)
        if font.is_resolved()
    ]
    if not css_rules:
        return ""
    css_content = "\n".join(css_rules)
    return f'<style type="text/css"><![CDATA[\n{css_content}\n]]></style>\n'


def embed(fonts: Iterable[FontResolution], svg: str) -> str:
    """Insert @font-face rules right before the first </defs> tag.

    The rest of the document is left untouched. A document without fonts to
    embed is returned as is.

    Args:
        fonts: Resolved fonts to embed.
        svg: Original SVG text.

    Returns:
        SVG text with the fonts embedded.

    Raises:
        AnchorNotFoundError: If there are fonts but no </defs> tag.
    """
    style = render_font_faces(fonts)
    if not style:
        logger.debug("No fonts to embed")
        return svg
    if DEFS_CLOSE_TAG not in svg:
        raise AnchorNotFoundError()
    return svg.replace(DEFS_CLOSE_TAG, style + DEFS_CLOSE_TAG, 1)
