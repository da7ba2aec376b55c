from logging import getLogger

from svgfontembed.config import EmbedConfig
from svgfontembed.core.resolver import FontResolver, ResolutionTable
from svgfontembed.exceptions import (
    AmbiguousFontMatchError,
    AnchorNotFoundError,
    FontEmbedError,
    FontFileNotFoundError,
    FontFileTooLargeError,
    UnresolvedFontError,
)
from svgfontembed.svg_document import SVGDocument, embed_file, find_embed_fonts
from svgfontembed.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = [
    "AmbiguousFontMatchError",
    "AnchorNotFoundError",
    "EmbedConfig",
    "FontEmbedError",
    "FontFileNotFoundError",
    "FontFileTooLargeError",
    "FontResolver",
    "ResolutionTable",
    "SVGDocument",
    "UnresolvedFontError",
    "embed_file",
    "find_embed_fonts",
]
