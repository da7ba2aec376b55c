import dataclasses
import logging
import os
from collections.abc import Iterable
from typing import TextIO
from urllib.parse import urlparse

from svgfontembed.config import EmbedConfig
from svgfontembed.core import embedder
from svgfontembed.core.font_names import extract_font_families
from svgfontembed.core.report import report_results
from svgfontembed.core.resolver import FontResolver, ResolutionTable, WalkEntry
from svgfontembed.exceptions import FontEmbedError
from svgfontembed.storage import get_storage, split_location

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class SVGDocument:
    """SVG document text and the fonts it uses.

    The document is handled as plain text. Font families are taken from
    ``font-family:...;`` declarations, and the @font-face rules are inserted
    before the first ``</defs>`` tag.

    Example usage::

        from svgfontembed import SVGDocument

        document = SVGDocument.load("drawing.svg")
        document.resolve_fonts(["AcmeSans-Bold.ttf"], font_dir="fonts")
        document.save("drawing.embed.svg")
    """

    svg: str
    fonts: ResolutionTable = dataclasses.field(init=False)

    def __post_init__(self) -> None:
        self.fonts = ResolutionTable(extract_font_families(self.svg))

    @classmethod
    def load(cls, path: str) -> "SVGDocument":
        """Load an SVG document from a file path or http(s) URL."""
        location, key = split_location(path)
        storage = get_storage(location)
        logger.debug(f"Loading SVG from {storage.url(key)}")
        return cls(storage.get(key).decode("utf-8"))

    @property
    def families(self) -> list[str]:
        """Font families used in the document, in order of appearance."""
        return self.fonts.families

    def resolve_fonts(
        self,
        font_files: Iterable[str] = (),
        font_dir: str | None = None,
        entries: Iterable[WalkEntry] | None = None,
        config: EmbedConfig | None = None,
    ) -> ResolutionTable:
        """Find a font file for every font family in the document.

        Args:
            font_files: Explicit font file names relative to the font directory.
                These take precedence over files found by scanning.
            font_dir: Font directory. Defaults to the configured font directory.
            entries: Directory walk to scan instead of walking font_dir.
            config: Embedding configuration. Defaults to EmbedConfig.default().

        Returns:
            The resolved font table.

        Raises:
            FontFileNotFoundError: If an explicit font file doesn't exist.
            AmbiguousFontMatchError: If two scanned files match one family.
            UnresolvedFontError: If a family has no matching font file.
        """
        config = config or EmbedConfig.default()
        resolver = FontResolver(
            self.fonts,
            base_dir=font_dir or config.font_dir,
            max_font_size=config.max_font_size,
        )
        return resolver.resolve(font_files, entries)

    def tostring(self) -> str:
        """Get the SVG text with resolved fonts embedded.

        Raises:
            AnchorNotFoundError: If there are fonts to embed but no </defs> tag.
        """
        return embedder.embed(self.fonts.resolved(), self.svg)

    def save(self, path: str) -> None:
        """Save the SVG text with resolved fonts embedded to a local file."""
        svg = self.tostring()
        directory, key = os.path.split(path)
        get_storage(directory).put(key, svg.encode("utf-8"))
        logger.info(f"Saved SVG to {path}")


def find_embed_fonts(
    svg: str,
    base_dir: str | None = None,
    font_files: Iterable[str] = (),
    config: EmbedConfig | None = None,
    entries: Iterable[WalkEntry] | None = None,
    report: TextIO | None = None,
) -> str:
    """Embed the fonts used by an SVG document as Base64 data URIs.

    Args:
        svg: Raw SVG text.
        base_dir: Directory to scan for font files, also the base path of
            font_files. Defaults to the configured font directory.
        font_files: Explicit font file names, as given on the command line.
        config: Embedding configuration. Defaults to EmbedConfig.default().
        entries: Directory walk to scan instead of walking base_dir.
        report: Stream to write the resolution summary to. No summary is
            written when None.

    Returns:
        SVG text with @font-face rules inserted before the first </defs>.

    Raises:
        FontEmbedError: If fonts can't be resolved or embedded.
        OSError: If a matched font file can't be read.

    Both carry the original SVG text as the ``svg`` attribute.
    """
    try:
        document = SVGDocument(svg)
        document.resolve_fonts(font_files, base_dir, entries, config)
        result = document.tostring()
    except (FontEmbedError, OSError) as e:
        e.svg = svg  # type: ignore[union-attr]
        raise

    if report is not None:
        report_results(document.fonts, report)
    return result


def embed_file(
    input_path: str,
    output_path: str | None = None,
    font_files: Iterable[str] = (),
    font_dir: str | None = None,
    config: EmbedConfig | None = None,
    report: TextIO | None = None,
) -> str:
    """Convenience method to embed fonts into an SVG file.

    Args:
        input_path: Path or http(s) URL of the input SVG file.
        output_path: Path of the output SVG file. Defaults to the input file
            name with ``.svg`` replaced by the configured output suffix.
        font_files: Explicit font file names relative to the font directory.
        font_dir: Font directory. Defaults to the configured font directory.
        config: Embedding configuration. Defaults to EmbedConfig.default().
        report: Stream to write the resolution summary to.

    Returns:
        Path of the written output file.

    Raises:
        ValueError: If the output path is the input file.
    """
    config = config or EmbedConfig.default()
    if output_path is None:
        output_path = config.output_path(split_location(input_path)[1])
        if urlparse(input_path).scheme not in ("http", "https"):
            output_path = os.path.join(os.path.dirname(input_path), output_path)
    if os.path.abspath(output_path) == os.path.abspath(input_path):
        raise ValueError(f"Output path {output_path} would overwrite the input file")

    location, key = split_location(input_path)
    svg = find_embed_fonts(
        get_storage(location).get(key).decode("utf-8"),
        base_dir=font_dir,
        font_files=font_files,
        config=config,
        report=report,
    )
    directory, key = os.path.split(output_path)
    get_storage(directory).put(key, svg.encode("utf-8"))
    return output_path
