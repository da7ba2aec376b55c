"""Exceptions raised while resolving and embedding fonts."""


class FontEmbedError(Exception):
    """Base class for font embedding failures.

    Attributes:
        svg: The original, unmodified SVG text when the error escaped
            :func:`svgfontembed.find_embed_fonts`, otherwise None.
    """

    svg: str | None = None


class FontFileNotFoundError(FontEmbedError, FileNotFoundError):
    """An explicitly requested font file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Font file not found: {path}")
        self.path = path


class AmbiguousFontMatchError(FontEmbedError):
    """More than one scanned file matches a single font family."""

    def __init__(self, family: str, first: str, second: str) -> None:
        super().__init__(
            f"Multiple font files found as a match to font-family: {family} "
            f"({first}, {second})"
        )
        self.family = family
        self.files = (first, second)


class UnresolvedFontError(FontEmbedError):
    """No font file matches a font family used in the document."""

    def __init__(self, family: str) -> None:
        super().__init__(f"No matching font file found for font-family: {family}")
        self.family = family


class AnchorNotFoundError(FontEmbedError):
    """The document has no </defs> tag to insert fonts before."""

    def __init__(self) -> None:
        super().__init__("No </defs> tag found in SVG document")


class FontFileTooLargeError(FontEmbedError):
    """A matched font file exceeds the configured size limit."""

    def __init__(self, path: str, size: int, limit: int) -> None:
        super().__init__(
            f"Font file '{path}' is {size} bytes, exceeding the limit of "
            f"{limit} bytes. Set SVGFONTEMBED_MAX_FONT_SIZE to raise the limit."
        )
        self.path = path
        self.size = size
        self.limit = limit
