import base64
import dataclasses
import enum
import logging
import os

from svgfontembed.exceptions import FontFileTooLargeError

logger = logging.getLogger(__name__)

FONT_MIME_TYPE = "application/x-font-ttf"


class FontSource(enum.Enum):
    """Where a font file for a family came from."""

    NONE = "none"
    COMMAND_LINE = "command-line"
    SCAN = "scan"


@dataclasses.dataclass
class FontResolution:
    """Resolution state of one font family.

    Attributes:
        family: Family name as written in the document.
        file: Name of the matched font file, empty if unresolved.
        encoded_font: Base64 encoded font data, empty if unresolved.
        locked: Set once a file is assigned. A locked entry is never
            overwritten. During the scan, a match on an entry locked from the
            command line is ignored and a match on an entry locked by the
            scan itself is ambiguous.
        source: Which resolution pass assigned the file.
    """

    family: str
    file: str = ""
    encoded_font: str = ""
    locked: bool = False
    source: FontSource = FontSource.NONE

    def is_resolved(self) -> bool:
        """Check if a font file has been encoded for this family."""
        return bool(self.encoded_font)

    @property
    def data_uri(self) -> str:
        """Inline data URI of the encoded font."""
        return encode_data_uri(self.encoded_font)

    def assign(self, file: str, data: bytes, source: FontSource) -> None:
        """Record a matched font file and lock the entry."""
        self.file = file
        self.encoded_font = base64.b64encode(data).decode("ascii")
        self.locked = True
        self.source = source

    def to_font_face_css(self) -> str:
        """Generate the @font-face CSS rule for this family.

        Example:
            >>> font = FontResolution("Acme Sans")
            >>> font.assign("AcmeSans.ttf", b"ttf", FontSource.SCAN)
            >>> print(font.to_font_face_css())
            @font-face {
              font-family: 'Acme Sans';
              src: url('data:application/x-font-ttf;base64,dHRm');
            }
        """
        return f"""@font-face {{
  font-family: '{self.family}';
  src: url('{self.data_uri}');
}}"""


def normalize_family(family: str) -> str:
    """Normalize a family name for file name matching.

    All whitespace is removed and the result is case-folded.

    Example:
        >>> normalize_family("Acme  Sans")
        'acmesans'
    """
    return "".join(family.split()).casefold()


def matches(file_name: str, family: str) -> bool:
    """Check whether a font file name matches a font family.

    The normalized family name must appear as a substring of the case-folded
    file name. Extensions are not inspected, so ``AcmeSans.txt`` matches
    ``Acme Sans`` as well.

    Args:
        file_name: Base name of a candidate file.
        family: Family name from the document.

    Returns:
        True if the file name contains the family name.

    Example:
        >>> matches("AcmeSans-Regular.ttf", "Acme Sans")
        True
        >>> matches("Acme-Sans-Regular.ttf", "Acme Sans")
        False
    """
    return normalize_family(family) in file_name.casefold()


def encode_data_uri(encoded_font: str) -> str:
    """Wrap Base64 font data in a data URI."""
    return f"data:{FONT_MIME_TYPE};base64,{encoded_font}"


def read_font_file(path: str, max_size: int = 0) -> bytes:
    """Read a font file fully into memory.

    Args:
        path: Path to the font file.
        max_size: Maximum file size in bytes. 0 disables the check.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        FontFileTooLargeError: If the file exceeds max_size.
        IOError: If the file can't be read.
    """
    if max_size > 0:
        size = os.path.getsize(path)
        if size > max_size:
            raise FontFileTooLargeError(path, size, max_size)

    logger.debug(f"Reading font file: {path}")
    with open(path, "rb") as f:
        return f.read()
