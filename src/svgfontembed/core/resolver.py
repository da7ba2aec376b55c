"""Font file resolution for font families used in an SVG document.

Resolution runs in two passes over a :class:`ResolutionTable`:

1. Explicit font files, as given on the command line. A matching family is
   locked to that file and nothing found later can replace it.
2. A depth-first scan of the font directory, only when the first pass left
   families unresolved. The first matching file wins; a second matching file
   for the same family is an error, since it is unclear which one to embed.
"""

import dataclasses
import logging
import os
from collections.abc import Iterable, Iterator

from svgfontembed.core.font_utils import (
    FontResolution,
    FontSource,
    matches,
    read_font_file,
)
from svgfontembed.exceptions import (
    AmbiguousFontMatchError,
    FontFileNotFoundError,
    UnresolvedFontError,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class WalkEntry:
    """One entry of a directory traversal."""

    path: str
    is_dir: bool = False
    error: OSError | None = None


def walk_files(base_dir: str) -> Iterator[WalkEntry]:
    """Walk a directory tree depth-first in lexical order.

    Unreadable directories are reported as entries with ``error`` set instead
    of aborting the walk.

    Args:
        base_dir: Root directory of the walk.

    Yields:
        WalkEntry for every directory and file below base_dir.
    """
    errors: list[OSError] = []
    for dirpath, dirnames, filenames in os.walk(base_dir, onerror=errors.append):
        while errors:
            error = errors.pop(0)
            yield WalkEntry(error.filename or dirpath, is_dir=True, error=error)
        dirnames.sort()
        yield WalkEntry(dirpath, is_dir=True)
        for filename in sorted(filenames):
            yield WalkEntry(os.path.join(dirpath, filename))
    for error in errors:
        yield WalkEntry(error.filename or base_dir, is_dir=True, error=error)


class ResolutionTable:
    """Mapping from font family to its resolution state.

    Entries are created once from the extracted families and never removed.
    """

    def __init__(self, families: Iterable[str] = ()) -> None:
        self._fonts: dict[str, FontResolution] = {}
        for family in families:
            self._fonts.setdefault(family, FontResolution(family))

    def __len__(self) -> int:
        return len(self._fonts)

    def __iter__(self) -> Iterator[FontResolution]:
        return iter(self._fonts.values())

    def __contains__(self, family: object) -> bool:
        return family in self._fonts

    def __getitem__(self, family: str) -> FontResolution:
        return self._fonts[family]

    @property
    def families(self) -> list[str]:
        return list(self._fonts)

    def resolved(self) -> list[FontResolution]:
        """Entries with encoded font data."""
        return [font for font in self if font.is_resolved()]

    def unresolved(self) -> list[FontResolution]:
        """Entries still waiting for a font file."""
        return [font for font in self if not font.is_resolved()]

    def is_fully_resolved(self) -> bool:
        """Check if every family has a font. True for an empty table."""
        return not self.unresolved()

    def check_resolved(self) -> None:
        """Raise UnresolvedFontError for the first family without a font."""
        for font in self:
            if not font.is_resolved():
                raise UnresolvedFontError(font.family)


class FontResolver:
    """Resolve families in a ResolutionTable to font files.

    Args:
        table: Table to fill in, modified in place.
        base_dir: Directory explicit font files are relative to, and the root
            of the directory scan.
        max_font_size: Maximum font file size in bytes, 0 disables the check.

    Example::

        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, "fonts").resolve(["AcmeSans-Bold.ttf"])
        table["Acme Sans"].file  # "AcmeSans-Bold.ttf"
    """

    def __init__(
        self, table: ResolutionTable, base_dir: str = ".", max_font_size: int = 0
    ) -> None:
        self.table = table
        self.base_dir = base_dir
        self.max_font_size = max_font_size

    def resolve(
        self,
        font_files: Iterable[str] = (),
        entries: Iterable[WalkEntry] | None = None,
    ) -> ResolutionTable:
        """Run both resolution passes and check the result.

        Args:
            font_files: Explicit font file names relative to base_dir.
            entries: Directory walk to scan. Defaults to walking base_dir.
                Not consumed when the explicit files already resolve every family.

        Returns:
            The resolved table.

        Raises:
            FontFileNotFoundError: If an explicit font file doesn't exist.
            AmbiguousFontMatchError: If the scan finds two files for a family.
            UnresolvedFontError: If a family has no matching font file.
        """
        self.apply_explicit_fonts(font_files)
        if self.table.is_fully_resolved():
            return self.table

        if entries is None:
            entries = walk_files(self.base_dir)
        self.scan(entries)
        self.table.check_resolved()
        return self.table

    def apply_explicit_fonts(self, font_files: Iterable[str]) -> None:
        """Resolve families from explicitly requested font files.

        A file may satisfy several families. Families resolved by an earlier
        file in the list are kept.

        Raises:
            FontFileNotFoundError: If a font file doesn't exist under base_dir.
        """
        for font_file in font_files:
            path = os.path.join(self.base_dir, font_file)
            if not os.path.isfile(path):
                raise FontFileNotFoundError(path)

            data: bytes | None = None
            for font in self.table.unresolved():
                if not matches(font_file, font.family):
                    continue
                if data is None:
                    data = read_font_file(path, self.max_font_size)
                font.assign(font_file, data, FontSource.COMMAND_LINE)
                logger.info(f"Using font file '{font_file}' for '{font.family}'")

            if not any(matches(font_file, font.family) for font in self.table):
                logger.warning(
                    f"Font file '{font_file}' does not match any font-family "
                    "in the document"
                )

    def scan(self, entries: Iterable[WalkEntry]) -> None:
        """Resolve families from a directory walk.

        Directories and entries with traversal errors are skipped. Families
        resolved from explicit files are never touched.

        Raises:
            AmbiguousFontMatchError: If a second file matches a family already
                resolved in this scan.
        """
        for entry in entries:
            if entry.error is not None:
                logger.debug(f"Skipping '{entry.path}': {entry.error}")
                continue
            if entry.is_dir:
                continue
            self._scan_file(entry.path)

    def _scan_file(self, path: str) -> None:
        file_name = os.path.basename(path)
        data: bytes | None = None
        for font in self.table:
            if not matches(file_name, font.family):
                continue
            if font.locked and font.source is FontSource.COMMAND_LINE:
                logger.debug(
                    f"Ignoring '{path}' for '{font.family}', "
                    f"already set to '{font.file}'"
                )
                continue
            if font.locked:
                raise AmbiguousFontMatchError(font.family, font.file, file_name)
            if data is None:
                data = read_font_file(path, self.max_font_size)
            font.assign(file_name, data, FontSource.SCAN)
            logger.info(f"Found font file '{path}' for '{font.family}'")
