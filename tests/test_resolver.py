"""Tests for svgfontembed.core.resolver module."""

import base64
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from svgfontembed.core.font_utils import FontSource
from svgfontembed.core.resolver import (
    FontResolver,
    ResolutionTable,
    WalkEntry,
    walk_files,
)
from svgfontembed.exceptions import (
    AmbiguousFontMatchError,
    FontFileNotFoundError,
    FontFileTooLargeError,
    UnresolvedFontError,
)


class TestWalkFiles:
    """Tests for the directory walk."""

    def test_walks_recursively_in_lexical_order(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("b.ttf")
        make_font("a.ttf")
        make_font("sub/c.ttf")
        files = [
            os.path.relpath(entry.path, tmp_path)
            for entry in walk_files(str(tmp_path))
            if not entry.is_dir
        ]
        assert files == ["a.ttf", "b.ttf", os.path.join("sub", "c.ttf")]

    def test_directories_are_flagged(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("sub/c.ttf")
        dirs = [entry.path for entry in walk_files(str(tmp_path)) if entry.is_dir]
        assert dirs == [str(tmp_path), str(tmp_path / "sub")]

    def test_missing_root_yields_error_entry(self, tmp_path: Path) -> None:
        entries = list(walk_files(str(tmp_path / "missing")))
        assert len(entries) == 1
        assert entries[0].error is not None

    def test_unreadable_subdirectory_is_reported_and_skipped(
        self,
        tmp_path: Path,
        make_font: Callable[[str], Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        make_font("bad/AcmeSans-Bold.ttf")
        make_font("good/AcmeSans-Regular.ttf")
        bad_dir = str(tmp_path / "bad")
        scandir = os.scandir

        def failing_scandir(path: Any = "."):
            if os.fspath(path) == bad_dir:
                raise PermissionError(13, "Permission denied", bad_dir)
            return scandir(path)

        monkeypatch.setattr(os, "scandir", failing_scandir)
        entries = list(walk_files(str(tmp_path)))

        errors = [entry for entry in entries if entry.error is not None]
        assert [entry.path for entry in errors] == [bad_dir]
        assert isinstance(errors[0].error, PermissionError)
        files = [entry.path for entry in entries if not entry.is_dir]
        assert files == [str(tmp_path / "good" / "AcmeSans-Regular.ttf")]

        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).scan(entries)
        assert table["Acme Sans"].file == "AcmeSans-Regular.ttf"


class TestResolutionTable:
    """Tests for ResolutionTable."""

    def test_entries(self) -> None:
        table = ResolutionTable(["Alpha", "Beta", "Alpha"])
        assert len(table) == 2
        assert table.families == ["Alpha", "Beta"]
        assert "Alpha" in table
        assert table["Beta"].family == "Beta"

    def test_empty_table_is_resolved(self) -> None:
        table = ResolutionTable()
        assert table.is_fully_resolved()
        table.check_resolved()

    def test_check_resolved_names_family(self) -> None:
        table = ResolutionTable(["Alpha"])
        with pytest.raises(UnresolvedFontError, match="font-family: Alpha") as e:
            table.check_resolved()
        assert e.value.family == "Alpha"

    def test_resolved_and_unresolved(self) -> None:
        table = ResolutionTable(["Alpha", "Beta"])
        table["Alpha"].assign("Alpha.ttf", b"data", FontSource.SCAN)
        assert [font.family for font in table.resolved()] == ["Alpha"]
        assert [font.family for font in table.unresolved()] == ["Beta"]
        assert not table.is_fully_resolved()


class TestExplicitFonts:
    """Tests for resolution from explicitly requested font files."""

    def test_explicit_file_locks_family(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        path = make_font("AcmeSans-Bold.ttf")
        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).apply_explicit_fonts(["AcmeSans-Bold.ttf"])
        font = table["Acme Sans"]
        assert font.file == "AcmeSans-Bold.ttf"
        assert font.locked is True
        assert font.source is FontSource.COMMAND_LINE
        assert font.is_resolved()
        assert base64.b64decode(font.encoded_font) == path.read_bytes()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        table = ResolutionTable(["Acme Sans"])
        resolver = FontResolver(table, str(tmp_path))
        with pytest.raises(FontFileNotFoundError, match="AcmeSans.ttf"):
            resolver.apply_explicit_fonts(["AcmeSans.ttf"])

    def test_directory_is_not_a_font_file(self, tmp_path: Path) -> None:
        (tmp_path / "AcmeSans.ttf").mkdir()
        resolver = FontResolver(ResolutionTable(["Acme Sans"]), str(tmp_path))
        with pytest.raises(FontFileNotFoundError, match="AcmeSans.ttf"):
            resolver.apply_explicit_fonts(["AcmeSans.ttf"])

    def test_missing_file_is_builtin_file_not_found(self, tmp_path: Path) -> None:
        resolver = FontResolver(ResolutionTable(["Acme Sans"]), str(tmp_path))
        with pytest.raises(FileNotFoundError):
            resolver.apply_explicit_fonts(["AcmeSans.ttf"])

    def test_one_file_resolves_several_families(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSansMono.ttf")
        table = ResolutionTable(["Acme Sans", "Sans Mono"])
        FontResolver(table, str(tmp_path)).apply_explicit_fonts(["AcmeSansMono.ttf"])
        assert table["Acme Sans"].file == "AcmeSansMono.ttf"
        assert table["Sans Mono"].file == "AcmeSansMono.ttf"

    def test_first_explicit_file_wins(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans-Bold.ttf")
        make_font("AcmeSans-Regular.ttf")
        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).apply_explicit_fonts(
            ["AcmeSans-Bold.ttf", "AcmeSans-Regular.ttf"]
        )
        assert table["Acme Sans"].file == "AcmeSans-Bold.ttf"

    def test_explicit_file_in_subdirectory(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("fonts/AcmeSans.ttf")
        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).apply_explicit_fonts(["fonts/AcmeSans.ttf"])
        assert table["Acme Sans"].file == "fonts/AcmeSans.ttf"

    def test_unmatched_file_logs_warning(
        self,
        tmp_path: Path,
        make_font: Callable[[str], Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        make_font("Roboto.ttf")
        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).apply_explicit_fonts(["Roboto.ttf"])
        assert not table["Acme Sans"].is_resolved()
        assert "does not match any font-family" in caplog.text


class TestScan:
    """Tests for resolution from a directory scan."""

    def test_scan_resolves_family(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        path = make_font("sub/AcmeSans-Regular.ttf")
        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).scan(walk_files(str(tmp_path)))
        font = table["Acme Sans"]
        assert font.file == "AcmeSans-Regular.ttf"
        assert font.source is FontSource.SCAN
        assert font.locked is True
        assert font.is_resolved()
        assert base64.b64decode(font.encoded_font) == path.read_bytes()

    def test_two_matching_files_are_ambiguous(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans-Bold.ttf")
        make_font("AcmeSans-Regular.ttf")
        table = ResolutionTable(["Acme Sans"])
        resolver = FontResolver(table, str(tmp_path))
        with pytest.raises(AmbiguousFontMatchError, match="Acme Sans") as e:
            resolver.scan(walk_files(str(tmp_path)))
        assert e.value.family == "Acme Sans"
        assert e.value.files == ("AcmeSans-Bold.ttf", "AcmeSans-Regular.ttf")
        assert "AcmeSans-Bold.ttf" in str(e.value)
        assert "AcmeSans-Regular.ttf" in str(e.value)

    def test_entry_locked_by_earlier_scan_is_ambiguous(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        path = make_font("AcmeSans-Italic.ttf")
        table = ResolutionTable(["Acme Sans"])
        table["Acme Sans"].assign("AcmeSans-Regular.ttf", b"data", FontSource.SCAN)
        resolver = FontResolver(table, str(tmp_path))
        with pytest.raises(AmbiguousFontMatchError) as e:
            resolver.scan([WalkEntry(str(path))])
        assert e.value.files == ("AcmeSans-Regular.ttf", "AcmeSans-Italic.ttf")

    def test_locked_family_is_not_overwritten(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans-Bold.ttf")
        make_font("AcmeSans-Regular.ttf")
        table = ResolutionTable(["Acme Sans"])
        resolver = FontResolver(table, str(tmp_path))
        resolver.apply_explicit_fonts(["AcmeSans-Bold.ttf"])
        encoded = table["Acme Sans"].encoded_font
        resolver.scan(walk_files(str(tmp_path)))
        assert table["Acme Sans"].file == "AcmeSans-Bold.ttf"
        assert table["Acme Sans"].encoded_font == encoded

    def test_locked_family_does_not_block_other_families(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans-Bold.ttf")
        make_font("AcmeSansMono.ttf")
        table = ResolutionTable(["Acme Sans", "Sans Mono"])
        resolver = FontResolver(table, str(tmp_path))
        resolver.apply_explicit_fonts(["AcmeSans-Bold.ttf"])
        resolver.scan(walk_files(str(tmp_path)))
        assert table["Acme Sans"].file == "AcmeSans-Bold.ttf"
        assert table["Sans Mono"].file == "AcmeSansMono.ttf"

    def test_directories_and_errors_are_skipped(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        path = make_font("AcmeSans.ttf")
        entries = [
            WalkEntry(str(tmp_path / "AcmeSansDir"), is_dir=True),
            WalkEntry(str(tmp_path / "AcmeSans.broken"), error=PermissionError()),
            WalkEntry(str(path)),
        ]
        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).scan(entries)
        assert table["Acme Sans"].file == "AcmeSans.ttf"

    def test_non_font_extension_is_accepted(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans.txt")
        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).scan(walk_files(str(tmp_path)))
        assert table["Acme Sans"].file == "AcmeSans.txt"

    def test_size_limit_applies_to_scan(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans.ttf")
        table = ResolutionTable(["Acme Sans"])
        resolver = FontResolver(table, str(tmp_path), max_font_size=1)
        with pytest.raises(FontFileTooLargeError):
            resolver.scan(walk_files(str(tmp_path)))


class TestResolve:
    """Tests for the combined resolution passes."""

    def test_scan_skipped_when_explicit_fonts_suffice(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans.ttf")

        def entries():
            raise AssertionError("scan should not run")
            yield  # pragma: no cover

        table = ResolutionTable(["Acme Sans"])
        FontResolver(table, str(tmp_path)).resolve(["AcmeSans.ttf"], entries())
        assert table["Acme Sans"].file == "AcmeSans.ttf"

    def test_explicit_and_scanned_fonts_combine(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans-Bold.ttf")
        make_font("AcmeSans-Regular.ttf")
        make_font("fonts/Roboto.ttf")
        table = ResolutionTable(["Acme Sans", "Roboto"])
        FontResolver(table, str(tmp_path)).resolve(["AcmeSans-Bold.ttf"])
        assert table["Acme Sans"].file == "AcmeSans-Bold.ttf"
        assert table["Roboto"].file == "Roboto.ttf"
        assert table["Roboto"].source is FontSource.SCAN

    def test_unresolved_family_raises(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("Roboto.ttf")
        table = ResolutionTable(["Acme Sans"])
        with pytest.raises(UnresolvedFontError, match="Acme Sans"):
            FontResolver(table, str(tmp_path)).resolve()

    def test_empty_table_resolves_without_scanning(self, tmp_path: Path) -> None:
        table = ResolutionTable()
        assert FontResolver(table, str(tmp_path / "missing")).resolve() is table

    def test_case_variants_resolve_to_same_file(
        self, tmp_path: Path, make_font: Callable[[str], Path]
    ) -> None:
        make_font("AcmeSans.ttf")
        table = ResolutionTable(["Acme Sans", "acme sans"])
        FontResolver(table, str(tmp_path)).resolve()
        assert table["Acme Sans"].file == "AcmeSans.ttf"
        assert table["acme sans"].file == "AcmeSans.ttf"
