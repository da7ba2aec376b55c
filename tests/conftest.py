import logging
from collections.abc import Callable
from pathlib import Path

import pytest

logger = logging.getLogger(__name__)

ACME_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg"><defs>'
    "<style>text { font-family: 'Acme Sans'; }</style>"
    '</defs><text>Hello</text></svg>'
)


def fake_font_bytes(name: str) -> bytes:
    """Distinct fake font payload per file name."""
    return b"\x00\x01\x00\x00FAKE:" + name.encode("utf-8")


@pytest.fixture
def make_font(tmp_path: Path) -> Callable[[str], Path]:
    """Create a fake font file under tmp_path and return its path."""

    def _make_font(relpath: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(fake_font_bytes(path.name))
        return path

    return _make_font


@pytest.fixture
def acme_svg() -> str:
    return ACME_SVG
