"""Font family extraction from raw SVG text."""

import logging
import re

logger = logging.getLogger(__name__)

# Non-greedy up to the first ";" on the same line.
FONT_FAMILY_PATTERN = re.compile(r"font-family:(.*?);")

# Only exact matches are dropped, "Sans Serif Pro" is kept.
GENERIC_FAMILIES = frozenset({"serif", "sans-serif"})

_TRIM_CHARS = " '\"`\t\n\r"


def clean_family_name(value: str) -> str:
    """Strip surrounding whitespace, quotes and backticks from a declaration value.

    Example:
        >>> clean_family_name(" 'Acme Sans'")
        'Acme Sans'
    """
    return value.strip(_TRIM_CHARS)


def extract_font_families(svg: str) -> list[str]:
    """Extract distinct font family names from ``font-family:...;`` declarations.

    The SVG is treated as text; no XML or CSS parsing takes place. Families
    are deduplicated by their exact trimmed value, so ``Acme Sans`` and
    ``acme sans`` are reported separately. Generic ``serif`` and
    ``sans-serif`` are skipped.

    Args:
        svg: Raw SVG document text.

    Returns:
        Family names in order of first appearance. Empty if none are found.

    Example:
        >>> extract_font_families("<style>font-family: 'Acme Sans';</style>")
        ['Acme Sans']
    """
    families: dict[str, None] = {}
    for match in FONT_FAMILY_PATTERN.finditer(svg):
        name = clean_family_name(match.group(1))
        if not name:
            continue
        if name in GENERIC_FAMILIES:
            logger.debug(f"Skipping generic font-family: {name}")
            continue
        families.setdefault(name, None)
    logger.debug(f"Found {len(families)} font families: {list(families)}")
    return list(families)
