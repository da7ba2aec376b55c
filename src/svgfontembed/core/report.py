import logging
import sys
from typing import TextIO

from svgfontembed.core.resolver import ResolutionTable

logger = logging.getLogger(__name__)


def format_report(table: ResolutionTable) -> str:
    """Summarize which font file is embedded for each family."""
    resolved = table.resolved()
    lines = [
        f"Found {len(resolved)} fonts to be embedded.  "
        "Using the following font files:"
    ]
    for font in sorted(resolved, key=lambda font: font.family):
        lines.append(f"{font.family}: {font.file}")
    return "\n".join(lines) + "\n"


def report_results(table: ResolutionTable, stream: TextIO | None = None) -> None:
    """Write the resolution summary to a stream, stdout by default."""
    stream = stream or sys.stdout
    stream.write(format_report(table))
    logger.debug(f"Reported {len(table)} font families")
