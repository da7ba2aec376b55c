import argparse
import logging
import sys

from svgfontembed import EmbedConfig, FontEmbedError, embed_file
from svgfontembed.storage import get_storage, split_location

logger = logging.getLogger(__name__)

DESCRIPTION = """Embed the fonts used by an SVG file as Base64 data URIs.

A font file matches a font-family when its file name contains the family name
with spaces removed, ignoring case. Without FONT arguments the font directory
and all of its subdirectories are searched for matching font files. When
several files match one family (such as different weights of the same font),
pass the one to use as a FONT argument.
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="svgfontembed",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input", metavar="INPUT", type=str, help="Input SVG file path or URL"
    )
    parser.add_argument(
        "fonts",
        metavar="FONT",
        type=str,
        nargs="*",
        help="Font files to embed, relative to the font directory.",
    )
    parser.add_argument(
        "--font-dir",
        metavar="PATH",
        type=str,
        default=None,
        help="Directory to search for font files. "
        "Default: $SVGFONTEMBED_FONT_DIR or the current directory",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="PATH",
        type=str,
        default=None,
        help="Output file. Default: INPUT with .svg replaced by .embed.svg",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="WARNING",
        help="Logging level, default WARNING",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main function to embed fonts into an SVG file."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.loglevel.upper(), "WARNING"))

    if not args.input.lower().endswith(".svg"):
        print(f"Error: Input file {args.input} does not end with a .svg extension")
        return 1
    location, key = split_location(args.input)
    if not get_storage(location).exists(key):
        print(f"Error: Could not find SVG file {args.input}")
        return 1

    try:
        config = EmbedConfig.default()
        output = embed_file(
            args.input,
            args.output,
            font_files=args.fonts,
            font_dir=args.font_dir,
            config=config,
            report=sys.stdout,
        )
    except (FontEmbedError, OSError, ValueError) as e:
        logger.debug("Font embedding failed", exc_info=True)
        print(f"Error: {e}")
        return 1

    print(f"Output saved: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
