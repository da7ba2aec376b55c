"""Runtime configuration for font embedding.

Settings can be given as constructor parameters or read from environment
variables. Constructor parameters take precedence over environment variables.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_MAX_FONT_SIZE = 50 * 1024 * 1024
DEFAULT_OUTPUT_SUFFIX = ".embed.svg"


@dataclass
class EmbedConfig:
    """Configuration for a font embedding run.

    Environment variables:
        SVGFONTEMBED_FONT_DIR: Directory to scan for font files, also the base
            path for explicitly requested fonts (default: current directory)
        SVGFONTEMBED_MAX_FONT_SIZE: Maximum size of a single font file in bytes
            (default: 52428800 = 50MB, 0 disables the limit)
        SVGFONTEMBED_OUTPUT_SUFFIX: Suffix replacing ``.svg`` in the output file
            name (default: ``.embed.svg``)

    Example:
        >>> config = EmbedConfig.default()
        >>> config = EmbedConfig(font_dir="fonts", max_font_size=0)
    """

    font_dir: str = field(default_factory=os.getcwd)
    max_font_size: int = DEFAULT_MAX_FONT_SIZE
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX

    @classmethod
    def default(cls) -> "EmbedConfig":
        """Create EmbedConfig with values from environment variables.

        Raises:
            ValueError: If SVGFONTEMBED_MAX_FONT_SIZE is not a valid integer.
        """

        def parse_env_int(key: str, default: int) -> int:
            value_str = os.environ.get(key)
            if value_str is None:
                return default

            try:
                value = int(value_str)
            except ValueError as e:
                raise ValueError(
                    f"Environment variable {key}={value_str!r} is not a valid integer"
                ) from e

            if value < 0:
                logger.warning(
                    f"Environment variable {key}={value} is negative, "
                    "treating as 0 (disabled limit)."
                )
                return 0
            return value

        return cls(
            font_dir=os.environ.get("SVGFONTEMBED_FONT_DIR") or os.getcwd(),
            max_font_size=parse_env_int(
                "SVGFONTEMBED_MAX_FONT_SIZE", DEFAULT_MAX_FONT_SIZE
            ),
            output_suffix=os.environ.get(
                "SVGFONTEMBED_OUTPUT_SUFFIX", DEFAULT_OUTPUT_SUFFIX
            ),
        )

    def output_path(self, input_path: str) -> str:
        """Derive the output file name from the input SVG file name.

        Only the trailing ``.svg`` extension is replaced.

        Example:
            >>> EmbedConfig().output_path("drawing.svg")
            'drawing.embed.svg'
        """
        root, ext = os.path.splitext(input_path)
        if ext.lower() != ".svg":
            return input_path + self.output_suffix
        return root + self.output_suffix
