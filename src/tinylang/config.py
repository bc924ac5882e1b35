"""
tinylang Configuration
======================

Front-end options. Configuration can come from:
- Default values (defined here)
- Keyword arguments when constructing CompilerOptions
- Environment variables, via CompilerOptions.from_env()

Environment variables (all optional):
    TINYLANG_MAX_FRACTION_DIGITS: Longest allowed fractional part of a
        decimal literal (default: 5)
    TINYLANG_ENCODING: Text encoding used to read source files
        (default: utf-8)
"""

from dataclasses import dataclass
import codecs
import logging
import os


logger = logging.getLogger(__name__)

DEFAULT_MAX_FRACTION_DIGITS = 5
DEFAULT_ENCODING = "utf-8"


@dataclass
class CompilerOptions:
    """
    Options shared by the lexer and the pipeline.

    Attributes:
        max_fraction_digits: Decimal literals with more fractional digits
            than this are reported (the token is still emitted)
        encoding: Encoding used by FrontEnd.run_file()
    """
    max_fraction_digits: int = DEFAULT_MAX_FRACTION_DIGITS
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_env(cls) -> "CompilerOptions":
        """
        Create CompilerOptions from environment variables.

        Invalid values are ignored and the default is kept.
        """
        options = cls()

        if digits := os.environ.get("TINYLANG_MAX_FRACTION_DIGITS"):
            try:
                value = int(digits)
            except ValueError:
                value = -1
            if value >= 0:
                options.max_fraction_digits = value
            else:
                logger.warning("ignoring invalid TINYLANG_MAX_FRACTION_DIGITS=%r", digits)

        if encoding := os.environ.get("TINYLANG_ENCODING"):
            try:
                codecs.lookup(encoding)
                options.encoding = encoding
            except LookupError:
                logger.warning("ignoring unknown TINYLANG_ENCODING=%r", encoding)

        return options
