"""Small helpers: argument quoting, file type guesses and HTML formatting."""

from __future__ import annotations

import html
import re
from datetime import datetime
from functools import lru_cache
from typing import Iterable, Pattern, Union

QUOTE_CHAR = '"'

_IMAGE_EXTENSIONS = frozenset(
    {
        "bmp", "gif", "ico", "jpeg", "jpg", "pbm", "pgm", "png", "ppm",
        "svg", "svgz", "tif", "tiff", "webp", "xbm", "xpm",
    }
)

_BINARY_EXTENSIONS = frozenset(
    {
        "bmp", "gif", "jpeg", "jpg", "png", "svg", "tiff", "pcx", "xcf", "xpm",
        "bz", "bz2", "rar", "tar", "z", "gz", "tgz", "zip",
    }
)

_COLOR_START = '<b><font color="red">'
_COLOR_END = "</font></b>"


def quote(name: str) -> str:
    """Wrap a single argument in quote characters."""
    return f"{QUOTE_CHAR}{name}{QUOTE_CHAR}"


def quote_list(names: Iterable[str]) -> str:
    """Quote every argument and join them with spaces."""
    separator = f"{QUOTE_CHAR} {QUOTE_CHAR}"
    return QUOTE_CHAR + separator.join(names) + QUOTE_CHAR


def _extension(file: str) -> str:
    return file.rsplit(".", 1)[-1].lower()


def is_image_file(file: str) -> bool:
    """True when the file extension names a known image format."""
    return _extension(file) in _IMAGE_EXTENSIONS


def is_binary_file(file: str) -> bool:
    """Guess from the extension whether a file holds binary data."""
    return is_image_file(file) or _extension(file) in _BINARY_EXTENSIONS


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for inclusion in HTML."""
    return html.escape(text, quote=False).replace('"', "&quot;")


def color_match(text: str, pattern: Union[str, Pattern[str], None]) -> str:
    """Escape ``text`` and wrap every match of ``pattern`` in red bold markup."""
    text = escape_html(text)
    if pattern is None:
        return text
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    if not regex.pattern:
        return text

    pos = 0
    while pos <= len(text):
        match = regex.search(text, pos)
        if match is None:
            break
        found = match.group(0)
        colored = _COLOR_START + found + _COLOR_END
        start = match.start()
        text = text[:start] + colored + text[start + len(found):]
        pos = start + len(colored)
    return text


def format_list(items: Iterable[str], name: str, in_one_line: bool = True) -> str:
    """Render ``items`` as table rows headed by ``name``."""
    items = list(items)
    if not items:
        return ""
    row = f"<tr><td class='h'>{name}</td><td>"
    joiner = ", " if in_one_line else "</td></tr>\n" + row
    return row + joiner.join(items) + "</td></tr>\n"


@lru_cache(maxsize=None)
def local_date(git_date: str) -> str:
    """Convert a git timestamp in seconds to a short local date string.

    Results are cached; call ``local_date.cache_clear()`` to reset.
    An unparsable timestamp is treated as zero.
    """
    try:
        seconds = int(str(git_date).strip())
    except ValueError:
        seconds = 0
    if seconds < 0:
        seconds = 0
    return datetime.fromtimestamp(seconds).strftime("%x %H:%M")