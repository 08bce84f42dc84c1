"""Splits one concatenated DSB export into one HTML fragment per day.

The export is a single page with every published day one after another:

  <a name="oben"></a>                       back-to-top sentinel, ignored
  <a name="13.10.2023">&nbsp;</a>           day marker
    <h2>, <h4>, table.F, table.K, table.k   that day's bulletin
  <a name="16.10.2023">&nbsp;</a>           next day marker
    ...

Fragment i runs from the start of marker i up to the start of marker i+1
(or the end of the document). Marker offsets come from the positions the
HTML tokenizer reports for each start tag, so fragments are exact slices of
the original markup and duplicate marker names split correctly.
"""

import re

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from src.subparser.errors import DocumentParseError
from src.subparser.logging import get_logger

log = get_logger(__name__)

SENTINEL_ANCHOR = "oben"

# Only html.parser records source positions for every tag
MARKUP_PARSER = "html.parser"

_NEWLINE = re.compile("\n")


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse markup, raising DocumentParseError for anything unusable."""
    if not isinstance(markup, str):
        raise DocumentParseError(
            f"Expected markup as str, got {type(markup).__name__}"
        )
    try:
        return BeautifulSoup(markup, MARKUP_PARSER)
    except ParserRejectedMarkup as e:
        raise DocumentParseError(f"Markup could not be parsed: {e}") from e


def is_day_marker(tag: Tag) -> bool:
    """True for <a name="..."> anchors other than the back-to-top sentinel."""
    return tag.name == "a" and tag.has_attr("name") and tag["name"] != SENTINEL_ANCHOR


def find_day_markers(document: BeautifulSoup) -> list[Tag]:
    """All day markers in document order."""
    return [a for a in document.find_all("a", attrs={"name": True}) if is_day_marker(a)]


def _line_offsets(markup: str) -> list[int]:
    """Absolute offset of the first character of every line."""
    return [0] + [match.end() for match in _NEWLINE.finditer(markup)]


def _start_offset(tag: Tag, line_offsets: list[int]) -> int:
    line, column = tag.sourceline, tag.sourcepos
    if line is None or column is None:
        raise DocumentParseError(f"No source position recorded for <{tag.name}>")
    return line_offsets[line - 1] + column


def split_documents(markup: str) -> list[str]:
    """Slice the markup into one fragment per day marker.

    Returns:
        Fragments in document order; an empty list when there are no markers.

    Raises:
        DocumentParseError: If the markup cannot be parsed.
    """
    document = parse_markup(markup)
    markers = find_day_markers(document)
    if not markers:
        log.info("no_day_markers")
        return []

    line_offsets = _line_offsets(markup)
    starts = [_start_offset(marker, line_offsets) for marker in markers]
    ends = starts[1:] + [len(markup)]

    fragments = [markup[start:end] for start, end in zip(starts, ends)]
    log.debug(
        "documents_split",
        markers=[marker["name"] for marker in markers],
        fragments=len(fragments),
    )
    return fragments
