"""Field extractors for one day's fragment of the DSB export.

DOM structure of a fragment (Untis "Vertretungsplan" HTML export):
  a[name]                        day marker, name is the day ("13.10.2023")
  h2                             title ("Vertretungsplan für Freitag, 13.10.2023")
  h4                             "(Stand vom 12.10.2023 um 7:30 Uhr)"
  table.F -> th.F                informational lines, optional
  table.K -> tr.K                absent classes
    th.K                         class
    td                           periods ("1.-11.")
  table.k -> tbody.k             one row group per class
    tr.k                         one substitution, the first row also holds
      th.k[rowspan]              the class for every row of the group
      td x 0-5                   teacher, period, substitute, room, info

Class names are case sensitive: "K" is the absence table, "k" the
substitution table.
"""

from datetime import datetime

from bs4 import BeautifulSoup, Tag

from src.subparser.errors import ElementNotFoundError, FormatError
from src.subparser.models import Absence, Substitution
from src.subparser.parsers.segmenter import is_day_marker
from src.subparser.utils import node_text

# "(Stand vom " precedes the creation date in the h4 heading
CREATED_AT_OFFSET = 11
CREATED_AT_FORMAT = "%d.%m.%Y um %H:%M Uhr"

INFO_CLASS = "F"
ABSENCE_CLASS = "K"
SUBSTITUTION_CLASS = "k"

# Positional binding of the data cells of a substitution row
SUBSTITUTION_COLUMNS = ("teacher", "period", "substitute", "room", "info")


def find_date(document: BeautifulSoup) -> str:
    """Name of the day marker, verbatim; "" without a marker."""
    marker = document.find(is_day_marker)
    return marker["name"] if marker is not None else ""


def find_title(document: BeautifulSoup) -> str:
    """Normalized text of the first h2; "" without one."""
    return node_text(document.find("h2"))


def find_created_at(document: BeautifulSoup) -> datetime:
    """Parse the creation time from the first h4.

    Raises:
        FormatError: If the heading is missing, the note cannot be located
            or does not match CREATED_AT_FORMAT.
    """
    heading = document.find("h4")
    if heading is None:
        raise FormatError("Creation heading (h4) not found")

    text = node_text(heading)
    end = text.find(")")
    if len(text) < CREATED_AT_OFFSET or end < CREATED_AT_OFFSET:
        raise FormatError(f"Creation note not found in {text!r}")

    note = text[CREATED_AT_OFFSET:end]
    try:
        return datetime.strptime(note, CREATED_AT_FORMAT)
    except ValueError as e:
        raise FormatError(f"Unexpected creation time {note!r}") from e


def find_absences(document: BeautifulSoup) -> list[Absence]:
    """Read the absence table (table.K).

    Raises:
        ElementNotFoundError: If the fragment has no absence table.
    """
    table = document.find("table", class_=ABSENCE_CLASS)
    if table is None:
        raise ElementNotFoundError("Absence table (table.K) not found")

    return [
        Absence(
            class_=node_text(row.find("th", class_=ABSENCE_CLASS)),
            periods=node_text(row.find("td")),
        )
        for row in table.find_all("tr", class_=ABSENCE_CLASS)
    ]


def find_infos(document: BeautifulSoup) -> list[str]:
    """Non-empty lines of the info table (table.F); [] without one."""
    table = document.find("table", class_=INFO_CLASS)
    if table is None:
        return []

    infos = []
    for cell in table.find_all("th", class_=INFO_CLASS):
        text = node_text(cell)
        if text:
            infos.append(text)
    return infos


def _row_groups(table: Tag) -> list[tuple[str, list[Tag]]]:
    """Split the substitution table into (class, rows) groups.

    Each tbody.k is one group; its row-spanning th.k names the class once
    for all of its rows.
    """
    return [
        (
            node_text(group.find("th", class_=SUBSTITUTION_CLASS)),
            group.find_all("tr", class_=SUBSTITUTION_CLASS),
        )
        for group in table.find_all("tbody", class_=SUBSTITUTION_CLASS)
    ]


def _substitution(class_: str, row: Tag) -> Substitution:
    # Header labels vary between exports, only the position is reliable.
    # Rows of cancelled lessons usually stop after the period.
    cells = [node_text(cell) for cell in row.find_all("td")]
    return Substitution(class_=class_, **dict(zip(SUBSTITUTION_COLUMNS, cells)))


def find_substitutions(document: BeautifulSoup) -> list[Substitution]:
    """Read the substitution table (table.k) in document order.

    Raises:
        ElementNotFoundError: If the fragment has no substitution table.
    """
    table = document.find("table", class_=SUBSTITUTION_CLASS)
    if table is None:
        raise ElementNotFoundError("Substitution table (table.k) not found")

    return [
        _substitution(class_, row)
        for class_, rows in _row_groups(table)
        for row in rows
    ]
