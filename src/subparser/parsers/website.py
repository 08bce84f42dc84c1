"""WebsiteParser - reads the substitution page published on effner.de.

DOM structure:
  h3                     "Vertretungen am Montag 16.10.2023", one per day
  table                  the day's substitutions, first row is the header
    tr -> td x 6         class, teacher, period, substitute, room, info

The page has no creation time, absences or infos.
"""

from bs4 import Tag

from src.subparser.logging import get_logger
from src.subparser.models import Plan, Substitution
from src.subparser.parsers.segmenter import parse_markup
from src.subparser.utils import node_text

log = get_logger(__name__)

WEBSITE_COLUMNS = ("class_", "teacher", "period", "substitute", "room", "info")


def _day_table(heading: Tag) -> Tag | None:
    """The table between this heading and the next one, if any."""
    following = heading.find_next(["h3", "table"])
    if following is None or following.name != "table":
        return None
    return following


def _substitutions(table: Tag | None) -> list[Substitution]:
    if table is None:
        return []

    substitutions = []
    for row in table.find_all("tr")[1:]:
        cells = [node_text(cell) for cell in row.find_all("td")]
        if not cells:
            continue
        substitutions.append(Substitution(**dict(zip(WEBSITE_COLUMNS, cells))))
    return substitutions


class WebsiteParser:
    """Parser for the effner.de ("effner-de") substitution page."""

    def parse(self, content: str) -> list[Plan]:
        document = parse_markup(content)

        plans = []
        for heading in document.find_all("h3"):
            title = node_text(heading)
            plans.append(
                Plan(
                    title=title,
                    date=title.split(" ")[-1],
                    substitutions=tuple(_substitutions(_day_table(heading))),
                )
            )

        log.info("plans_parsed", parser="effner-de", plans=len(plans))
        return plans
