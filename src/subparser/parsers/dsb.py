"""DSBParser - turns the DSBmobile export into one Plan per day.

The export concatenates every published day into one page. It is split into
day fragments first (see segmenter), then every fragment is read by the field
extractors and assembled into a Plan.

Failure policy:
  - missing substitution or absence table -> the whole parse fails
  - missing info table                    -> plan without infos
  - unreadable creation time              -> plan with created_at=None
A failure in any fragment discards the plans of all other fragments.
"""

from src.subparser.errors import FormatError
from src.subparser.logging import get_logger
from src.subparser.models import Plan
from src.subparser.parsers.extractors import (
    find_absences,
    find_created_at,
    find_date,
    find_infos,
    find_substitutions,
    find_title,
)
from src.subparser.parsers.segmenter import parse_markup, split_documents

log = get_logger(__name__)


def parse_plan(fragment: str) -> Plan:
    """Assemble the Plan of a single day fragment.

    Raises:
        ElementNotFoundError: If the absence or substitution table is missing.
        DocumentParseError: If the fragment cannot be parsed.
    """
    document = parse_markup(fragment)

    date = find_date(document)
    title = find_title(document)

    try:
        created_at = find_created_at(document)
    except FormatError as e:
        # The export is not locale-stable, a missing time must not drop the day
        log.warning("created_at_unparsed", date=date, error=str(e))
        created_at = None

    absent = find_absences(document)
    infos = find_infos(document)
    substitutions = find_substitutions(document)

    log.debug(
        "plan_parsed",
        date=date,
        absent=len(absent),
        infos=len(infos),
        substitutions=len(substitutions),
    )
    return Plan(
        title=title,
        date=date,
        created_at=created_at,
        absent=tuple(absent),
        infos=tuple(infos),
        substitutions=tuple(substitutions),
    )


class DSBParser:
    """Parser for the DSBmobile ("effner") substitution export."""

    def parse(self, content: str) -> list[Plan]:
        """Parse every day of the export.

        Args:
            content: The complete export markup.

        Returns:
            Plans in document order; an empty list if the export has no days.

        Raises:
            ParsingError: On the first fragment that cannot be parsed. No
                partial result is returned.
        """
        fragments = split_documents(content)
        plans = [parse_plan(fragment) for fragment in fragments]
        log.info("plans_parsed", parser="effner", plans=len(plans))
        return plans
