"""Parser selection by name."""

from enum import Enum
from typing import Protocol

from src.subparser.errors import UnknownVariantError
from src.subparser.models import Plan
from src.subparser.parsers.dsb import DSBParser
from src.subparser.parsers.website import WebsiteParser


class Parser(Protocol):
    def parse(self, content: str) -> list[Plan]: ...


class ParserKind(str, Enum):
    EFFNER = "effner"
    EFFNER_DE = "effner-de"


_PARSERS: dict[ParserKind, type[Parser]] = {
    ParserKind.EFFNER: DSBParser,
    ParserKind.EFFNER_DE: WebsiteParser,
}

DEFAULT_PARSER = ParserKind.EFFNER


def get_parser(name: str) -> Parser:
    """Instantiate the parser registered under `name`.

    Raises:
        UnknownVariantError: If no parser has that name.
    """
    try:
        kind = ParserKind(name)
    except ValueError:
        raise UnknownVariantError(
            "parser", name, [kind.value for kind in ParserKind]
        ) from None
    return _PARSERS[kind]()
