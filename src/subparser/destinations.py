"""Destinations receive the parsed plans as a JSON array."""

import sys
from pathlib import Path
from typing import Protocol, TextIO

from src.subparser.config import SubparserConfig
from src.subparser.errors import DestinationError
from src.subparser.logging import get_logger
from src.subparser.models import Plan, dump_plans

logger = get_logger(__name__)


class Destination(Protocol):
    def write(self, plans: list[Plan]) -> None: ...


class StdoutDestination:
    """Prints the plans, nothing else may be written to stdout."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def write(self, plans: list[Plan]) -> None:
        print(dump_plans(plans), file=self.stream or sys.stdout)


class FileDestination:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def write(self, plans: list[Plan]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dump_plans(plans), encoding="utf-8")
        except OSError as e:
            raise DestinationError(f"Cannot write {self.path}: {e}") from e
        logger.info("plans_written", path=str(self.path), plans=len(plans))


def build_destination(config: SubparserConfig) -> Destination:
    """File destination when config.output is set, stdout otherwise."""
    if config.output:
        return FileDestination(config.output)
    return StdoutDestination()
