"""Substitution plan parser for the Effner school bulletins.

Turns the concatenated daily DSBmobile export (or the effner.de page) into
one structured Plan per day.
"""

from src.subparser.models import Absence, Plan, Substitution, dump_plans
from src.subparser.parsers.dsb import DSBParser
from src.subparser.parsers.registry import get_parser
from src.subparser.parsers.website import WebsiteParser

__all__ = [
    "Absence",
    "Plan",
    "Substitution",
    "DSBParser",
    "WebsiteParser",
    "dump_plans",
    "get_parser",
]
