"""Parsers that turn roster exports into team records."""

from .roster import load_roster, parse_roster
from .showdown import parse_showdown_teams

__all__ = ["load_roster", "parse_roster", "parse_showdown_teams"]
