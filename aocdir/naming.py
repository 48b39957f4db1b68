"""
Directory naming rules, e.g. "advent-of-code-2022" for a year root and "day-07" for
a day directory. A name "matches" a prefix when it contains it anywhere - this is
looser than a true prefix check, so "not-day-01" is a day directory as far as
matching goes. Whatever is left after removing the prefix must be the number.
"""
import logging
import re

from .exceptions import FormatError


log = logging.getLogger(__name__)

_digits = re.compile(r"\d+", flags=re.ASCII)


def matches(name: str, prefix: str) -> bool:
    return prefix in name


def extract_id(name: str, prefix: str) -> int:
    """
    Strip `prefix` out of the directory `name` and parse the rest as a non-negative
    integer. Raises `FormatError` if the prefix is absent or the rest isn't a number.
    """
    if not matches(name, prefix):
        raise FormatError(f"{name!r} does not contain {prefix!r}")
    remainder = name.replace(prefix, "", 1)
    if not _digits.fullmatch(remainder):
        raise FormatError(f"{name!r} is not {prefix!r} followed by a number")
    return int(remainder)


def dir_name(number: int, prefix: str) -> str:
    return f"{prefix}{number:02d}"


def next_day(names, prefix: str) -> int:
    """The day after the highest existing day among `names`, or day 1 if none exist."""
    highest = 0
    for name in names:
        if not matches(name, prefix):
            continue
        try:
            day = extract_id(name, prefix)
        except FormatError as err:
            log.debug("skipping %s (%s)", name, err)
            continue
        highest = max(highest, day)
    return highest + 1
