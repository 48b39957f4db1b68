import logging
from dataclasses import dataclass
from pathlib import Path

from .exceptions import InvalidDayError
from .exceptions import InvalidYearError
from .naming import extract_id
from .naming import matches


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Environment:
    """
    Where the user currently is. Inside a day directory both `year` and `day` are
    known, at a year root only the `year` is, and `day` is None.
    """

    year: int
    day: int | None = None
    path: Path | None = None

    @property
    def is_day(self) -> bool:
        return self.day is not None

    @property
    def year_root(self) -> Path | None:
        """The directory holding all the days of this year."""
        if self.path is None:
            return None
        return self.path.parent if self.is_day else self.path


def resolve(current_dir_name, parent_dir_name, day_fmt, year_fmt) -> Environment:
    """
    Work out the year (and day, if any) from the names of the current directory and
    its parent. Exactly two layouts are recognised:

        advent-of-code-2022/day-07   <- cwd is a day directory, parent is the year
        advent-of-code-2022          <- cwd is the year root

    A day directory which doesn't parse raises `FormatError` - that's a usage error
    and it is not recovered. Anything else raises `InvalidYearError`.
    """
    if matches(parent_dir_name, year_fmt):
        year = extract_id(parent_dir_name, year_fmt)
        day = extract_id(current_dir_name, day_fmt)
        log.debug("day directory year=%d day=%d", year, day)
        return Environment(year=year, day=day)
    if matches(current_dir_name, year_fmt):
        year = extract_id(current_dir_name, year_fmt)
        log.debug("year root year=%d", year)
        return Environment(year=year)
    raise InvalidYearError(
        f"Year directory not valid: neither {current_dir_name!r} "
        f"nor {parent_dir_name!r} contains {year_fmt!r}"
    )


def require_day(current_dir_name, day_fmt):
    if not matches(current_dir_name, day_fmt):
        raise InvalidDayError(f"Day directory not valid: {current_dir_name}")


def require_year(current_dir_name, parent_dir_name, year_fmt):
    if not (matches(current_dir_name, year_fmt) or matches(parent_dir_name, year_fmt)):
        raise InvalidYearError(f"Year directory not valid: {parent_dir_name}")


def _names(path):
    path = Path(path).absolute()
    return path, path.name, path.parent.name


def from_path(path, naming) -> Environment:
    """Resolve the `Environment` for a directory on disk, using `NamingFormat` naming."""
    path, current, parent = _names(path)
    env = resolve(current, parent, naming.day_prefix, naming.year_prefix)
    return Environment(year=env.year, day=env.day, path=path)


def day_environment(path, naming) -> Environment:
    """
    Precondition for commands that work inside one day: check the layout is
    <year root>/<day directory> before resolving anything.
    """
    path, current, parent = _names(path)
    require_day(current, naming.day_prefix)
    require_year(current, parent, naming.year_prefix)
    env = from_path(path, naming)
    if not env.is_day:
        # a day prefix that is contained in the year prefix can land here
        raise InvalidDayError(f"Day directory not valid: {current}")
    return env


def year_environment(path, naming) -> Environment:
    """Precondition for commands that work on the whole year (from the root or a day)."""
    path, current, parent = _names(path)
    require_year(current, parent, naming.year_prefix)
    return from_path(path, naming)
