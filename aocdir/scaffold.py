import logging
from importlib.resources import files
from pathlib import Path
from string import Template

from .exceptions import ScaffoldError
from .naming import dir_name
from .naming import next_day


log = logging.getLogger(__name__)


PART_TEMPLATE = "part.py.tmpl"
LAST_DAY = 25


def load_template(name=PART_TEMPLATE, templates_dir=None) -> Template:
    # a file with the same name in the user's templates dir takes precedence
    if templates_dir is not None:
        path = Path(templates_dir) / name
        if path.is_file():
            log.debug("using template %s", path)
            return Template(path.read_text(encoding="utf-8"))
    log.debug("using packaged template %s", name)
    return Template((files("aocdir") / "templates" / name).read_text(encoding="utf-8"))


def part_path(day_dir, part) -> Path:
    return Path(day_dir) / f"part{part}.py"


def create_day(env, naming, templates_dir=None) -> Path:
    """
    Make the next day directory under the year root, with a part 1 solution stub
    rendered from the template and an empty input.txt. Returns the new directory.
    """
    root = env.year_root
    existing = [p.name for p in root.iterdir() if p.is_dir()]
    day = next_day(existing, naming.day_prefix)
    if day > LAST_DAY:
        raise ScaffoldError(f"all {LAST_DAY} days of {env.year} already exist")
    template = load_template(templates_dir=templates_dir)
    text = template.safe_substitute(year=env.year, day=day, part=1)
    day_dir = root / dir_name(day, naming.day_prefix)
    try:
        day_dir.mkdir()
    except FileExistsError:
        raise ScaffoldError(f"{day_dir} already exists")
    part_path(day_dir, 1).write_text(text, encoding="utf-8")
    (day_dir / "input.txt").touch()
    log.info("created %s", day_dir)
    return day_dir


def copy_part(day_dir) -> Path:
    """Start part 2 from a copy of part 1. Never overwrites an existing part 2."""
    src = part_path(day_dir, 1)
    dst = part_path(day_dir, 2)
    if not src.is_file():
        raise ScaffoldError(f"nothing to copy, {src} does not exist")
    if dst.exists():
        raise ScaffoldError(f"{dst} already exists")
    header, sep, rest = src.read_text(encoding="utf-8").partition("\n")
    dst.write_text(header.replace("part 1", "part 2") + sep + rest, encoding="utf-8")
    log.info("copied %s -> %s", src, dst)
    return dst
