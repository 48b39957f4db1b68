import json
import logging
import os
import sys
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from textwrap import dedent

from .exceptions import AocdirError
from .exceptions import MissingSessionError
from .utils import colored


log = logging.getLogger(__name__)


AOCDIR_CONFIG_DIR = Path(os.environ.get("AOCDIR_CONFIG_DIR", Path("~", ".config", "aocdir")))
AOCDIR_CONFIG_DIR = AOCDIR_CONFIG_DIR.expanduser()
DEFAULT_SOLVER_TIMEOUT = 60


@dataclass(frozen=True)
class NamingFormat:
    day_prefix: str = "day-"
    year_prefix: str = "advent-of-code-"


@dataclass(frozen=True)
class Config:
    naming: NamingFormat = field(default_factory=NamingFormat)
    session: str | None = field(default=None, repr=False)
    timeout: float = DEFAULT_SOLVER_TIMEOUT
    config_dir: Path = AOCDIR_CONFIG_DIR

    @property
    def templates_dir(self) -> Path:
        """User overrides for the scaffold templates live here."""
        return self.config_dir / "templates"

    def require_session(self) -> str:
        """
        The session token, or exit with a diagnostic message if none was found.
        Call this before any network I/O.
        """
        if self.session:
            return self.session
        msg = dedent(
            f"""\
            ERROR: AoC session ID is needed to get your puzzle data!
            You can find it in your browser cookies after login.
                1) Save the cookie into a text file {self.config_dir / "token"}, or
                2) Add it as "session" in {self.config_dir / "config.json"}, or
                3) Export the cookie in environment variable AOC_SESSION
            """
        )
        print(colored(msg, color="red"), file=sys.stderr)
        raise MissingSessionError("Missing session ID")


def _read_json(path):
    try:
        txt = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("no config file at %s", path)
        return {}
    try:
        data = json.loads(txt)
    except json.JSONDecodeError as err:
        raise AocdirError(f"invalid config file {path}: {err}") from err
    if not isinstance(data, dict):
        raise AocdirError(f"invalid config file {path}: expected a JSON object")
    log.debug("loaded config from %s", path)
    return data


def _find_session(config_dir, data):
    # export your session id as AOC_SESSION env var
    cookie = os.getenv("AOC_SESSION")
    if cookie:
        log.debug("session from AOC_SESSION")
        return cookie
    # or put it in config.json
    cookie = data.get("session")
    if cookie:
        log.debug("session from config.json")
        return cookie
    # or chuck it in a plaintext file at ~/.config/aocdir/token
    try:
        words = (config_dir / "token").read_text(encoding="utf-8").split()
    except FileNotFoundError:
        return None
    if words:
        log.debug("session from token file")
        return words[0]
    return None


def load_config(config_dir=None) -> Config:
    """
    Read configuration once at startup. Sources, highest precedence first:
    environment variables (AOC_SESSION, AOCDIR_DAY_PREFIX, AOCDIR_YEAR_PREFIX), then
    config.json and the plain-text token file from the config directory, then the
    built-in defaults.
    """
    if config_dir is None:
        config_dir = AOCDIR_CONFIG_DIR
    config_dir = Path(config_dir)
    data = _read_json(config_dir / "config.json")
    for key in "day_prefix", "year_prefix", "session":
        if key in data and not isinstance(data[key], str):
            raise AocdirError(f"invalid {key} in config: {data[key]!r} is not a string")
    defaults = NamingFormat()
    naming = NamingFormat(
        day_prefix=os.getenv("AOCDIR_DAY_PREFIX") or data.get("day_prefix") or defaults.day_prefix,
        year_prefix=os.getenv("AOCDIR_YEAR_PREFIX") or data.get("year_prefix") or defaults.year_prefix,
    )
    try:
        timeout = float(data.get("timeout", DEFAULT_SOLVER_TIMEOUT))
    except (TypeError, ValueError) as err:
        raise AocdirError(f"invalid timeout in config: {data['timeout']!r}") from err
    return Config(
        naming=naming,
        session=_find_session(config_dir, data),
        timeout=timeout,
        config_dir=config_dir,
    )
