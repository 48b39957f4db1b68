from . import cli
from . import client
from . import config
from . import environment
from . import exceptions
from . import history
from . import naming
from . import outcomes
from . import runner
from . import scaffold
from . import utils
from .client import PuzzleClient
from .config import load_config
from .environment import Environment
from .environment import resolve
from .exceptions import AocdirError
from .outcomes import AnswerOutcome
from .outcomes import classify
from .version import __version__

__all__ = [
    "AnswerOutcome",
    "AocdirError",
    "Environment",
    "PuzzleClient",
    "__version__",
    "classify",
    "cli",
    "client",
    "config",
    "environment",
    "exceptions",
    "history",
    "load_config",
    "naming",
    "outcomes",
    "resolve",
    "runner",
    "scaffold",
    "utils",
]
