import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TypedDict

from .exceptions import AocdirError
from .outcomes import AnswerOutcome
from .utils import AOC_TZ
from .utils import atomic_write_file


log = logging.getLogger(__name__)


HISTORY_FNAME = ".submissions.json"
# an answer which got one of these replies will get the same reply again
_final = {AnswerOutcome.CORRECT.value, AnswerOutcome.INCORRECT.value}


class SubmitRecord(TypedDict):
    """A previous submission made from this day directory."""

    part: int
    value: str
    when: str
    outcome: str
    message: str


def load(day_dir) -> list[SubmitRecord]:
    path = Path(day_dir) / HISTORY_FNAME
    if not path.is_file():
        return []
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as err:
        raise AocdirError(f"invalid submission history {path}: {err}") from err


def previous(day_dir, part, value) -> SubmitRecord | None:
    """
    The earlier judgement on this exact answer for this part, if the server already
    said it was right or wrong. Rate limited and already-solved replies don't count.
    """
    for result in load(day_dir):
        if result["part"] == part and result["value"] == value and result["outcome"] in _final:
            return result
    return None


def solved_parts(day_dir) -> set[int]:
    return {r["part"] for r in load(day_dir) if r["outcome"] == AnswerOutcome.CORRECT.value}


def record(day_dir, part, value, submission) -> SubmitRecord:
    path = Path(day_dir) / HISTORY_FNAME
    log.info("saving submit result for part %s to %s", part, path)
    data = load(day_dir)
    result: SubmitRecord = {
        "part": part,
        "value": value,
        "when": datetime.now(tz=AOC_TZ).isoformat(sep=" "),
        "outcome": submission.outcome.value,
        "message": submission.message,
    }
    data.append(result)
    atomic_write_file(path, json.dumps(data, indent=2))
    return result
