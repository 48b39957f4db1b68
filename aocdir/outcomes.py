"""
Classification of the server's reply to a submitted answer.

The reply is an html page with a sentence of prose in it, not a formal API, so the
outcome is decided by looking for known phrases in that prose. The phrases are
checked in order and the first hit wins. Note that "That's the right answer" is not
a substring of "That's not the right answer", so the order only matters if the
server's wording ever changes to overlap.
"""
import enum
import logging
import re

from .exceptions import ClassificationError
from .utils import _get_soup


log = logging.getLogger(__name__)


class AnswerOutcome(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    ALREADY_SUBMITTED = "already submitted"
    RATE_LIMITED = "rate limited"

    @property
    def color(self):
        return _colors[self]


_colors = {
    AnswerOutcome.CORRECT: "green",
    AnswerOutcome.INCORRECT: "red",
    AnswerOutcome.ALREADY_SUBMITTED: "yellow",
    AnswerOutcome.RATE_LIMITED: "red",
}

PHRASES = (
    ("That's the right answer", AnswerOutcome.CORRECT),
    ("That's not the right answer", AnswerOutcome.INCORRECT),
    ("You don't seem to be solving", AnswerOutcome.ALREADY_SUBMITTED),
    ("You gave an answer too recently", AnswerOutcome.RATE_LIMITED),
)


def classify(body: str) -> AnswerOutcome:
    for phrase, outcome in PHRASES:
        if phrase in body:
            log.debug("matched %r -> %s", phrase, outcome.name)
            return outcome
    raise ClassificationError(body)


def message_text(html) -> str:
    """The prose of a submit response: the <article> text, or all text if there's none."""
    soup = _get_soup(html)
    if soup.article is None:
        return soup.get_text().strip()
    return soup.article.text


def wait_time(message: str) -> int | None:
    """Seconds left to wait, from a rate limited message like "You have 1m 30s left to wait"."""
    wait_pattern = r"You have (?:(\d+)m )?(\d+)s left to wait"
    try:
        [(minutes, seconds)] = re.findall(wait_pattern, message)
    except ValueError:
        return None
    result = int(seconds)
    if minutes:
        result += 60 * int(minutes)
    return result
