import logging
import time
import typing as t

import urllib3

from .exceptions import AocdirError
from .exceptions import MissingSessionError
from .exceptions import PuzzleLockedError
from .outcomes import AnswerOutcome
from .outcomes import classify
from .outcomes import message_text
from .utils import HttpClient
from .utils import sanitized


log = logging.getLogger(__name__)


URL_HOST = "https://adventofcode.com"
MAX_ATTEMPTS = 5
RETRY_DELAY = 1.0  # seconds between attempts while a puzzle is locked


class Submission(t.NamedTuple):
    outcome: AnswerOutcome
    message: str


class PuzzleClient:
    """
    The two conversations this tool has with the puzzle host: downloading a puzzle
    input, and posting an answer. Use it as a context manager so the connections are
    released when done:

        with PuzzleClient(session=token) as client:
            data = client.fetch_input(2022, 7)
    """

    def __init__(self, session, host=URL_HOST, http=None):
        if not session:
            raise MissingSessionError("Missing session ID")
        self.session = session
        self.host = host.rstrip("/")
        if http is None:
            http = HttpClient()
        self.http = http

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.http.close()

    def puzzle_url(self, year, day):
        return f"{self.host}/{year}/day/{day}"

    def fetch_input(self, year, day) -> str:
        """
        Download the puzzle input for year/day. A 404 means the puzzle hasn't
        unlocked yet, that is retried a few times (a second apart) before giving up
        with `PuzzleLockedError`. Anything else that isn't a 200 is an error at once.
        """
        url = self.puzzle_url(year, day) + "/input"
        token = sanitized(self.session)
        for attempt in range(1, MAX_ATTEMPTS + 1):
            log.info("getting data year=%s day=%s token=%s", year, day, token)
            response = self._request("GET", url)
            if response.status != 404:
                break
            log.info("%d/%02d is locked (attempt %d/%d)", year, day, attempt, MAX_ATTEMPTS)
            if attempt < MAX_ATTEMPTS:
                time.sleep(RETRY_DELAY)
        else:
            raise PuzzleLockedError(f"{year}/{day:02d} not available yet")
        if response.status != 200:
            log.error("got %s status code token=%s", response.status, token)
            log.error(response.data.decode(errors="replace"))
            raise AocdirError(f"HTTP {response.status} at {url}")
        return _decode(response, url)

    def submit_answer(self, year, day, part, answer) -> Submission:
        """
        Post `answer` for part 1 or 2 of year/day, exactly once, and classify the
        server's reply. An unrecognised reply raises `ClassificationError`.
        """
        url = self.puzzle_url(year, day) + "/answer"
        log.info("posting %r to %s (part %s) token=%s", answer, url, part, sanitized(self.session))
        fields = {"level": str(part), "answer": str(answer)}
        response = self._request("POST", url, fields=fields)
        if response.status != 200:
            log.error("got %s status code", response.status)
            log.error(response.data.decode(errors="replace"))
            raise AocdirError(f"HTTP {response.status} at {url}")
        message = message_text(_decode(response, url))
        outcome = classify(message)
        return Submission(outcome=outcome, message=message)

    def _request(self, method, url, fields=None):
        try:
            if method == "GET":
                return self.http.get(url, token=self.session)
            return self.http.post(url, token=self.session, fields=fields)
        except urllib3.exceptions.HTTPError as err:
            log.debug("%s %s failed", method, url, exc_info=True)
            raise AocdirError(f"{method} {url} failed: {err}") from err


def _decode(response, url):
    try:
        return response.data.decode()
    except UnicodeDecodeError as err:
        raise AocdirError(f"undecodable response at {url}: {err}") from err
