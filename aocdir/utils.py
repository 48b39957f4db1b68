from __future__ import annotations

import logging
import os
import platform
import shutil
import time
import typing as t
from collections import deque
from functools import cache
from importlib.metadata import version
from pathlib import Path
from tempfile import NamedTemporaryFile
from zoneinfo import ZoneInfo

import bs4
import urllib3


log: logging.Logger = logging.getLogger(__name__)
AOC_TZ = ZoneInfo("America/New_York")
_v = version("advent-of-code-dir")
USER_AGENT = f"github.com/aocdir advent-of-code-dir v{_v}"
DEFAULT_TIMEOUT = urllib3.Timeout(connect=5.0, read=30.0)


class HttpClient:
    # every request to the puzzle host goes through this wrapper
    # so that we can put in user agent header, timeouts, rate-limit, etc.
    # leaving the `with` block releases the pooled connections.

    pool_manager: urllib3.PoolManager
    req_count: dict[t.Literal["GET", "POST"], int]
    _max_t = 3.0

    def __init__(self, timeout: urllib3.Timeout = DEFAULT_TIMEOUT) -> None:
        headers = {"User-Agent": USER_AGENT}
        proxy_url = os.environ.get("http_proxy") or os.environ.get("https_proxy")
        if proxy_url:
            self.pool_manager = urllib3.ProxyManager(
                proxy_url, headers=headers, timeout=timeout
            )
        else:
            self.pool_manager = urllib3.PoolManager(headers=headers, timeout=timeout)
        self.req_count = {"GET": 0, "POST": 0}
        self._cooloff = 0.16
        self._history = deque([time.time() - self._max_t] * 4, maxlen=4)

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        log.debug("closing connection pool")
        self.pool_manager.clear()

    def _limiter(self):
        now = time.time()
        t0 = self._history[0]
        if now - t0 < self._max_t:
            # made 4 requests within 3 seconds - you're past the speed limit
            # of 1 req/second and will get a delay of 160ms initially, then
            # increasing exponentially on subsequent occasions.
            msg = "you're being rate-limited - slow down on the requests! (delay=%.02fs)"
            log.warning(msg, self._cooloff)
            time.sleep(self._cooloff)
            self._cooloff *= 2  # double it for repeat offenders
            self._cooloff = min(self._cooloff, 10)
        self._history.append(now)

    def get(self, url: str, token: str) -> urllib3.BaseHTTPResponse:
        # getting puzzle inputs
        headers = self.pool_manager.headers | {"Cookie": f"session={token}"}
        self._limiter()
        resp = self.pool_manager.request("GET", url, headers=headers, retries=False)
        self.req_count["GET"] += 1
        return resp

    def post(
        self, url: str, token: str, fields: t.Mapping[str, str]
    ) -> urllib3.BaseHTTPResponse:
        # submitting answers
        headers = self.pool_manager.headers | {"Cookie": f"session={token}"}
        self._limiter()
        resp = self.pool_manager.request_encode_body(
            method="POST",
            url=url,
            fields=fields,
            headers=headers,
            encode_multipart=False,
            retries=False,
        )
        self.req_count["POST"] += 1
        return resp


def _ensure_intermediate_dirs(path):
    path.expanduser().parent.mkdir(parents=True, exist_ok=True)


def atomic_write_file(path: Path, contents_str: str) -> None:
    """
    Atomically write a string to a file by writing it to a temporary file, and then
    renaming it to the final destination name. A reader never sees a half-written
    file, and an interrupted write leaves the previous contents in place.
    """
    _ensure_intermediate_dirs(path)
    with NamedTemporaryFile("w", dir=path.parent, encoding="utf-8", delete=False) as f:
        log.debug("writing to tempfile @ %s", f.name)
        f.write(contents_str)
    log.debug("moving %s -> %s", f.name, path)
    shutil.move(f.name, path)


def sanitized(token: str) -> str:
    # for logging - never log the whole session token
    return "..." + token[-4:]


_ANSIColor = t.Literal[
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"
]
_ansi_colors = t.get_args(_ANSIColor)
if platform.system() == "Windows":
    os.system("color")  # hack - makes ANSI colors work in the windows cmd window


def colored(txt: str, color: _ANSIColor | None) -> str:
    if color is None:
        return txt
    code = _ansi_colors.index(color.casefold())
    reset = "\x1b[0m"
    return f"\x1b[{code + 30}m{txt}{reset}"


@cache
def _get_soup(html):
    return bs4.BeautifulSoup(html, "html.parser")
