import argparse
import logging
import sys
import webbrowser
from importlib.metadata import version
from pathlib import Path

from . import history
from .client import PuzzleClient
from .config import load_config
from .environment import day_environment
from .environment import year_environment
from .exceptions import AocdirError
from .outcomes import AnswerOutcome
from .outcomes import wait_time
from .runner import run_part
from .scaffold import copy_part
from .scaffold import create_day
from .utils import atomic_write_file
from .utils import colored


log = logging.getLogger(__name__)


def do_input(args, config, cwd):
    """Fetch this day's puzzle input into input.txt."""
    env = day_environment(cwd, config.naming)
    path = env.path / "input.txt"
    if not args.force and path.is_file() and path.stat().st_size:
        print(f"{path} already has puzzle input, use --force to fetch it again")
        return
    session = config.require_session()
    with PuzzleClient(session=session) as client:
        data = client.fetch_input(env.year, env.day)
    atomic_write_file(path, data)
    print(f"saved {env.year}/{env.day:02d} input to {path}")


def do_submit(args, config, cwd):
    """Submit an answer for this day, computing it with the part's solve() if not given."""
    env = day_environment(cwd, config.naming)
    part = args.part
    if part is None:
        # guess part 1 or part 2, based on whether part 1 is already solved or not
        part = 2 if 1 in history.solved_parts(env.path) else 1
        log.info("submitting for part %d", part)
    session = config.require_session()
    if args.answer is None:
        input_path = env.path / "input.txt"
        if not input_path.is_file() or not input_path.stat().st_size:
            raise AocdirError(f"no puzzle input in {input_path}, run 'aocdir input' first")
        data = input_path.read_text(encoding="utf-8")
        answer = run_part(env.path, part, data, timeout=config.timeout)
    else:
        answer = args.answer.strip()
    if not answer:
        raise AocdirError(f"cowardly refusing to submit non-answer: {answer!r}")
    prev = history.previous(env.path, part, answer)
    if prev is not None:
        print(
            "aocdir will not submit that answer again. "
            f"At {prev['when']} you've previously submitted "
            f"{answer} and the server responded with:"
        )
        print(colored(prev["message"], AnswerOutcome(prev["outcome"]).color))
        return
    with PuzzleClient(session=session) as client:
        submission = client.submit_answer(env.year, env.day, part, answer)
        url = client.puzzle_url(env.year, env.day)
    history.record(env.path, part, answer, submission)
    print(colored(submission.message, submission.outcome.color))
    if submission.outcome is AnswerOutcome.RATE_LIMITED:
        seconds = wait_time(submission.message)
        if seconds is not None:
            print(f"try again in {seconds}s")
    elif submission.outcome is AnswerOutcome.CORRECT and part == 1 and args.reopen:
        # So you can read part 2 on the website...
        log.info("reopening to %s#part2", url)
        webbrowser.open(url + "#part2")


def do_day(args, config, cwd):
    """Create the next day directory from the template, up to day 25."""
    env = year_environment(cwd, config.naming)
    day_dir = create_day(env, config.naming, templates_dir=config.templates_dir)
    print(f"created {day_dir}")


def do_part(args, config, cwd):
    """Copy this day's part 1 to part 2."""
    env = day_environment(cwd, config.naming)
    dst = copy_part(env.path)
    print(f"created {dst}")


_commands = {
    "input": do_input,
    "submit": do_submit,
    "day": do_day,
    "part": do_part,
}


def main():
    """
    Scaffold, fetch inputs for, and submit answers to Advent of Code puzzles from an
    advent-of-code-<year>/day-<NN> directory layout.
    """
    parser = argparse.ArgumentParser(
        prog="aocdir",
        description=f"Advent of Code directory tool v{version('advent-of-code-dir')}",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s v{version('advent-of-code-dir')}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        help="Increased logging (-v INFO, -vv DEBUG). Default level is logging.WARNING.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)
    sub = subparsers.add_parser("input", help=do_input.__doc__)
    sub.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="fetch again even if input.txt already has data",
    )
    sub = subparsers.add_parser("submit", help=do_submit.__doc__)
    sub.add_argument(
        "answer",
        nargs="?",
        help="the answer (default: run solve() from part<N>.py on input.txt)",
    )
    sub.add_argument(
        "-p",
        "--part",
        type=int,
        choices=(1, 2),
        help="1 or 2 (default: 2 if part 1 was solved, otherwise 1)",
    )
    sub.add_argument(
        "-r",
        "--reopen",
        action="store_true",
        help="open part 2 in the browser after a correct part 1",
    )
    subparsers.add_parser("day", help=do_day.__doc__)
    subparsers.add_parser("part", help=do_part.__doc__)
    args = parser.parse_args()

    if args.verbose is None:
        log_level = logging.WARNING
    elif args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG
    logging.basicConfig(level=log_level)
    log.debug("called with %r", args)

    try:
        config = load_config()
        _commands[args.command](args, config, Path.cwd())
    except AocdirError as err:
        log.debug("%s failed", args.command, exc_info=True)
        sys.exit(colored(f"error: {err}", "red"))
