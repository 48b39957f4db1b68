import concurrent.futures
import contextlib
import importlib.util
import logging
import os

import pebble.concurrent

from .exceptions import SolverError
from .scaffold import part_path


log = logging.getLogger(__name__)


def _solve_file(path, data):
    # load the user's partN.py as a throwaway module and call its solve
    spec = importlib.util.spec_from_file_location(f"_aocdir_{path.stem}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.solve(data)


def _process_wrapper(f, capture=False, cwd=None, **kwargs):
    # used to suppress any output from the solver, and to run it from its day directory
    prev = os.getcwd()
    with contextlib.ExitStack() as ctx:
        if capture:
            null = ctx.enter_context(open(os.devnull, "w"))
            ctx.enter_context(contextlib.redirect_stderr(null))
            ctx.enter_context(contextlib.redirect_stdout(null))
        if cwd is not None:
            os.chdir(cwd)
        try:
            return f(**kwargs)
        finally:
            os.chdir(prev)


def _timeout_wrapper(f, capture=False, timeout=None, **kwargs):
    # the solve runs in a subprocess, so that it can be reliably killed if it
    # exceeds a time limit. you can't do that with threads.
    func = pebble.concurrent.process(daemon=False, timeout=timeout)(_process_wrapper)
    return func(f, capture, **kwargs)


def coerce(val) -> str:
    """
    The server only takes strings, but solvers usually return numbers. Floats which
    are really integers (e.g. 1234.0) are sent as integers.
    """
    if val is None or val == "":
        raise SolverError(f"cowardly refusing to submit non-answer: {val!r}")
    if isinstance(val, (float, complex)) and val.imag == 0.0 and val.real.is_integer():
        log.warning("coerced %s value %r", type(val).__name__, val)
        val = int(val.real)
    return str(val)


def run_part(day_dir, part, data, timeout=60, capture=False) -> str:
    """
    Compute the answer for one part: import part<N>.py from the day directory in a
    subprocess and call its solve(data). A timeout of 0 means no time limit.
    """
    path = part_path(day_dir, part).absolute()
    if not path.is_file():
        raise SolverError(f"no solver for part {part}: {path} does not exist")
    if not timeout or timeout <= 0:
        timeout = None
    log.info("running %s (timeout=%s)", path, timeout)
    future = _timeout_wrapper(
        _solve_file,
        capture=capture,
        timeout=timeout,
        cwd=path.parent,
        path=path,
        data=data,
    )
    try:
        answer = future.result()
    except concurrent.futures.TimeoutError:
        raise SolverError(f"part {part} timed out after {timeout}s")
    except Exception as err:
        raise SolverError(f"part {part} failed: {err!r}"[:200]) from err
    return coerce(answer)
