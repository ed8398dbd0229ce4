"""Running external commands under a time limit.

Commands are always given as an argv list and never go through a shell.
Each child starts in its own process group so that a timeout can kill
helpers it spawned (pagers, credential helpers) along with it.
"""
from __future__ import annotations

import logging
import os
import signal
import subprocess
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT_SECONDS = 60.0

PathLike = Union[Path, str]

# Keeps git output parseable and stops it from waiting on a terminal.
GIT_ENV_OVERRIDES = {
    "GIT_PAGER": "cat",
    "GIT_TERMINAL_PROMPT": "0",
    "LC_ALL": "C",
}


def _session_kwargs() -> Dict[str, Any]:
    if os.name == "posix":
        return {"start_new_session": True}
    flag = getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", None)
    return {"creationflags": flag} if isinstance(flag, int) else {}


def _kill(proc: subprocess.Popen) -> None:
    if proc.poll() is not None:
        return
    try:
        if os.name == "posix":
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except OSError:
        proc.kill()
    try:
        proc.wait(timeout=0.2)
    except subprocess.TimeoutExpired:
        logger.debug("pid %s still running after SIGKILL", proc.pid)


def configured_timeout(cwd: Optional[PathLike] = None) -> float:
    """Return the git timeout configured for the project at ``cwd``.

    An unreadable configuration falls back to the default; the ``check``
    command reports the broken file itself.
    """
    from release_scholar.core.config import get_cached_config
    from release_scholar.core.exceptions import ConfigError

    try:
        cfg = get_cached_config(Path(cwd) if cwd is not None else None)
    except ConfigError:
        return DEFAULT_GIT_TIMEOUT_SECONDS
    return float(cfg.git_timeout_seconds)


def run_with_timeout(
    argv: Sequence[Any],
    *,
    cwd: Optional[PathLike] = None,
    timeout: Optional[float] = None,
    env: Optional[Dict[str, str]] = None,
    input: Optional[Union[str, bytes]] = None,
    text: bool = True,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    check: bool = False,
    capture_output: bool = True,
) -> subprocess.CompletedProcess:
    """Run ``argv`` and wait for it, killing it once ``timeout`` elapses.

    Args:
        argv: Program and arguments
        cwd: Working directory
        timeout: Seconds to wait; defaults to the configured git timeout
        env: Full environment for the child
        input: Data written to the child's stdin
        text: Decode stdout/stderr (False returns bytes)
        encoding: Codec used when ``text`` is set
        errors: Decoding error handler used when ``text`` is set
        check: Raise CalledProcessError on a non-zero exit status
        capture_output: Collect stdout/stderr instead of inheriting them

    Returns:
        The finished process.

    Raises:
        subprocess.TimeoutExpired: The command outlived ``timeout``.
        subprocess.CalledProcessError: ``check`` was set and the command failed.
        OSError: The program could not be started.
    """
    args: List[str] = [str(part) for part in argv]
    limit = float(timeout) if timeout is not None else configured_timeout(cwd)
    pipe = subprocess.PIPE if capture_output else None

    started = perf_counter()
    proc = subprocess.Popen(
        args,
        cwd=str(cwd) if cwd is not None else None,
        env=env,
        stdin=subprocess.PIPE if input is not None else subprocess.DEVNULL,
        stdout=pipe,
        stderr=pipe,
        text=text,
        encoding=encoding if text else None,
        errors=errors if text else None,
        **_session_kwargs(),
    )
    try:
        stdout, stderr = proc.communicate(input=input, timeout=limit)
    except subprocess.TimeoutExpired:
        _kill(proc)
        logger.warning("%s timed out after %.1fs", " ".join(args), limit)
        raise subprocess.TimeoutExpired(args, limit) from None

    logger.debug("%s exited %s in %.1fms", " ".join(args), proc.returncode, (perf_counter() - started) * 1000.0)
    result = subprocess.CompletedProcess(args, proc.returncode, stdout=stdout, stderr=stderr)
    if check:
        result.check_returncode()
    return result


def run_git_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[PathLike] = None,
    timeout: Optional[float] = None,
    text: bool = True,
    check: bool = False,
) -> subprocess.CompletedProcess:
    """Run ``git`` with a non-interactive C-locale environment.

    Text output is decoded as UTF-8, replacing undecodable bytes.
    """
    env = {**os.environ, **GIT_ENV_OVERRIDES}
    return run_with_timeout(
        cmd,
        cwd=cwd,
        timeout=timeout,
        env=env,
        text=text,
        encoding="utf-8",
        errors="replace",
        check=check,
    )


__all__ = [
    "DEFAULT_GIT_TIMEOUT_SECONDS",
    "GIT_ENV_OVERRIDES",
    "configured_timeout",
    "run_with_timeout",
    "run_git_command",
]
