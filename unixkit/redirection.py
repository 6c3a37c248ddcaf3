"""Point standard input and output of the shell at the files a command names."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager

from unixkit.filepaths import is_absolute_path
from unixkit.searchpath import searchpath
from unixkit.shellcmd import ShellCmd, ShellEnvironment

STDIN_FILENO = 0
STDOUT_FILENO = 1
_CREATE_MODE = 0o666


class RedirectionError(Exception):
    """Raised when a redirection file cannot be opened."""

    def __init__(self, program: str, reason: str, filename: str) -> None:
        super().__init__(f"{program}: {reason}: {filename}")
        self.program = program
        self.reason = reason
        self.filename = filename


def _flush() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, ValueError, OSError):
            pass


def resolve_target(file: str, cdpath: str) -> str:
    """Look a relative ``file`` up along ``cdpath``; otherwise keep it as given."""
    if not is_absolute_path(file):
        found = searchpath(cdpath, file)
        if found is not None:
            return found
    return file


@contextmanager
def _replace_fd(
    file: str, flags: int, target: int, env: ShellEnvironment
) -> Iterator[None]:
    path = resolve_target(file, env.cdpath)
    try:
        fd = os.open(path, flags, _CREATE_MODE)
    except OSError as error:
        reason = error.strerror or str(error)
        raise RedirectionError(env.name0, reason, file) from None
    _flush()
    try:
        saved = os.dup(target)
        try:
            os.dup2(fd, target)
        except OSError:
            os.close(saved)
            raise
    finally:
        os.close(fd)
    try:
        yield
    finally:
        _flush()
        os.dup2(saved, target)
        os.close(saved)


@contextmanager
def redirect(t: ShellCmd, env: ShellEnvironment) -> Iterator[None]:
    """Apply the output and input redirections of ``t`` for the block.

    The output file is set up first, then the input file; both are put
    back on leaving the block. An unopenable file raises RedirectionError
    with any redirection already made undone.
    """
    with ExitStack() as stack:
        if t.outfile is not None:
            mode = os.O_APPEND if t.append else os.O_TRUNC
            flags = os.O_CREAT | os.O_WRONLY | mode
            stack.enter_context(_replace_fd(t.outfile, flags, STDOUT_FILENO, env))
        if t.infile is not None:
            stack.enter_context(_replace_fd(t.infile, os.O_RDONLY, STDIN_FILENO, env))
        yield