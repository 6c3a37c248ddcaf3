"""Run command trees: built-ins, external programs, subshells, pipes and jobs."""

from __future__ import annotations

import contextlib
import os
import signal
import subprocess
import sys
import time
from collections.abc import Callable
from dataclasses import replace
from enum import Enum
from typing import NoReturn, Optional

from unixkit.filepaths import file_exists, get_filename, is_absolute_path
from unixkit.intset import IntSet
from unixkit.redirection import RedirectionError, redirect
from unixkit.searchpath import searchpath
from unixkit.shellcmd import CmdType, ShellCmd, ShellEnvironment
from unixkit.simplemap import SimpleMap

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class Command(Enum):
    """The built-in commands, and EXECUTE for everything else."""

    EXECUTE = 0
    CD = 1
    EXIT = 2
    TIME = 3


class ShellExit(Exception):
    """Raised by the ``exit`` built-in; carries the status to exit with."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


_PARSER = SimpleMap()
for _name, _command in (("cd", Command.CD), ("exit", Command.EXIT), ("time", Command.TIME)):
    _PARSER.insert(_name, _command)


def parse_cmd(command: str) -> Command:
    """Map a command name to its built-in, or Command.EXECUTE."""
    return _PARSER.get(command, Command.EXECUTE)


def _flush() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, ValueError, OSError):
            pass


def _report(message: str) -> None:
    sys.stderr.write(message)
    sys.stderr.flush()


def _wait(pid: int) -> int:
    _, status = os.waitpid(pid, 0)
    return os.WEXITSTATUS(status) if os.WIFEXITED(status) else EXIT_FAILURE


def _exit_on_term(signum, frame) -> NoReturn:
    raise SystemExit(EXIT_SUCCESS)


def _set_handler(signum: int, handler) -> None:
    with contextlib.suppress(ValueError):
        signal.signal(signum, handler)


class Executor:
    """Walks a command tree and runs it, remembering the last exit status."""

    def __init__(self, env: Optional[ShellEnvironment] = None) -> None:
        if env is None:
            argv0 = sys.argv[0] if sys.argv and sys.argv[0] else "myshell"
            env = ShellEnvironment.from_environ(os.environ, argv0)
        self.env = env
        self.exitstatus = EXIT_SUCCESS
        self.background = IntSet()

    def execute(self, t: Optional[ShellCmd]) -> int:
        """Run ``t`` and return its exit status."""
        if t is None:
            return self.exitstatus
        kind = t.kind
        if kind is CmdType.COMMAND:
            try:
                with redirect(t, self.env):
                    self.exitstatus = self._run_command(t)
            except RedirectionError as error:
                _report(str(error))
                return EXIT_FAILURE
        elif kind is CmdType.SEMICOLON:
            self.exitstatus = self.execute(t.left)
            self.exitstatus = self.execute(t.right)
        elif kind is CmdType.AND:
            self.exitstatus = self.execute(t.left)
            if self.exitstatus == EXIT_SUCCESS:
                self.execute(t.right)
        elif kind is CmdType.OR:
            self.exitstatus = self.execute(t.left)
            if self.exitstatus != EXIT_SUCCESS:
                self.execute(t.right)
        elif kind is CmdType.SUBSHELL:
            try:
                with redirect(t, self.env):
                    self.exitstatus = self.run_subshell(t)
            except RedirectionError as error:
                _report(str(error))
                return EXIT_FAILURE
        elif kind is CmdType.PIPE:
            self.exitstatus = self.run_pipeline(t)
        elif kind is CmdType.BACKGROUND:
            self.exitstatus = self.run_background(t.left)
            self.exitstatus = self.execute(t.right)
        return self.exitstatus

    def _run_command(self, t: ShellCmd) -> int:
        if not t.argv:
            return EXIT_SUCCESS
        command = parse_cmd(t.argv[0])
        if command is Command.CD:
            return self.run_cd(t)
        if command is Command.EXIT:
            self.terminate_background()
            self.run_exit(t)
        if command is Command.TIME:
            return self.run_time(t)
        return self.run_external(t)

    def run_cd(self, t: ShellCmd) -> int:
        """Change directory to the argument, looked up along CDPATH, or HOME."""
        original = t.argv[1] if t.argc > 1 else ""
        if t.argc < 2:
            target = self.env.home
        else:
            target = t.argv[1]
            if not is_absolute_path(target):
                found = searchpath(self.env.cdpath, target)
                if found is not None:
                    target = found
        try:
            os.chdir(target)
        except OSError as error:
            _report(f"{t.argv[0]}: {error.strerror or error}: {original}")
            return EXIT_FAILURE
        return EXIT_SUCCESS

    def run_exit(self, t: ShellCmd) -> NoReturn:
        """Leave the shell with status "0" or "1" if given, else the last status."""
        status = self.exitstatus
        if t.argc > 1:
            if t.argv[1] == "0":
                status = EXIT_SUCCESS
            elif t.argv[1] == "1":
                status = EXIT_FAILURE
        raise ShellExit(status)

    def run_time(self, t: ShellCmd) -> int:
        """Run the rest of the command, reporting the elapsed milliseconds."""
        if t.argc == 1 and t.left is None:
            _report("\n 0 msec\n")
            return EXIT_SUCCESS
        start = time.monotonic_ns()
        status = EXIT_SUCCESS
        if t.argc > 1:
            status = self.execute(replace(t, argv=t.argv[1:]))
        elif t.left is not None:
            status = self.execute(t.left)
        elapsed = (time.monotonic_ns() - start) // 1_000_000
        _report(f"\n {elapsed} msec\n")
        return status

    def run_external(self, t: ShellCmd) -> int:
        """Run a program, searching PATH for names without '/'.

        A program that cannot be started is tried as a shell script.
        """
        name = t.argv[0]
        filepath = name
        if "/" not in name:
            found = searchpath(self.env.path, name)
            filepath = found if found is not None else f"./{name}"
        argv = [get_filename(filepath), *t.argv[1:]]
        _flush()
        try:
            completed = subprocess.run(argv, executable=filepath, check=False)
        except OSError as error:
            message = os.strerror(error.errno) if error.errno else str(error)
            status = self.run_script(t)
            if status == EXIT_FAILURE:
                _report(f"{self.env.name0}: {message}: {name}")
            return status
        return completed.returncode if completed.returncode >= 0 else EXIT_FAILURE

    def run_script(self, t: ShellCmd) -> int:
        """Feed an existing ``.sh`` file to a new shell on its standard input."""
        script = t.argv[0]
        if not file_exists(script) or not script.endswith(".sh"):
            return EXIT_FAILURE
        return self.execute(ShellCmd(CmdType.COMMAND, [self.env.argv0], infile=script))

    def _fork(self, action: Callable[[], int]) -> int:
        _flush()
        pid = os.fork()
        if pid == 0:
            status = EXIT_FAILURE
            try:
                status = action()
            except ShellExit as error:
                status = error.status
            except SystemExit as error:
                status = error.code if isinstance(error.code, int) else EXIT_FAILURE
            finally:
                _flush()
                os._exit(status)
        return pid

    def run_subshell(self, t: ShellCmd) -> int:
        """Run the enclosed commands in a child process."""
        return _wait(self._fork(lambda: self.execute(t.left)))

    def run_pipeline(self, t: ShellCmd) -> int:
        """Run the left command into a pipe, then the right command from it.

        The right command only runs if the left one succeeded.
        """
        read_end, write_end = os.pipe()

        def producer() -> int:
            os.close(read_end)
            os.dup2(write_end, 1)
            os.close(write_end)
            return self.execute(t.left)

        pid = self._fork(producer)
        os.close(write_end)
        if _wait(pid) != EXIT_SUCCESS:
            os.close(read_end)
            return EXIT_FAILURE

        def consumer() -> int:
            os.dup2(read_end, 0)
            os.close(read_end)
            return self.execute(t.right)

        pid = self._fork(consumer)
        os.close(read_end)
        return _wait(pid)

    def _background_child(self, t: Optional[ShellCmd]) -> int:
        _set_handler(signal.SIGTERM, _exit_on_term)
        _set_handler(signal.SIGCHLD, signal.SIG_DFL)
        signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGCHLD})
        self.background.clear()
        return self.execute(t) if t is not None else EXIT_SUCCESS

    def _on_sigchld(self, signum, frame) -> None:
        self.reap_background()

    def run_background(self, t: Optional[ShellCmd]) -> int:
        """Start ``t`` in a child process without waiting for it."""
        _set_handler(signal.SIGCHLD, self._on_sigchld)
        signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGCHLD})
        try:
            pid = self._fork(lambda: self._background_child(t))
            self.background.add(pid)
        finally:
            signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGCHLD})
        return EXIT_SUCCESS

    def reap_background(self) -> dict[int, int]:
        """Collect finished background jobs and report each one.

        Returns a mapping of process id to exit status, or to the negated
        signal number for jobs killed by a signal.
        """
        reaped: dict[int, int] = {}
        for pid in list(self.background):
            try:
                done, status = os.waitpid(pid, os.WNOHANG)
            except ChildProcessError:
                self.background.remove(pid)
                continue
            if done == 0:
                continue
            self.background.remove(pid)
            if os.WIFSIGNALED(status):
                signum = os.WTERMSIG(status)
                print(f"Child {pid} killed by signal {signum}", flush=True)
                reaped[pid] = -signum
            else:
                code = os.WEXITSTATUS(status) if os.WIFEXITED(status) else EXIT_FAILURE
                print(f"Child {pid} exited with status {code}", flush=True)
                reaped[pid] = code
        if not self.background:
            _set_handler(signal.SIGCHLD, signal.SIG_DFL)
        return reaped

    def terminate_background(self) -> None:
        """Ask every background job to stop and forget them."""
        pids = list(self.background)
        self.background.clear()
        _set_handler(signal.SIGCHLD, signal.SIG_DFL)
        for pid in pids:
            with contextlib.suppress(ProcessLookupError):
                os.kill(pid, signal.SIGTERM)