"""The shell's command tree and the settings it runs with."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_HOME = "/tmp"
DEFAULT_PATH = "/bin:/usr/bin:/usr/local/bin:."
DEFAULT_CDPATH = ".:.."

COMMENT_CHAR = "#"
HOME_CHAR = "~"


class CmdType(Enum):
    """The kind of a node in the command tree."""

    COMMAND = 0  # an actual command
    SEMICOLON = 1  # cmd1 ; cmd2
    AND = 2  # cmd1 && cmd2
    OR = 3  # cmd1 || cmd2
    SUBSHELL = 4  # ( cmds )
    PIPE = 5  # cmd1 | cmd2
    BACKGROUND = 6  # cmd1 &


@dataclass
class ShellCmd:
    """A node of the command tree."""

    kind: CmdType
    argv: list[str] = field(default_factory=list)
    infile: Optional[str] = None
    outfile: Optional[str] = None
    append: bool = False
    left: Optional[ShellCmd] = None
    right: Optional[ShellCmd] = None

    @property
    def argc(self) -> int:
        """The number of arguments, including the command name."""
        return len(self.argv)


def _is_terminal(stream) -> bool:
    try:
        return stream is not None and stream.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass
class ShellEnvironment:
    """HOME, PATH and CDPATH plus how the shell was started.

    HOME is used by ``cd`` with no argument and to expand a leading '~'.
    PATH is searched for commands whose names hold no '/', and CDPATH for
    relative directories given to ``cd``.
    """

    home: str = DEFAULT_HOME
    path: str = DEFAULT_PATH
    cdpath: str = DEFAULT_CDPATH
    name0: str = "myshell"
    argv0: str = "myshell"
    interactive: bool = False

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str], argv0: str
    ) -> ShellEnvironment:
        """Build the settings from ``environ``, falling back to the defaults."""
        name0 = argv0.rsplit("/", 1)[-1]
        return cls(
            home=environ.get("HOME", DEFAULT_HOME),
            path=environ.get("PATH", DEFAULT_PATH),
            cdpath=environ.get("CDPATH", DEFAULT_CDPATH),
            name0=name0,
            argv0=argv0,
            interactive=_is_terminal(sys.stdin) and _is_terminal(sys.stdout),
        )


_OPERATORS = {
    CmdType.SEMICOLON: ";",
    CmdType.AND: "&&",
    CmdType.OR: "||",
    CmdType.PIPE: "|",
    CmdType.BACKGROUND: "&",
}


def _format_redirection(t: ShellCmd) -> str:
    text = ""
    if t.infile is not None:
        text += f"< {t.infile} "
    if t.outfile is not None:
        text += (">>" if t.append else ">") + f" {t.outfile} "
    return text


def format_shellcmd(t: Optional[ShellCmd]) -> str:
    """Render a command tree in bracketed form, for debugging."""
    if t is None:
        return "[nullcmd "
    if t.kind is CmdType.COMMAND:
        body = "".join(f"{arg} " for arg in t.argv) + _format_redirection(t)
        if t.left is not None:
            body += format_shellcmd(t.left)
    elif t.kind is CmdType.SUBSHELL:
        body = f"( {format_shellcmd(t.left)}) {_format_redirection(t)}"
    else:
        body = (
            f"{format_shellcmd(t.left)}{_OPERATORS[t.kind]} "
            f"{format_shellcmd(t.right)}"
        )
    return f"[{body}]"