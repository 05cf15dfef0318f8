"""Command-line handling for starting the editor or running a script.

The command line either names a model file to open in the editor or asks
for a script to be run with ``--run``. Arguments after a ``--`` delimiter
are handed to the script.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

__all__ = [
    "APP_DESCRIPTION",
    "LaunchError",
    "LaunchOptions",
    "resolve_script",
    "script_arguments",
    "parse_command_line",
]

APP_DESCRIPTION = "Upspring - the Spring RTS model editor"

_RUN_OPTIONS = ("--run", "-r")


class LaunchError(Exception):
    """Raised when the command line or the script to run is not usable."""


@dataclass
class LaunchOptions:
    """What the command line asked for."""

    app_path: str = ""
    script: Optional[str] = None
    model_file: Optional[str] = None
    remaining: List[str] = field(default_factory=list)
    show_version: bool = False
    show_help: bool = False

    @property
    def runs_script(self) -> bool:
        return self.script is not None


def resolve_script(script, app_path) -> str:
    """Path of the script to run.

    The script is looked up as given first, then relative to ``app_path``.
    """
    script = str(script)
    if Path(script).exists():
        return script
    candidate = str(Path(app_path) / script)
    if Path(candidate).exists():
        return candidate
    raise LaunchError(f"Haven't found script '{script}', last try was: '{candidate}'")


def script_arguments(script_file: str, remaining: Sequence[str]) -> List[str]:
    """Argument list for a script: the script file first, then its arguments.

    Arguments must be introduced by a ``--`` delimiter, which is dropped.
    """
    remaining = list(remaining)
    if not remaining:
        return [script_file]
    if remaining[0] != "--":
        raise LaunchError("no -- delimiter for arguments found")
    return [script_file, *remaining[1:]]


def _app_path(program: str) -> str:
    if not program:
        return ""
    path = Path(program)
    if program.endswith(("/", "\\")):
        return str(path)
    parent = str(path.parent)
    return "" if parent == "." and not program.startswith(".") else parent


def _model_file(remaining: Sequence[str]) -> Optional[str]:
    args = list(remaining)
    if args and args[0] == "--":
        args = args[1:]
    model: Optional[str] = None
    extras: List[str] = []
    for arg in args:
        if model is None and not (arg.startswith("-") and arg != "-"):
            model = arg
        else:
            extras.append(arg)
    if extras:
        raise LaunchError("The following arguments were not expected: " + " ".join(extras))
    return model


def parse_command_line(argv: Optional[Sequence[str]] = None) -> LaunchOptions:
    """Parse ``argv``, program name included; defaults to ``sys.argv``.

    Parsing stops at the first argument that is not a known option; it and
    everything after it are kept in ``remaining``.
    """
    args = list(sys.argv if argv is None else argv)
    program = args[0] if args else ""
    options = LaunchOptions(app_path=_app_path(program))
    rest = args[1:]
    i = 0
    while i < len(rest):
        arg = rest[i]
        if arg == "--version":
            options.show_version = True
        elif arg in ("-h", "--help"):
            options.show_help = True
        elif arg in _RUN_OPTIONS:
            if i + 1 >= len(rest):
                raise LaunchError(f"{arg} requires a script file")
            options.script = rest[i + 1]
            i += 1
        elif arg.startswith("--run="):
            value = arg[len("--run="):]
            if not value:
                raise LaunchError("--run requires a script file")
            options.script = value
        elif arg.startswith("-r") and not arg.startswith("--"):
            options.script = arg[2:]
        else:
            options.remaining = rest[i:]
            break
        i += 1

    if options.script is None and not (options.show_help or options.show_version):
        options.model_file = _model_file(options.remaining)
    return options