"""
Argot usage formatter.

Pure functions that turn declarations into the usage statement printed for
-h/--help and next to every binding error:

    Usage: baker bake <food> ... [options]

      -l, --loudly                     Say it loudly
      -n, --number-of-times <times>    Bake this many times
      -h, --help                       Show help information for this command

- render(): one command (signature + options).
- render_commands(): the application-level listing of registered commands.

Helper options (help, version) are always listed after the regular ones, in
the order they are given.
"""
from .arguments import Kind, specify
from .signatures import Signature
from .utils import *

_GUTTER = 4


def _label(spec):
    label = ", ".join(spec.names)
    if spec.kind is Kind.KEYED:
        label += " <%s>" % spec.metavar
    return label


def _rows(rows, /):
    """
    Align (label, text) pairs into indented two-column lines.
    """
    rows = list(rows)
    if not rows:
        return []
    width = max(len(label) for label, _ in rows) + _GUTTER
    return [
        ("  " + label.ljust(width) + text).rstrip() if text else "  " + label
        for label, text in rows
    ]


def render(command_name, signature, options=(), /, *, app=Unset, descr=Unset):
    """
    Render the usage statement of one command.

    Parameters
    - command_name: str | None
      The routed command name; None (or Unset) for a bare application.
    - signature: Signature | str
      Positional parameters, rendered <name>, [<name>] and a trailing " ...".
    - options: Iterable[Option | Flag]
      Every option the command answers to, helpers included.
    - app: str, optional
      Application name leading the usage line.
    - descr: str, optional
      Short description shown under the usage line.

    Returns
    - str: the statement, without a trailing newline.
    """
    signature = Signature.parse(signature)
    options = sorted(map(specify, options), key=lambda spec: spec.helper)

    words = ["Usage:"]
    words.extend(filter(None, (coalesce(app), coalesce(command_name), str(signature))))
    if options:
        words.append("[options]")

    lines = [" ".join(words)]
    if descr:
        lines += ["", descr]
    if options:
        lines += [""] + _rows((_label(spec), spec.descr) for spec in options)
    return "\n".join(lines)


def render_commands(app, /):
    """
    Render the application-level listing.

    app must provide name, descr, commands (Iterable[Command]) and helpers
    (Iterable[Option | Flag]), as argot.applications.Application does.
    """
    helpers = [specify(helper) for helper in app.helpers]

    words = ["Usage:", app.name, "<command>"]
    if helpers:
        words.append("[options]")

    lines = [" ".join(words)]
    if app.descr:
        lines += ["", app.descr]

    commands = list(app.commands)
    lines += ["", "Available commands:"]
    if commands:
        lines += _rows((command.name, command.descr) for command in commands)
    else:
        lines += ["  (none)"]

    if helpers:
        lines += [""] + _rows((_label(spec), spec.descr) for spec in helpers)
    return "\n".join(lines)


__all__ = (
    "render",
    "render_commands",
)
