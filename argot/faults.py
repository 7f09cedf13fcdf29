"""
Argot faults (user-facing errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- CommandException: base type that carries message + options and knows how to
  render itself (rich) and how to surface itself (raise or print-and-exit).
- trigger(): central entry point to surface any fault.
- AmbiguousSignatureError: declaration-time error for malformed signatures.

UX goals
- Short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The binding pipeline raises faults; the application catches them at the
  binding boundary, shows the usage statement and calls trigger(fault, **ctx).
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND
    - options (1111x)
      • UNKNOWN_OPTION, MISSING_VALUE
    - positionals (1112x)
      • TOO_MANY_ARGUMENTS, TOO_FEW_ARGUMENTS
    - delegated errors (1113x)
      • DELEGATED_ERROR

    normalize() lets the host remap codes to its own labels while the numeric
    identity stays stable.
    """
    # --- routing errors ---
    UNKNOWN_COMMAND             = 11101

    # --- option errors ---
    UNKNOWN_OPTION              = 11112
    MISSING_VALUE               = 11117

    # --- positional errors ---
    TOO_MANY_ARGUMENTS          = 11121
    TOO_FEW_ARGUMENTS           = 11125

    # --- delegated errors ---
    DELEGATED_ERROR             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base class of every per-invocation error.

    Options (all optional, merged later through __replace__)
    - code: FaultCode shown in the header.
    - title: short title shown in the header.
    - hint: one actionable sentence.
    - prog: program label for the header (overridden by __main__.__prog__).
    - shell/fancy/colorful: runtime flags from the application.
    - console: rich Console printing the fault in shell mode (stderr by default).
    Anything else (input, index, expected, got, ...) is kept as context.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message or ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "argot")), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "error", styler("code")),
            " | ",
            text(str(self.options.get("title", "error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ArityError(CommandException): ...
class UnknownOptionError(CommandException): ...
class MissingValueError(CommandException): ...
class UnknownCommandError(CommandException): ...
class DelegatedCommandError(CommandException): ...


class AmbiguousSignatureError(ValueError):
    """
    Raised while declaring a command whose signature cannot be matched
    unambiguously (several variadic markers, optional before required, ...).
    """


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console and the process exits;
      otherwise the (merged) exception is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "ArityError",
    "UnknownOptionError",
    "MissingValueError",
    "UnknownCommandError",
    "DelegatedCommandError",
    "AmbiguousSignatureError",
    "trigger",
)
