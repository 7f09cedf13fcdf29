"""
Argot application context: command registry, routing, help/version and exit codes.

Lifecycle of one run()
1. tokenize the input (sys.argv, a free-form string or a list of words),
   with the application name as the first token;
2. route: the first word names a registered command, otherwise the default
   command (if any) receives the whole input, otherwise the application-level
   helpers answer (listing, -h, -v);
3. classify, then bind options and signature through Command.bind();
4. helpers short-circuit (usage or version on stdout, exit code 0);
5. binding faults show the usage statement and the fault on stderr
   (exit code 1 in shell mode, raised otherwise);
6. the command body runs; its result decides the exit code (0 / 1).

Runtime flags
- shell: faults are printed and the process exits instead of raising.
- fancy: help, version and faults are framed in rich panels.
- colorful: headings and faults are styled (palette in __main__.__styles__).

Nothing of one invocation survives into the next: tokens, bindings and helper
options are rebuilt on every run().
"""
import difflib
import os.path
import sys
from collections import defaultdict
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import faults
from .arguments import flag
from .commands import Command, command
from .faults import *
from .options import HelpRequested, OptionBinder
from .tokens import classify, lex, tokenize
from .usage import render_commands
from .utils import *


class Application:
    """
    Explicit application context.

    Parameters
    - name: str, program name (defaults to the basename of sys.argv[0]).
    - version: str, enables -v/--version when given.
    - descr: str, one-line description for the command listing.
    - default: Command | str, command run when the first word names no command.
    - shell, fancy, colorful: runtime flags handed to every fault.
    - stdout, stderr: rich consoles for help/version and for faults/usage.
    """

    name = mirror("name")
    version = mirror("version")
    descr = mirror("descr")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(
            self,
            name=Unset,
            /,
            version=Unset,
            descr=Unset,
            default=Unset,
            *,
            shell=False,
            fancy=False,
            colorful=False,
            stdout=Unset,
            stderr=Unset
    ):
        for label, object in (("name", name), ("version", version), ("descr", descr)):
            if not isinstance(object, str | Unset):
                raise TypeError(f"application '{label}' must be a string")
            elif isinstance(object, str) and not object.strip():
                raise ValueError(f"application '{label}' cannot be empty")
        if not isinstance(default, Command | str | Unset):
            raise TypeError("application 'default' must be a command or a command name")
        for label, object in (("stdout", stdout), ("stderr", stderr)):
            if not isinstance(object, Console | Unset):
                raise TypeError(f"application '{label}' must be a rich console")

        self._name = coalesce(name, os.path.basename(sys.argv[0]) or "app").strip()
        self._version = coalesce(version and version.strip())
        self._descr = coalesce(descr and descr.strip())
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._stdout = coalesce(stdout, Console())
        self._stderr = coalesce(stderr, faults.console)
        self._commands = {}
        self._default = Unset

        if isinstance(default, Command):
            self.register(default)
        self._default = default

    def __repr__(self):
        return "application(name=%r, version=%r, commands=%r)" % (self.name, self.version, tuple(self._commands))

    @property
    def commands(self):
        """
        Registered commands, in registration order.
        """
        return tuple(self._commands.values())

    @property
    def default(self):
        """
        The default command, or None.
        """
        if isinstance(self._default, Command):
            return self._default
        if isinstance(self._default, str):
            return self._commands.get(self._default)
        return None

    @property
    def helpers(self):
        """
        Application-level helper options (version first, help last).
        """
        return self._helpers(self.listing)

    def register(self, command, /):
        """
        Add a command to the registry; names must be unique.

        Returns the command, so it can be used as a plain decorator.
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if command.name in self._commands:
            raise ValueError("application already has a command named %r" % command.name)
        self._commands[command.name] = command
        return command

    def command(self, callback=Unset, /, *args, **kwargs):
        """
        Create and register a command; same invocation modes as argot.command().

            @app.command(signature="<food> ...", descr="Bake some food")
            def bake(food): ...
        """
        if callback is not Unset:
            return self.register(command(callback, *args, **kwargs))

        @rename("command")
        def wrapper(callback, /):
            return self.register(command(callback, *args, **kwargs))

        return wrapper

    def lookup(self, name, /):
        """
        Return the command registered under name, or None.
        """
        return self._commands.get(name)

    def listing(self):
        """
        The application-level usage: registered commands and helpers.
        """
        return render_commands(self)

    def _styled(self, text, /):
        text = Text(text)
        if self.colorful:
            styles = defaultdict(str, {
                "usage-label": "bold #00E5FF",
                "placeholder": "#FF4DA6",
            } | getattr(__import__("__main__"), "__styles__", {}))
            text.highlight_regex(r"(?m)^(Usage:|Available commands:)", styles["usage-label"])
            text.highlight_regex(r"<[^<>\s]+>", styles["placeholder"])
        return text

    def _print(self, console, text, /, title=Unset):
        if self.fancy and title:
            console.print(Panel(self._styled(text), title="[ %s ]" % title.upper(), title_align="left"))
        else:
            console.print(self._styled(text))

    def _helpers(self, usage, /, taken=()):
        """
        Build the implicit helper options for one invocation.

        usage is called lazily to produce the help text. Helpers whose aliases
        are taken by the command's own options are left out.
        """
        helpers = []
        if self.version is not None:
            helpers.append(flag("-v", "--version", descr="Show the version", helper=True)(
                lambda: self._print(self._stdout, "%s version %s" % (self.name, self.version), title=self.name + " version")
            ))
        helpers.append(flag("-h", "--help", descr="Show help information for this command", helper=True)(
            lambda: self._print(self._stdout, usage(), title=self.name + " help")
        ))
        taken = set(taken)
        return tuple(helper for helper in helpers if taken.isdisjoint(helper.names))

    def _fail(self, fault, /, usage=Unset, **context):
        """
        Surface a fault with the application's runtime flags.

        Shell mode prints the usage statement (when given) and the fault on
        stderr and exits with status 1; otherwise the fault is raised.
        """
        if self.shell and usage:
            self._print(self._stderr, usage)
            self._stderr.print()
        trigger(
            fault,
            prog=self.name,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            console=self._stderr,
            app=self.name,
            **context
        )
        return 1

    def _source(self, source, /):
        if source is Unset:
            return tokenize(sys.argv)
        if isinstance(source, str):
            return tokenize([self.name, *lex(source)])
        if isinstance(source, Iterable):
            return tokenize([self.name, *source])
        raise TypeError("run() argument must be a string or an iterable of strings")

    def run(self, source=Unset, /):
        """
        Run one invocation and return its exit code.

        Parameters
        - source: Unset | str | Iterable[str]
          • Unset: sys.argv (program path first).
          • str: free-form command string, without the program name.
          • Iterable[str]: words, without the program name.

        Returns
        - int: 0 on success (or help/version), 1 when the command body reports
          failure. Binding faults exit with 1 in shell mode and are raised as
          CommandException subclasses otherwise.
        """
        tokens = self._source(source)
        first = tokens[1].value if len(tokens) > 1 else None

        if first is not None and not first.startswith("-") and (target := self.lookup(first)):
            routed = True
        elif target := self.default:
            routed = False
        elif first is None or first.startswith("-"):
            return self._run_listing(tokens)
        else:
            suggestions = difflib.get_close_matches(first, self._commands.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see available commands" % (suggestions[0], self.name)
            except IndexError:
                hint = "run '%s --help' to see available commands" % self.name
            return self._fail(
                UnknownCommandError(
                    "unknown command %r at %s position" % (first, ordinal(1)),
                    title="unknown command",
                    code=FaultCode.UNKNOWN_COMMAND,
                    input=first,
                    index=1,
                    suggestions=suggestions,
                    hint=hint,
                ),
                usage=self.listing(),
            )

        classify(tokens, routed=routed)

        def usage():
            return target.usage(app=self.name, routed=routed, helpers=helpers)

        helpers = self._helpers(usage, taken=(name for spec in target.options for name in spec.names))

        try:
            outcome = target.bind(tokens, helpers)
        except CommandException as fault:
            return self._fail(fault, usage=usage(), command=target.name)

        if isinstance(outcome, HelpRequested):
            outcome()
            return 0

        try:
            return 0 if target.execute(outcome) else 1
        except CommandException as fault:
            return self._fail(fault, command=target.name)

    def _run_listing(self, tokens, /):
        classify(tokens)
        try:
            outcome = OptionBinder((), self.helpers).bind(tokens)
        except CommandException as fault:
            return self._fail(fault, usage=self.listing())

        if isinstance(outcome, HelpRequested):
            outcome()
        else:
            self._print(self._stdout, self.listing(), title=self.name + " help")
        return 0

    def invoke(self, source=Unset, /):
        """
        run() and exit the process with its exit code.
        """
        sys.exit(self.run(source))


__all__ = (
    "Application",
)
