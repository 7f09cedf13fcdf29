r"""
Argot option binder.

Binding runs in two passes over the OPTION tokens of one invocation:

1. helpers: the first token naming a helper option (help, version) stops
   binding right away; bind() returns a HelpRequested outcome and the caller
   runs the helper instead of the command body.
2. options, in input order:
   - unknown alias → UnknownOptionError (with a close-match suggestion);
   - Flag → handler() and True under every alias of the flag;
   - Option → the next token is consumed as the value (MissingValueError when
     there is none), handler(value), value under every alias of the option.
   Repeating an alias is not an error: the last write wins.

Exceptions raised by user handlers surface as DelegatedCommandError.

Quick example:
    >>> binder = OptionBinder([loudly, times])
    >>> tokens = classify(tokenize(["baker", "-l", "-n", "3"]))
    >>> binder.bind(tokens)
    {'-l': True, '--loudly': True, '-n': '3', '--number-of-times': '3'}
"""
import difflib

from .arguments import Kind, specify
from .faults import *
from .tokens import Classification, Tokens
from .utils import *


class HelpRequested:
    """
    Binding outcome: a helper option was present on the command line.

    Calling the outcome runs the helper's handler.
    """
    __slots__ = ("helper", "token")

    def __init__(self, helper, token, /):
        self.helper = helper
        self.token = token

    def __call__(self):
        return self.helper()

    def __repr__(self):
        return "help-requested(helper=%r, token=%r)" % (self.helper, self.token)


class OptionBinder:
    """
    Binds OPTION tokens against a closed set of declared options.

    Parameters
    - options: Iterable[Option | Flag]
      The command's own options (decorated wrappers are accepted too).
    - helpers: Iterable[Option | Flag]
      Short-circuiting options (implicit help, version). They take part in alias
      lookup, but never in the regular pass.

    Raises
    - TypeError: an entry is neither an option nor a flag.
    - ValueError: two entries share an alias.
    """

    def __init__(self, options=(), helpers=(), /):
        self._options = tuple(map(specify, options))
        self._helpers = tuple(map(specify, helpers))
        self._aliases = {}

        for spec in self._options + self._helpers:
            for name in spec.names:
                if name in self._aliases:
                    raise ValueError("option alias %r is declared more than once" % name)
                self._aliases[name] = spec

    options = mirror("options")
    helpers = mirror("helpers")

    def lookup(self, alias, /):
        """
        Return the option or flag answering to alias, or None.
        """
        return self._aliases.get(alias)

    def bind(self, tokens, /):
        """
        Bind every OPTION token of the sequence.

        Returns
        - HelpRequested: a helper was named (outside the value position of a
          keyed option); nothing else was bound or called.
        - dict[str, bool | str]: alias → True (flag) or the consumed value
          (keyed option), mirrored under every alias of the option.

        Side effects
        - Value tokens consumed by keyed options are reclassified OPTION.
        - Handlers are called in input order.
        """
        if not isinstance(tokens, Tokens):
            raise TypeError("bind() argument must be a token sequence")

        # a token in the value position of a keyed option is a value, never a helper
        values = set()
        for token in tokens.options():
            if token.index in values:
                continue
            spec = self._aliases.get(token.value)
            if spec and spec.helper:
                return HelpRequested(spec, token)
            if spec and spec.kind is Kind.KEYED and (following := tokens.after(token)) is not None:
                values.add(following.index)

        bound = {}
        consumed = set()
        for token in tokens.options():
            if token.index in consumed:
                continue

            if not (spec := self._aliases.get(token.value)):
                suggestions = difflib.get_close_matches(token.value, self._aliases.keys(), 5)
                try:
                    hint = "did you mean %r? you can also run with --help to see all options" % suggestions[0]
                except IndexError:
                    hint = "run with --help to see all available options"
                raise UnknownOptionError(
                    "unknown option %r at %s position" % (token.value, ordinal(token.index)),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    input=token.value,
                    index=token.index,
                    suggestions=suggestions,
                    hint=hint,
                )

            match spec.kind:
                case Kind.FLAG:
                    value = True
                    arguments = ()
                case Kind.KEYED:
                    if (following := tokens.after(token)) is None:
                        raise MissingValueError(
                            "option %r at %s position requires a value" % (token.value, ordinal(token.index)),
                            title="missing option value",
                            code=FaultCode.MISSING_VALUE,
                            input=token.value,
                            index=token.index,
                            hint="provide a value after it (e.g., %s <%s>)" % (token.value, spec.metavar),
                        )
                    following.classification = Classification.OPTION
                    consumed.add(following.index)
                    value = following.value
                    arguments = (value,)

            try:
                spec(*arguments)
            except Exception as exception:
                kind = "option" if spec.kind is Kind.KEYED else "flag"
                raise DelegatedCommandError(
                    "something occurred in %s %r at %s position" % (kind, token.value, ordinal(token.index)),
                    title="delegated %s error" % kind,
                    code=FaultCode.DELEGATED_ERROR,
                    input=token.value,
                    index=token.index,
                    hint="check additional logs for more details",
                    exception=exception,
                ) from exception

            for name in spec.names:
                bound[name] = value

        return bound


__all__ = (
    "HelpRequested",
    "OptionBinder",
)
