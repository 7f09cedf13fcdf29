"""
Argot command layer: declare commands and bind one invocation against them.

What this module provides
- Command: wraps a Python callable into a named CLI command with
  • a positional signature ("<food> [<drink>] ..."), parsed and validated eagerly;
  • a closed set of options (keyed Option, presence-only Flag) with handlers;
  • bind(): Option Binder then Signature Matcher over one token sequence;
  • execute(): hands the bound parameters to the callback and reports success.
- Bindings: the per-invocation result (parameters + options).
- command(...): create a Command or a decorator that produces one.

Three ways to declare the same command
    # literal
    bake = Command(on_bake, name="bake", signature="<food> ...", options=[loudly])

    # functional / decorator
    @command(signature="<food> ...")
    def bake(food): ...

    # chained option declarations
    @bake.flag("-l", "--loudly", descr="Say it loudly")
    def loudly(): ...

Callback contract
- Parameters are passed as keyword arguments, hyphens turned into underscores
  ("number-of-cakes" → number_of_cakes); absent optional parameters fall back to
  the callback's own defaults, the variadic parameter is a tuple.
- Keyword-only parameters named after an option's longest alias receive its
  value when the option was given (True for flags, the string for keyed ones):
      def bake(food, *, loudly=False, number_of_times="1"): ...
- The return value decides the exit status: None or truthy → success, falsy →
  failure.
"""
import functools
import inspect
import operator
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .arguments import flag, option, specify
from .options import HelpRequested, OptionBinder
from .signatures import Signature, bind as match
from .usage import render
from .utils import *


class CommandType(type):
    """
    Metaclass providing the stable repr and read-only properties of Command.

    - __typename__ is derived from the class name (camel-case split with hyphens).
    - Every name listed in __introspectable__ becomes a mirror() property.
    - __displayable__ (if set) narrows which properties __rich_repr__ yields.
    - Concrete classes created with sealed=True refuse subclassing.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - command(name='bake', descr='Bake some food', signature=signature('<food> ...'))
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _keyword(name, /):
    return name.replace("-", "_")


def _process_strings(cls, metadata):
    """
    Normalize the identity scalars of a command.

    - name: defaults to the callback's __name__ (underscores become hyphens);
      must be a shell-friendly word ("bake", "say-hello").
    - descr: defaults to the first paragraph of the callback's docstring;
      trimmed, non-empty when provided, None when absent.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' must be a valid shell-style command name (unicodes are allowed)")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _process_callback(cls, metadata):
    """
    Check eagerly that the callback can receive what the signature binds.

    The callback must accept every parameter name as a keyword, and must be
    callable with the required ones only (optional ones need defaults there).
    """
    try:
        signature = inspect.signature(metadata["callback"])
    except (TypeError, ValueError):
        raise TypeError(f"{cls.__typename__} callback must have an inspectable signature") from None

    everything = [_keyword(parameter.name) for parameter in metadata["signature"]]
    required = [_keyword(parameter.name) for parameter in metadata["signature"] if parameter.required]

    for keywords in (everything, required):
        try:
            signature.bind(**dict.fromkeys(keywords))
        except TypeError as exception:
            raise TypeError(
                f"{cls.__typename__} callback does not match the signature {str(metadata['signature'])!r} ({exception})"
            ) from None


class Bindings(Mapping):
    """
    Values bound for one invocation.

    - parameters: name → str (or tuple[str, ...] for the variadic parameter).
    - options: alias → True (flag) or str (keyed option), under every alias.

    Lookups by key search parameters first, then options.
    """
    __slots__ = ("_parameters", "_options")

    def __init__(self, parameters=(), options=(), /):
        self._parameters = dict(parameters)
        self._options = dict(options)

    @property
    def parameters(self):
        return MappingProxyType(self._parameters)

    @property
    def options(self):
        return MappingProxyType(self._options)

    def __getitem__(self, key):
        try:
            return self._parameters[key]
        except KeyError:
            return self._options[key]

    def __iter__(self):
        yield from self._parameters
        yield from (name for name in self._options if name not in self._parameters)

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return "bindings(parameters=%r, options=%r)" % (self._parameters, self._options)


class Command(metaclass=CommandType, sealed=True):
    """
    A named command: callback + signature + options.

    Properties
    - name: str, routing name.
    - descr: str | None, one-line description (listing and usage).
    - signature: Signature, positional parameters.
    - options: tuple[Option | Flag, ...], declared options in declaration order.

    Raises (on construction)
    - TypeError/ValueError: invalid metadata or callback.
    - AmbiguousSignatureError: signature that cannot be matched unambiguously.
    - ValueError: options sharing an alias.
    """

    __introspectable__ = (
        "name",
        "descr",
        "signature",
        "options",
    )
    __displayable__ = (
        "name",
        "descr",
        "signature",
    )

    def __init__(self, callback, /, name=Unset, descr=Unset, signature="", options=()):
        if not callable(callback):
            raise TypeError(f"{type(self).__typename__} callback must be callable")
        if isinstance(options, str) or not isinstance(options, Iterable):
            raise TypeError(f"{type(self).__typename__} 'options' must be an iterable of options or flags")

        doc = inspect.getdoc(callback)
        metadata = {
            "callback": callback,
            "name": coalesce(name, getattr(callback, "__name__", "").replace("_", "-")),
            "descr": coalesce(descr, doc.split("\n\n")[0].replace("\n", " ") if doc else Unset),
            "signature": Signature.parse(signature),
            "options": tuple(map(specify, options)),
        }
        _process_strings(type(self), metadata)
        _process_callback(type(self), metadata)
        OptionBinder(metadata["options"])  # alias disjointness

        self._callback = metadata.pop("callback")
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __call__(self, *args, **kwargs):
        """
        Call the wrapped callback directly, bypassing any binding.
        """
        return self._callback(*args, **kwargs)

    def _declare(self, spec, /):
        OptionBinder(self._options + (spec,))
        self._options += (spec,)
        return spec

    def flag(self, *names, descr=Unset):
        """
        Declare a flag on this command and bind the decorated handler to it.

            @bake.flag("-l", "--loudly", descr="Say it loudly")
            def loudly(): ...

        Returns a decorator producing the Flag.
        """
        decorator = flag(*names, descr=descr)

        @rename("flag")
        def wrapper(callback, /):
            return self._declare(decorator(callback))

        return wrapper

    def option(self, *names, metavar=Unset, descr=Unset):
        """
        Declare a keyed option on this command and bind the decorated handler to it.

            @bake.option("-n", "--number-of-times", metavar="times")
            def times(value): ...

        Returns a decorator producing the Option.
        """
        decorator = option(*names, metavar=metavar, descr=descr)

        @rename("option")
        def wrapper(callback, /):
            return self._declare(decorator(callback))

        return wrapper

    def usage(self, *, app=Unset, routed=True, helpers=()):
        """
        Render this command's usage statement.

        - app: application name leading the usage line.
        - routed: include the command name (False for a default command reached
          without naming it).
        - helpers: the implicit options (help, version) answered next to the
          command's own.
        """
        return render(
            self.name if routed else None,
            self.signature,
            self._options + tuple(map(specify, helpers)),
            app=app,
            descr=self.descr,
        )

    def bind(self, tokens, /, helpers=()):
        """
        Bind one classified token sequence against this command.

        Options are bound first (keyed options may consume value tokens), then
        every token still unclassified is matched against the signature.

        Returns
        - HelpRequested: a helper option was named; nothing else was bound.
        - Bindings: parameters and options of the invocation.

        Raises
        - UnknownOptionError / MissingValueError / DelegatedCommandError: options.
        - ArityError: positional tokens do not fit the signature.
        """
        outcome = OptionBinder(self._options, helpers).bind(tokens)
        if isinstance(outcome, HelpRequested):
            return outcome
        return Bindings(match(self._signature, tokens.unclassified()), outcome)

    def execute(self, bindings, /):
        """
        Run the callback with the bound parameters.

        Signature parameters are passed as keywords. Options reach the callback
        through keyword-only parameters named after their longest alias
        (--number-of-times → number_of_times); an option absent from the
        command line leaves the callback's default in place.

        Returns True on success (None or truthy result), False otherwise.
        """
        if not isinstance(bindings, Bindings):
            raise TypeError(f"{type(self).__typename__} execute() argument must be bindings")

        kwargs = {_keyword(name): value for name, value in bindings.parameters.items()}

        keywords = {
            parameter.name for parameter in inspect.signature(self._callback).parameters.values()
            if parameter.kind is inspect.Parameter.KEYWORD_ONLY
        }
        for spec in self._options:
            keyword = _keyword(max(spec.names, key=len).lstrip("-"))
            if keyword in keywords and spec.names[0] in bindings.options:
                kwargs[keyword] = bindings.options[spec.names[0]]

        result = self._callback(**kwargs)
        return result is None or bool(result)


def command(callback=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct callback:
        cmd = command(func, name="x", signature="<a>")
    - Decorator:
        @command(name="x", signature="<a>")
        def func(a): ...
    - Bare decorator:
        @command
        def func(): ...

    Returns
    - Command | Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@command() must be applied to a callable")
        return Command(callback, *args, **kwargs)

    return wrapper(callback) if callback is not Unset else wrapper


__all__ = (
    "Bindings",
    "Command",
    "command",
)

# Remove the internal metaclass from the module namespace; it is not part of the public API.
del CommandType
