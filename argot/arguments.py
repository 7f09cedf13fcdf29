r"""
Argot option specifications and decorators.

Overview
- Specs
  • Option: keyed option with one or more aliases (e.g., -n/--number-of-times);
    consumes exactly one value token, rendered as "<metavar>" in usage.
  • Flag: presence-only switch (no payload), e.g., -l/--loudly.

- Decorators
  • @option(...): build and bind an Option to a handler function.
  • @flag(...): build and bind a Flag to a handler function.
  Each decorator returns a configured spec whose __call__ forwards to the bound handler.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes selected
    fields via read-only properties declared in __introspectable__/__displayable__.

Metadata (sanitized on construction)
- names: Iterable[str] validated as shell-style option names; duplicates rejected.
  Kept in declaration order with short aliases first.
- descr: Unset | str (usage text), non-empty when provided.
- metavar (Option only): Unset | str, the value label shown in usage (default "value").
- helper: bool, marks a short-circuiting option (help, version): when present on the
  command line, the helper handler runs instead of the command body.

Validation highlights
- Names must match r"-[^\W\d_]" (short) or r"--[^\W\d_](-?[^\W_]+)*" (long) and be
  unique within a spec. Single-dash long names are rejected: the tokenizer expands
  "-abc" into "-a -b -c", so they could never be matched.
- descr/metavar strings are trimmed; empty strings are rejected.

Quick example:
    >>> from argot.arguments import option, flag
    >>> @option("-n", "--number-of-times", metavar="times", descr="Bake this many times")
    >>> def on_times(value): ...
    ...
    >>> @flag("-l", "--loudly", descr="Say it loudly")
    >>> def on_loudly(): ...
    ...

Public API
- Types: Kind
- Classes: Option, Flag
- Decorators: option, flag
"""
import enum
import functools
import operator
import re
from types import MethodType

from .utils import *


class Kind(enum.Enum):
    """
    How an option consumes input.

    - FLAG: presence only, the bound value is True.
    - KEYED: the next token is the value.
    """
    FLAG = "flag"
    KEYED = "keyed"


class ArgumentType(type):
    """
    Metaclass that turns specs into callable, introspectable descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Seal the concrete spec classes against subclassing to keep semantics
      predictable.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
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
            Return a concise, stable representation with key metadata.

            Example
            - flag(names=('-l', '--loudly'), descr='Say it loudly', helper=False)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by Option and Flag.

    - names: required, each a valid shell-style option name, no duplicates.
      Stored as a tuple: short aliases first, declaration order otherwise.
    - descr: optional usage text; Unset becomes None, strings are trimmed and
      must not be empty.

    Raises
    - TypeError: missing names, non-string names, non-string descr.
    - ValueError: empty, malformed or duplicate names, empty descr.
    """
    names = []
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif not re.fullmatch(r"-[^\W\d_]|--[^\W\d_](-?[^\W_]+)*", name):
            raise ValueError(
                f"{cls.__typename__} names must be valid shell-style option names "
                f"(a dash and one letter, or two dashes and a word; unicodes are allowed)"
            )
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)

    metadata["names"] = tuple(sorted(names, key=lambda name: name.startswith("--")))

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_keyed_metadata(cls, metadata, /):
    """
    Internal: validate the value label of keyed options.

    metavar must be Unset or a non-empty word after trimming; Unset defaults to
    "value". Surrounding angle brackets are accepted and dropped, usage adds
    them back.
    """
    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip().removeprefix("<").removesuffix(">").strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    elif isinstance(metavar, str) and re.search(r"\s", metavar):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot contain whitespaces")
    metadata["metavar"] = coalesce(metavar, "value")


class Option(metaclass=ArgumentType, sealed=True):
    """
    Keyed option specification.

    An Option names a value that follows it on the command line
    (-n 3, --number-of-times 3). The handler receives the raw value string.

    Properties
    - names: tuple[str, ...], aliases, short ones first.
    - metavar: str, value label rendered as "<metavar>" in usage.
    - descr: str | None, usage text.
    - helper: bool, short-circuits binding when present.
    - kind: Kind.KEYED
    """

    __introspectable__ = (
        "names",
        "metavar",
        "descr",
        "helper",
    )
    __displayable__ = (
        "names",
        "metavar",
        "descr",
    )

    kind = Kind.KEYED

    def __init__(self, *names, metavar=Unset, descr=Unset, helper=False):
        metadata = {
            "names": names,
            "metavar": metavar,
            "descr": descr,
            "helper": bool(helper),
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_keyed_metadata(type(self), metadata)

        self._callback = Unset  # Bound by decorators/api later.
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __call__(self, value, /):
        """
        Forward the consumed value to the bound handler (no-op when unbound).
        """
        if self._callback is Unset:
            return
        return self._callback(value)

    def __option__(self):
        """
        Introspection hook: identify this spec as an Option.
        """
        return self


class Flag(metaclass=ArgumentType, sealed=True):
    """
    Presence-only option specification.

    A Flag carries no payload: its presence on the command line is the signal,
    and its handler is called with no arguments.

    Properties
    - names: tuple[str, ...], aliases, short ones first.
    - descr: str | None, usage text.
    - helper: bool, short-circuits binding when present.
    - kind: Kind.FLAG
    """

    __introspectable__ = (
        "names",
        "descr",
        "helper",
    )

    kind = Kind.FLAG

    def __init__(self, *names, descr=Unset, helper=False):
        metadata = {
            "names": names,
            "descr": descr,
            "helper": bool(helper),
        }
        _sanitize_metadata(type(self), metadata)

        self._callback = Unset  # Bound later by the @flag(...) decorator.
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __call__(self):
        if self._callback is Unset:
            return
        return self._callback()

    def __flag__(self):
        """
        Introspection hook: identify this spec as a Flag.
        """
        return self


def option(*args, **kwargs):
    """
    Decorator/factory for defining a keyed option handler.

    Usage
    - As a decorator with metadata:
        @option("-n", "--number-of-times", metavar="times")
        def on_times(value): ...
      The decorated function becomes the handler; the decorator returns an
      Option instance whose __call__ forwards to the handler.

    Behavior
    - Validates that it decorates a callable and enforces single application.

    Returns
    - Option: the keyed option specification with the decorated function bound
      as its handler.
    """
    option = Option(*args, **kwargs)

    @rename("option")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@option() must be applied to a callable")
        if option._callback is not Unset:  # NOQA: E-501
            raise TypeError("@option() must be applied only once")
        option._callback = callback
        return option

    # Advertise SupportsOption by attaching an introspection hook.
    wrapper.__option__ = MethodType(rename(lambda self: option, "__option__"), wrapper)
    return wrapper


def flag(*args, **kwargs):
    """
    Decorator/factory for defining a presence-only flag handler.

    Usage
    - As a decorator with metadata:
        @flag("-l", "--loudly")
        def on_loudly(): ...

    - As a two-step decorator:
        dec = flag("-h", "--help", helper=True)
        @dec
        def show_help(): ...

    Returns
    - Flag: the presence-only specification with the decorated function bound
      as its handler.
    """
    flag = Flag(*args, **kwargs)

    @rename("flag")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@flag() must be applied to a callable")
        if flag._callback is not Unset:  # NOQA: E-501
            raise TypeError("@flag() must be applied only once")
        flag._callback = callback
        return flag

    wrapper.__flag__ = MethodType(rename(lambda self: flag, "__flag__"), wrapper)
    return wrapper


def specify(object, /):
    """
    Resolve an Option, a Flag, or a pending @option/@flag wrapper into its spec.

    Raises TypeError for anything else.
    """
    if hasattr(object, "__option__"):
        return object.__option__()
    if hasattr(object, "__flag__"):
        return object.__flag__()
    raise TypeError("expected an option or a flag, got %r" % type(object).__name__)


__all__ = (
    # Types
    "Kind",

    # Classes (specifications)
    "Option",
    "Flag",

    # Decorators (user-facing helpers to bind handlers)
    "option",
    "flag",

    # Helpers
    "specify",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
