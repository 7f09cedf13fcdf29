r"""
Argot signatures: positional parameter declarations and the signature matcher.

Grammar (textual form of a signature)
- <name>      required parameter
- [<name>]    optional parameter
- ...         variadic marker; makes the parameter right before it absorb every
              trailing positional value (it must be the last segment)

    >>> Signature.parse("<food> [<drink>] ...")
    signature('<food> [<drink>] ...')

Declaration rules (checked eagerly, AmbiguousSignatureError otherwise)
- at most one variadic marker, and only as the very last segment;
- every required parameter precedes every optional one;
- parameter names are unique.

Matching
- bind(signature, tokens) assigns positional tokens left to right: required
  parameters first, optional ones while tokens remain, and the variadic
  parameter gets its own slot plus every trailing token as a tuple. Arity
  problems surface as ArityError with expected vs. received counts.
"""
import re
from collections.abc import Iterable, Sequence

from .faults import ArityError, AmbiguousSignatureError, FaultCode
from .tokens import Classification, Token
from .utils import *

_SEGMENT = re.compile(r"(?P<optional>\[)?<(?P<name>[^\W\d](?:[\w-]*\w)?)>(?(optional)\])")


class Parameter:
    """
    One positional segment of a signature.

    Properties
    - name: str, the key used in the bound mapping.
    - required: bool, a token must be supplied for this slot.
    - variadic: bool, the slot also absorbs every trailing token.
    """
    __introspectable__ = ("name", "required", "variadic")

    name = mirror("name")
    required = mirror("required")
    variadic = mirror("variadic")

    def __init__(self, name, /, required=True, variadic=False):
        if not isinstance(name, str):
            raise TypeError("parameter 'name' must be a string")
        elif not re.fullmatch(r"[^\W\d](?:[\w-]*\w)?", name := name.strip()):
            raise ValueError("parameter 'name' must be an identifier-like word (hyphens are allowed)")
        self._name = name
        self._required = bool(required)
        self._variadic = bool(variadic)

    def __str__(self):
        segment = "<%s>" % self.name if self.required else "[<%s>]" % self.name
        return segment + " ..." * self.variadic

    def __repr__(self):
        return "parameter(%s)" % ", ".join("%s=%r" % (name, getattr(self, name)) for name in self.__introspectable__)

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self.name, self.required, self.variadic) == (other.name, other.required, other.variadic)

    def __hash__(self):
        return hash((self.name, self.required, self.variadic))


class Signature(Sequence):
    """
    Ordered, validated collection of parameters.

    Construct it from Parameter objects, or from text with Signature.parse().
    """

    def __init__(self, parameters=(), /):
        if isinstance(parameters, str) or not isinstance(parameters, Iterable):
            raise TypeError("signature must be built from an iterable of parameters")
        parameters = tuple(parameters)

        names = set()
        optional = None
        for position, parameter in enumerate(parameters):
            if not isinstance(parameter, Parameter):
                raise TypeError("signature must be built from an iterable of parameters")
            if parameter.name in names:
                raise AmbiguousSignatureError("signature parameter %r is declared twice" % parameter.name)
            names.add(parameter.name)
            if parameter.variadic and position != len(parameters) - 1:
                if any(other.variadic for other in parameters[position + 1:]):
                    raise AmbiguousSignatureError("signature cannot have more than one variadic marker")
                raise AmbiguousSignatureError("signature variadic parameter %r must be the last one" % parameter.name)
            if not parameter.required:
                optional = optional or parameter
            elif optional:
                raise AmbiguousSignatureError(
                    "signature required parameter %r cannot follow optional parameter %r" % (parameter.name, optional.name)
                )
        self._parameters = parameters

    @classmethod
    def parse(cls, text, /):
        """
        Parse the textual grammar ("<a> [<b>] ...") into a Signature.

        An empty (or blank) text is the empty signature.
        """
        if isinstance(text, Signature):
            return text
        if not isinstance(text, str):
            raise TypeError("signature must be a string")

        parameters = []
        variadic = False
        for segment in text.replace("...", " ... ").split():
            if segment == "...":
                if variadic:
                    raise AmbiguousSignatureError("signature cannot have more than one variadic marker")
                if not parameters:
                    raise AmbiguousSignatureError("signature variadic marker must follow a parameter")
                last = parameters.pop()
                parameters.append(Parameter(last.name, last.required, True))
                variadic = True
                continue
            if not (match := _SEGMENT.fullmatch(segment)):
                raise AmbiguousSignatureError("malformed signature segment %r" % segment)
            if variadic:
                raise AmbiguousSignatureError("signature variadic marker must be the last segment")
            parameters.append(Parameter(match["name"], required=not match["optional"]))
        return cls(parameters)

    def __getitem__(self, index):
        return self._parameters[index]

    def __len__(self):
        return len(self._parameters)

    def __str__(self):
        return " ".join(map(str, self._parameters))

    def __repr__(self):
        return "signature(%r)" % str(self)

    def __eq__(self, other):
        if not isinstance(other, Signature):
            return NotImplemented
        return self._parameters == other._parameters

    def __hash__(self):
        return hash(self._parameters)

    @property
    def required(self):
        return tuple(parameter for parameter in self._parameters if parameter.required)

    @property
    def optional(self):
        return tuple(parameter for parameter in self._parameters if not parameter.required)

    @property
    def variadic(self):
        """
        The variadic parameter, or None when the signature has a fixed arity.
        """
        if self._parameters and self._parameters[-1].variadic:
            return self._parameters[-1]
        return None


def bind(signature, tokens, /):
    """
    Bind positional tokens to the parameters of a signature.

    Parameters
    - signature: Signature | str
      The declared parameters (text is parsed on the fly).
    - tokens: Iterable[Token | str]
      Positional candidates in input order, usually Tokens.unclassified().

    Returns
    - dict[str, str | tuple[str, ...]]: bound values; absent optional parameters
      are simply missing, the variadic parameter always maps to a tuple.

    Raises
    - ArityError: fewer tokens than required parameters, or more tokens than
      the signature can hold when it has no variadic parameter.

    Side effects
    - Every consumed Token is reclassified ARGUMENT, so live queries on the
      owning sequence no longer list it as unclassified.
    """
    signature = Signature.parse(signature)
    tokens = list(tokens)
    values = [token.value if isinstance(token, Token) else token for token in tokens]

    required = len(signature.required)
    optional = len(signature.optional)
    variadic = signature.variadic is not None
    got = len(values)

    if got < required:
        exact = not variadic and not optional
        raise ArityError(
            "expected %s%d %s, got %d" % (
                "" if exact else "at least ", required, pluralize("argument", required), got
            ),
            title="missing arguments",
            code=FaultCode.TOO_FEW_ARGUMENTS,
            expected=required,
            got=got,
            hint="add the missing %s in the declared order" % pluralize("argument", required - got),
        )

    if not variadic and got > required + optional:
        exact = not optional
        raise ArityError(
            "expected %s%d %s, got %d" % (
                "" if exact else "at most ", required + optional, pluralize("argument", required + optional), got
            ),
            title="too many arguments",
            code=FaultCode.TOO_MANY_ARGUMENTS,
            expected=required + optional,
            got=got,
            input=values[required + optional],
            hint="remove the extra %s" % pluralize("argument", got - required - optional),
        )

    bound = {}
    index = 0
    for parameter in signature:
        if parameter.variadic:
            bound[parameter.name] = tuple(values[index:])
            index = got
        elif index < got:
            bound[parameter.name] = values[index]
            index += 1

    for token in tokens[:index]:
        if isinstance(token, Token):
            token.classification = Classification.ARGUMENT

    return bound


__all__ = (
    "Parameter",
    "Signature",
    "bind",
)
