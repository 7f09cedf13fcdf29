r"""
Argot tokens: tokenizer and classifier.

Overview
- split(arguments): list mode. Expands clustered short flags ("-am" → "-a", "-m");
  everything else passes through untouched, order preserved.
- lex(string): string mode. Recognizes double-quoted runs (quotes stripped,
  contents verbatim) and maximal runs of non-space, non-quote characters.
  Lenient by construction: an unterminated quote is skipped and whatever follows
  is lexed as plain runs, nothing is ever raised.
- tokenize(source): str → lex + split, Iterable[str] → split; wraps the result
  into an indexed Tokens sequence whose first token is the application name.
- classify(tokens, *, routed): the single classification pass (command name,
  options, positional candidates).

Model
- Token: value, index, classification. Tokens hold no link to their sequence;
  navigation goes by index through the owning Tokens (Tokens.after).
- Tokens: an owned, ordered list with live queries (unclassified(), options()).
  Whatever the binders consume is reclassified in place, so later queries never
  see it again.

Quick example:
    >>> tokens = tokenize(["baker", "bake", "-lm", "donut"])
    >>> classify(tokens, routed=True)
    >>> [token.value for token in tokens.options()]
    ['-l', '-m']
"""
import enum
import re
from collections.abc import Iterable, Sequence

# double-quoted run, or a maximal run without whitespace and quotes
_LEXEME = re.compile(r'("[^"]*")|[^"\s]+')


class Classification(enum.Enum):
    """
    Role of a token within one invocation.

    APP_NAME, COMMAND_NAME and OPTION are assigned by the tokenizer/classifier;
    ARGUMENT marks a positional token already bound by the signature matcher.
    """
    APP_NAME = "app-name"
    COMMAND_NAME = "command-name"
    OPTION = "option"
    ARGUMENT = "argument"
    UNCLASSIFIED = "unclassified"


class Token:
    __slots__ = ("value", "index", "classification")

    def __init__(self, value, index, /):
        self.value = value
        self.index = index
        self.classification = Classification.UNCLASSIFIED

    @property
    def unclassified(self):
        return self.classification is Classification.UNCLASSIFIED

    def __repr__(self):
        return "token(value=%r, index=%d, classification=%s)" % (
            self.value, self.index, self.classification.value
        )


class Tokens(Sequence):
    """
    Owned, ordered sequence of tokens for a single invocation.

    The container is the only owner of its tokens; consumers navigate by index
    (after() gives the token following another one).
    """

    def __init__(self, values=(), /):
        self._tokens = []
        for value in values:
            if not isinstance(value, str):
                raise TypeError("tokens must be strings")
            self._tokens.append(Token(value, len(self._tokens)))
        if self._tokens:
            self._tokens[0].classification = Classification.APP_NAME

    def __getitem__(self, index):
        return self._tokens[index]

    def __len__(self):
        return len(self._tokens)

    def __repr__(self):
        return "tokens(%r)" % [token.value for token in self._tokens]

    def after(self, token, /):
        """
        The token right after the given one, or None at the end of the sequence.
        """
        if not (0 <= token.index < len(self._tokens)) or self._tokens[token.index] is not token:
            raise ValueError("token does not belong to this sequence")
        try:
            return self._tokens[token.index + 1]
        except IndexError:
            return None

    @property
    def app(self):
        """
        The APP_NAME token, or None for an empty sequence.
        """
        return self._tokens[0] if self._tokens else None

    @property
    def command(self):
        """
        The COMMAND_NAME token, if the classifier assigned one.
        """
        for token in self._tokens:
            if token.classification is Classification.COMMAND_NAME:
                return token
        return None

    def unclassified(self):
        """
        Live view: tokens that are still positional-value candidates.
        """
        return [token for token in self._tokens if token.unclassified]

    def options(self):
        """
        Live view: tokens currently classified as OPTION.
        """
        return [token for token in self._tokens if token.classification is Classification.OPTION]

    def values(self):
        return [token.value for token in self._tokens]


def split(arguments, /):
    """
    Expand clustered short flags, preserving the relative order of everything else.

    Only strings with exactly one leading dash and more than one letter after it
    are expanded: "-am" → ["-a", "-m"]; "-a", "--all" and "am" pass through.
    """
    if isinstance(arguments, str) or not isinstance(arguments, Iterable):
        raise TypeError("split() argument must be an iterable of strings")

    expanded = []
    for argument in arguments:
        if not isinstance(argument, str):
            raise TypeError("split() argument must be an iterable of strings")
        if argument.startswith("-") and not argument.startswith("--") and len(argument) > 2:
            expanded.extend("-" + character for character in argument[1:])
        else:
            expanded.append(argument)
    return expanded


def lex(string, /):
    """
    Split a free-form command string into words.

    A double-quoted span is one word with its quotes removed; unquoted
    whitespace separates words. Unbalanced quotes are not an error: the stray
    quote is dropped and the remainder lexes as plain words.

        >>> lex('run "hello world" now')
        ['run', 'hello world', 'now']
    """
    if not isinstance(string, str):
        raise TypeError("lex() argument must be a string")

    words = []
    for match in _LEXEME.finditer(string):
        word = match.group(0)
        if match.group(1) is not None:
            word = word[1:-1]
        words.append(word)
    return words


def tokenize(source, /):
    """
    Build the token sequence for one invocation.

    Parameters
    - source: str
      A free-form command string (string mode: lexed, then cluster-expanded).
    - source: Iterable[str]
      A process argument list, application name first (list mode).

    Returns
    - Tokens: indexed from 0, first token classified APP_NAME, the rest UNCLASSIFIED.
    """
    if isinstance(source, str):
        return Tokens(split(lex(source)))
    if isinstance(source, Iterable):
        return Tokens(split(source))
    raise TypeError("tokenize() argument must be a string or an iterable of strings")


def classify(tokens, /, *, routed=False):
    """
    Assign roles to every token in a single left-to-right pass.

    - When routed is True (the application registers subcommands), the token
      right after APP_NAME becomes COMMAND_NAME unless it starts with a dash.
    - Every other token starting with "-" becomes OPTION.
    - Everything else stays UNCLASSIFIED (positional-value candidate).

    Tokens that were already classified are left alone, so classifying twice is
    harmless.
    """
    if not isinstance(tokens, Tokens):
        raise TypeError("classify() argument must be a token sequence")

    for token in tokens:
        if not token.unclassified:
            continue
        if token.index == 1 and routed and not token.value.startswith("-"):
            token.classification = Classification.COMMAND_NAME
        elif token.value.startswith("-"):
            token.classification = Classification.OPTION
    return tokens


__all__ = (
    "Classification",
    "Token",
    "Tokens",
    "split",
    "lex",
    "tokenize",
    "classify",
)
