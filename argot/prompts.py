"""
Argot prompts: interactive input helpers for command bodies.

- await_input(message, *, validator=None): free text, re-asked until the
  validator accepts it.
- await_int(message): an integer, re-asked until the answer parses.
- await_yes_no(message): y/n confirmation.

All three sit on rich.prompt and accept an explicit console (where the
question and the retry notices are printed) and stream (where answers are read
from; stdin when omitted). Reading past the end of a stream raises EOFError,
like input() does.
"""
from rich.prompt import Confirm, IntPrompt, InvalidResponse, Prompt

from .utils import *


class _EndOfInputMixin:
    @classmethod
    def get_input(cls, console, prompt, password, stream=None):
        value = super().get_input(console, prompt, password, stream=stream)
        if stream is not None and value == "":
            raise EOFError("no more input to read")
        return value


class _TextPrompt(_EndOfInputMixin, Prompt):
    validator = None

    def process_response(self, value):
        value = super().process_response(value)
        if self.validator is not None and not self.validator(value):
            raise InvalidResponse("[prompt.invalid]Invalid input, please try again")
        return value


class _IntegerPrompt(_EndOfInputMixin, IntPrompt): ...
class _YesNoPrompt(_EndOfInputMixin, Confirm): ...


def await_input(message, /, *, validator=None, console=Unset, stream=Unset):
    """
    Ask for a line of text.

    Parameters
    - message: str, the question.
    - validator: Callable[[str], bool] | None; answers it rejects are asked again.
    - console: rich Console used for the question (default console when omitted).
    - stream: TextIO to read answers from (stdin when omitted).

    Returns
    - str: the accepted answer, stripped.
    """
    if validator is not None and not callable(validator):
        raise TypeError("await_input() 'validator' must be callable")
    prompt = _TextPrompt(message, console=coalesce(console))
    prompt.validator = validator
    return prompt(stream=coalesce(stream))


def await_int(message, /, *, console=Unset, stream=Unset):
    """
    Ask for an integer; non-numeric answers are asked again.
    """
    return _IntegerPrompt(message, console=coalesce(console))(stream=coalesce(stream))


def await_yes_no(message, /, *, console=Unset, stream=Unset):
    """
    Ask a y/n question and return the answer as a bool.
    """
    return _YesNoPrompt(message, console=coalesce(console))(stream=coalesce(stream))


__all__ = (
    "await_input",
    "await_int",
    "await_yes_no",
)
