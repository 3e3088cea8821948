r"""
cmdapp behavior strings: a tiny declarative language for option traits.

Callers describe how an option behaves with a short literal string instead of
a pile of keyword arguments. The compiler turns that string into a structured
Traits tuple that the tokenizer and the verifier can match on exhaustively.

Grammar (whitespace between tokens is ignored)
    behavior   := argPart? quantPart?
    argPart    := "." optMark? | "*"
    optMark    := "?"
    quantPart  := negMark? sigil refs
    negMark    := "!"
    sigil      := "@" | "&" | "<"
    refs       := (alphanumeric)*

Semantics
- "."   the option takes an argument; ".?" makes that argument optional.
- "*"   the option is multiflag-capable (may be clustered as -abc); it never
        takes an argument, so "*" and "." cannot appear together.
- "@"   ANY:  at least one referenced option must also be passed.
- "&"   ALL:  every referenced option must also be passed.
- "<"   ONLY: no option outside {self} ∪ refs may be passed alongside self.
- "!"   negates the final verdict of the quantifier.

References are short-option characters. Whether they name registered options
is not checked here; the verifier resolves them at parse time.

Examples
    >>> compile("")
    Traits(argument=<Argument.NONE: ''>, multiflag=False, quantifier=<Quantifier.NONE: ''>, negated=False, refs=())
    >>> compile(".?").argument
    <Argument.OPTIONAL: '.?'>
    >>> compile("* !@ ab").refs
    ('a', 'b')
"""
import functools
from enum import Enum
from typing import NamedTuple

from .faults import MalformedBehaviorError


class Argument(Enum):
    """
    argument capability of an option.
    """
    NONE = ""
    REQUIRED = "."
    OPTIONAL = ".?"


class Quantifier(Enum):
    """
    co-occurrence rule of an option; values are the grammar sigils.
    """
    NONE = ""
    ANY = "@"
    ALL = "&"
    ONLY = "<"


class Traits(NamedTuple):
    """
    compiled, immutable form of a behavior string.
    """
    argument: Argument = Argument.NONE
    multiflag: bool = False
    quantifier: Quantifier = Quantifier.NONE
    negated: bool = False
    refs: tuple[str, ...] = ()

    @property
    def takes_argument(self):
        return self.argument is not Argument.NONE

    def __str__(self):
        # canonical behavior string; compile(str(traits)) == traits
        return "%s%s%s%s%s" % (
            self.argument.value,
            "*" if self.multiflag else "",
            "!" if self.negated else "",
            self.quantifier.value,
            "".join(self.refs),
        )


_SIGILS = {quantifier.value: quantifier for quantifier in Quantifier if quantifier.value}


@functools.cache
def compile(behavior, /):
    """
    compile a behavior string into Traits.

    parameters
    - behavior: str
      the behavior string (see module grammar). "" means no argument and no quantifier.

    returns
    - Traits

    raises
    - TypeError: behavior is not a string.
    - MalformedBehaviorError: the string does not follow the grammar:
      • the first character is neither an argument mark nor the start of a quantifier,
      • a quantifier sigil is expected but something else was found,
      • a reference is not alphanumeric.
    """
    if not isinstance(behavior, str):
        raise TypeError("compile() argument must be a string")

    characters = "".join(behavior.split())
    length = len(characters)
    index = 0

    argument = Argument.NONE
    multiflag = False
    quantifier = Quantifier.NONE
    negated = False

    if index < length and characters[index] == ".":
        argument = Argument.REQUIRED
        index += 1
        if index < length and characters[index] == "?":
            argument = Argument.OPTIONAL
            index += 1
    elif index < length and characters[index] == "*":
        multiflag = True
        index += 1
    elif index < length and characters[index] != "!" and characters[index] not in _SIGILS:
        raise MalformedBehaviorError(
            "behavior %r must start with '.', '*', '!' or a quantifier sigil, not %r" % (behavior, characters[index])
        )

    if index == length:
        return Traits(argument, multiflag)

    if characters[index] == "!":
        negated = True
        index += 1

    try:
        quantifier = _SIGILS[characters[index]]
    except (IndexError, KeyError):
        found = "end of string" if index == length else repr(characters[index])
        raise MalformedBehaviorError(
            "behavior %r expects one of '@', '&' or '<' but found %s" % (behavior, found)
        ) from None
    index += 1

    refs = tuple(characters[index:])
    for ref in refs:
        if not ref.isalnum():
            raise MalformedBehaviorError(
                "behavior %r references %r, but references must be alphanumeric short options" % (behavior, ref)
            )

    return Traits(argument, multiflag, quantifier, negated, refs)


__all__ = (
    "Argument",
    "Quantifier",
    "Traits",
    "compile",
)
