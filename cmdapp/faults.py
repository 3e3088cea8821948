"""
cmdapp faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the
  library can raise. Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- RegistrationError family: developer-facing errors raised while options are
  being declared (bad identifier, malformed behavior string, missing slot).
- ParseError family: user-facing errors raised while an argument vector is
  tokenized or verified. They carry message + options and know how to render
  themselves in a friendly, lowercased, and actionable way.
- ResourceExhaustedError: an internal container could not grow.
- DuplicateOptionWarning: an identifier was registered more than once.
- trigger(): central entry point to surface a parse fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: tokenizer faults include the ordinal position of
  the offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser catches ParseError from the tokenizer/verifier and calls
  trigger(fault, **runtime-options).
- In non-shell mode, the fault is raised; in shell mode, it is rendered via rich
  on stderr and the parse call reports failure.
"""
import copy
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
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - registration (101xx)
      • INVALID_IDENTIFIER, MALFORMED_BEHAVIOR, MISSING_RESULT_SLOT
    - tokenizer (111xx)
      • UNKNOWN_OPTION, MISSING_ARGUMENT, UNEXPECTED_ARGUMENT, NOT_SEPARABLE
    - verifier (112xx)
      • UNKNOWN_REFERENCE, QUANTIFIER_VIOLATION
    - resources (119xx)
      • RESOURCE_EXHAUSTED
    - warnings (121xx)
      • DUPLICATED_OPTION

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- registration errors (101xx) ---
    INVALID_IDENTIFIER          = 10101
    MALFORMED_BEHAVIOR          = 10102
    MISSING_RESULT_SLOT         = 10103

    # --- tokenizer errors (111xx) ---
    UNKNOWN_OPTION              = 11101
    MISSING_ARGUMENT            = 11102
    UNEXPECTED_ARGUMENT         = 11103
    NOT_SEPARABLE               = 11104

    # --- verifier errors (112xx) ---
    UNKNOWN_REFERENCE           = 11201
    QUANTIFIER_VIOLATION        = 11202

    # --- resource errors (119xx) ---
    RESOURCE_EXHAUSTED          = 11901

    # --- warnings (121xx) ---
    DUPLICATED_OPTION           = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class RegistrationError(ValueError):
    """
    an option declaration was rejected; the registry was left untouched.
    """
    code = Unset

    def __init__(self, message, /):
        super().__init__(message)
        self.message = message


class InvalidIdentifierError(RegistrationError):
    code = FaultCode.INVALID_IDENTIFIER


class MalformedBehaviorError(RegistrationError):
    code = FaultCode.MALFORMED_BEHAVIOR


class MissingResultSlotError(RegistrationError):
    code = FaultCode.MISSING_RESULT_SLOT


class ResourceExhaustedError(MemoryError):
    """
    an internal container could not grow; the operation was not applied.
    """
    code = FaultCode.RESOURCE_EXHAUSTED


class DuplicateOptionWarning(UserWarning):
    code = FaultCode.DUPLICATED_OPTION


class ParseError(Exception):
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

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

        parser = self.options.get("parser")
        name = parser.program.name if parser is not None else "cmdapp"
        code = self.options.get("code", self.code)
        title = self.options.get("title", type(self).__name__)

        prog = text(getattr(main, "__prog__", name), styler("prog-name"))
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "", styler("code")),
            " | ",
            text(title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            width = console.width - 4
            try:
                width = int(width * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseError):
    code = FaultCode.UNKNOWN_OPTION


class MissingArgumentError(ParseError):
    code = FaultCode.MISSING_ARGUMENT


class UnexpectedArgumentError(ParseError):
    code = FaultCode.UNEXPECTED_ARGUMENT


class NotSeparableError(ParseError):
    code = FaultCode.NOT_SEPARABLE


class UnknownReferenceError(ParseError):
    code = FaultCode.UNKNOWN_REFERENCE


class QuantifierViolationError(ParseError):
    code = FaultCode.QUANTIFIER_VIOLATION


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.

    typical options
    - parser, shell, fancy, colorful, title, code, hint, and any other
      context the reporter may want to show (e.g., token/index/option).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "RegistrationError",
    "InvalidIdentifierError",
    "MalformedBehaviorError",
    "MissingResultSlotError",
    "ResourceExhaustedError",
    "DuplicateOptionWarning",
    "ParseError",
    "UnknownOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "NotSeparableError",
    "UnknownReferenceError",
    "QuantifierViolationError",
    "trigger",
    "getdoc",
)
