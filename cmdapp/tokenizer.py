"""
cmdapp tokenizer: walk an argument vector and produce ordered parse results.

States
- normal: tokens are classified as options or plain arguments.
- literal: entered after an honored "--"; every token is a plain argument.
- awaiting (tracked alongside either state): an option was recognized but its
  argument must come from the next token.

Per-token rules (left to right, program name excluded)
1. literal state: plain argument (or the awaited argument).
2. "-": plain argument (or the awaited argument), the conventional stdin marker.
3. "--": switches to the literal state when end-of-options is enabled (the
   marker itself is consumed); otherwise it is a plain argument.
4. "-x..." / "--name": an option token.
   • an awaited required argument cannot be satisfied by an option token.
   • short form: clusters of multiflag options are split (-abc); otherwise the
     rest of the token is the attached argument (-fvalue).
   • long form: --name, or --name=value with an inline argument.
   • an argument-taking option without an attached argument waits for the next token.
5. anything else: plain argument (or the awaited argument).

At the end of input, an option still awaiting a required argument is an error.
Results keep strict argv order; clusters resolve greedily with no backtracking.
"""
from collections import namedtuple

from .behaviors import Argument
from .faults import *
from .options import _push
from .utils import ordinal


class ParseResult(namedtuple("ParseResult", ("option", "value", "index"), defaults=(0,))):
    """
    one tokenized unit: an option occurrence (with its argument or None) or a
    plain argument (option is None). index is the 1-based argv position.
    """
    __slots__ = ()

    def __new__(cls, option, value, index=0):
        if option is None and value is None:
            raise ValueError("parse result must carry an option, an argument, or both")
        return super().__new__(cls, option, value, index)


class ParseState:
    """
    transient per-parse bookkeeping: which options were passed and how many
    option occurrences were recorded.
    """
    __slots__ = ("passed", "count")

    def __init__(self):
        self.passed = set()
        self.count = 0

    def was_passed(self, option, /):
        return option in self.passed

    def __repr__(self):
        return f"parse-state(passed={sorted(option.label for option in self.passed)!r}, count={self.count!r})"


def _hint(token):
    return "run with '--help' to see valid options (use '--' before %r if it is a plain argument)" % token


def tokenize(args, registry, /, *, eoo=True):
    """
    tokenize an argument vector (program name already removed).

    parameters
    - args: Iterable[str]
    - registry: Registry
    - eoo: bool (keyword-only)
      honor "--" as the end-of-options marker.

    returns
    - tuple[list[ParseResult], ParseState]

    raises
    - UnknownOptionError, MissingArgumentError, UnexpectedArgumentError, NotSeparableError
    - ResourceExhaustedError: the result list could not grow.
    """
    results = []
    state = ParseState()

    literal = False
    awaiting = None  # (option, input, index) of the option waiting for its argument

    def record(option, value, index):
        _push(results, ParseResult(option, value, index))
        state.passed.add(option)
        state.count += 1

    def argument(token, index):
        nonlocal awaiting
        if awaiting is not None:
            option, _, start = awaiting
            awaiting = None
            record(option, token, start)
        else:
            _push(results, ParseResult(None, token, index))

    for index, token in enumerate(args, 1):
        if not isinstance(token, str):
            raise TypeError("tokenize() arguments must be strings")

        if literal or token == "-":
            argument(token, index)
            continue

        if token == "--":
            if eoo:
                literal = True
            else:
                argument(token, index)
            continue

        if not token.startswith("-"):
            argument(token, index)
            continue

        if awaiting is not None:
            option, input, start = awaiting
            if option.argument is Argument.REQUIRED:
                raise MissingArgumentError(
                    "option %r at %s position requires an argument, but the next token %r is an option"
                    % (input, ordinal(start), token),
                    title="missing argument",
                    hint="pass the value right after %s (for example: %s <%s>)" % (input, input, option.metavar.lower()),
                    token=token,
                    index=start,
                    option=option,
                    docs=getdoc(FaultCode.MISSING_ARGUMENT),
                )
            awaiting = None
            record(option, None, start)

        attached = None

        if token[1] != "-":
            input = token[:2]
            option = registry.lookup(short=token[1])
            if option is None:
                raise UnknownOptionError(
                    "unknown option %r at %s position" % (input, ordinal(index)),
                    title="unknown option",
                    hint=_hint(token),
                    token=token,
                    index=index,
                    docs=getdoc(FaultCode.UNKNOWN_OPTION),
                )

            if rest := token[2:]:
                if option.multiflag:
                    cluster = [option]
                    for character in rest:
                        peer = registry.lookup(short=character)
                        if peer is None:
                            raise UnknownOptionError(
                                "unknown option '-%s' in %r at %s position" % (character, token, ordinal(index)),
                                title="unknown option",
                                hint=_hint(token),
                                token=token,
                                index=index,
                                docs=getdoc(FaultCode.UNKNOWN_OPTION),
                            )
                        if not peer.multiflag:
                            raise NotSeparableError(
                                "option %r cannot be combined in %r at %s position" % (
                                    peer.label, token, ordinal(index)
                                ),
                                title="option not separable",
                                hint="pass '-%s' as its own token" % character,
                                token=token,
                                index=index,
                                option=peer,
                                docs=getdoc(FaultCode.NOT_SEPARABLE),
                            )
                        cluster.append(peer)
                    for peer in cluster:
                        record(peer, None, index)
                    continue

                if option.argument is Argument.NONE:
                    raise UnexpectedArgumentError(
                        "option %r at %s position does not take an argument (got %r)" % (
                            input, ordinal(index), rest
                        ),
                        title="unexpected argument",
                        hint="remove %r or pass it as a separate plain argument" % rest,
                        token=token,
                        index=index,
                        option=option,
                        docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT),
                    )
                attached = rest
        else:
            input, separator, inline = token.partition("=")
            option = registry.lookup(long=input[2:])
            if option is None:
                raise UnknownOptionError(
                    "unknown option %r at %s position" % (input, ordinal(index)),
                    title="unknown option",
                    hint=_hint(token),
                    token=token,
                    index=index,
                    docs=getdoc(FaultCode.UNKNOWN_OPTION),
                )
            if separator:
                if option.argument is Argument.NONE:
                    raise UnexpectedArgumentError(
                        "option %r at %s position does not take an argument (got %r)" % (
                            input, ordinal(index), inline
                        ),
                        title="unexpected argument",
                        hint="remove everything from '=' (for example: %s)" % input,
                        token=token,
                        index=index,
                        option=option,
                        docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT),
                    )
                attached = inline

        if option.argument is not Argument.NONE and attached is None:
            awaiting = (option, input, index)
            continue

        record(option, attached, index)

    if awaiting is not None:
        option, input, start = awaiting
        if option.argument is Argument.REQUIRED:
            raise MissingArgumentError(
                "option %r at %s position requires an argument" % (input, ordinal(start)),
                title="missing argument",
                hint="pass the value right after %s (for example: %s <%s>)" % (input, input, option.metavar.lower()),
                index=start,
                option=option,
                docs=getdoc(FaultCode.MISSING_ARGUMENT),
            )
        record(option, None, start)

    return results, state


__all__ = (
    "ParseResult",
    "ParseState",
    "tokenize",
)
