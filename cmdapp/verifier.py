"""
cmdapp conflict verifier: enforce quantifier constraints across passed options.

Every option occurrence in the result sequence is checked against its
option's quantifier, using the set of options passed in the same call:

- NONE  → always satisfied.
- ANY   → at least one referenced option was passed.
- ALL   → every referenced option was passed.
- ONLY  → every option passed in the call belongs to {self} ∪ refs.

A negated quantifier flips the verdict. References are resolved by short
identifier here (not at registration); an unknown reference is an error.
The first failing option aborts verification.
"""
from .behaviors import Quantifier
from .faults import *

_MESSAGES = {
    (Quantifier.ANY, False): "option %s requires at least one of %s",
    (Quantifier.ANY, True): "option %s cannot be used with any of %s",
    (Quantifier.ALL, False): "option %s requires all of %s",
    (Quantifier.ALL, True): "option %s cannot be used with all of %s together",
    (Quantifier.ONLY, False): "option %s can only be used with %s",
    (Quantifier.ONLY, True): "option %s must be used with something other than %s",
}

_HINTS = {
    (Quantifier.ANY, False): "add one of %s",
    (Quantifier.ANY, True): "remove %s",
    (Quantifier.ALL, False): "add every one of %s",
    (Quantifier.ALL, True): "drop at least one of %s",
    (Quantifier.ONLY, False): "remove every option other than %s",
    (Quantifier.ONLY, True): "add an option other than %s",
}


def _resolve(option, registry):
    references = []
    for ref in option.refs:
        if (reference := registry.lookup(short=ref)) is None:
            raise UnknownReferenceError(
                "option %r refers to unknown option '-%s'" % (option.label, ref),
                title="unknown reference",
                hint="register '-%s' or fix the behavior of %r" % (ref, option.label),
                option=option,
                docs=getdoc(FaultCode.UNKNOWN_REFERENCE),
            )
        references.append(reference)
    return references


def _verdict(option, references, state):
    match option.quantifier:
        case Quantifier.NONE:
            return True
        case Quantifier.ANY:
            return any(map(state.was_passed, references))
        case Quantifier.ALL:
            return all(map(state.was_passed, references))
        case Quantifier.ONLY:
            return state.passed <= {option, *references}
    raise RuntimeError("unexpected quantifier")


def verify(results, registry, state, /):
    """
    check every option occurrence in results against its quantifier.

    parameters
    - results: Iterable[ParseResult]
    - registry: Registry (to resolve references)
    - state: ParseState (read-only)

    raises
    - UnknownReferenceError: a reference does not name a registered short option.
    - QuantifierViolationError: a quantifier (or its negation) is not satisfied.
    """
    checked = set()
    for result in results:
        if (option := result.option) is None or option in checked:
            continue
        checked.add(option)

        if option.quantifier is Quantifier.NONE:
            continue

        references = _resolve(option, registry)
        if _verdict(option, references, state) != option.negated:
            continue

        key = (option.quantifier, option.negated)
        if option.quantifier is Quantifier.ONLY:
            others = [reference for reference in references if reference is not option]
            names = ", ".join(repr(reference.label) for reference in others) or "no other option"
            subject = ", ".join(repr(reference.label) for reference in (option, *others))
        else:
            subject = names = ", ".join(repr(reference.label) for reference in references) or "(no options)"

        raise QuantifierViolationError(
            _MESSAGES[key] % (repr(option.label), names),
            title="conflicting options",
            hint=_HINTS[key] % subject,
            index=result.index,
            option=option,
            quantifier=option.quantifier,
            negated=option.negated,
            docs=getdoc(FaultCode.QUANTIFIER_VIOLATION),
        )


__all__ = (
    "verify",
)
