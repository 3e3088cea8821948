"""
cmdapp option registry: declared options, their result slots, and lookup.

What this module provides
- Slot: a mutable cell where a parsed option argument is written. A value
  already present at registration time becomes the option's display name
  (metavar) in help, and the slot is then cleared.
- OptionSpec: the immutable definition of one option (identifiers, compiled
  traits, slot, metavar, description). Instances outlive every parse result
  that references them.
- Registry: the ordered, append-only collection of OptionSpecs with persistent
  short/long lookup maps.

Rules
- Long identifiers are required words (letters, digits, '-' and '_', not
  starting with '-' or '_'); short identifiers are a single alphanumeric
  character or None.
- An option whose behavior takes an argument must be given a Slot.
- Duplicated identifiers are accepted (with a DuplicateOptionWarning); lookup
  resolves to the first registered match.
- A failed registration never mutates the registry.
"""
import functools
import operator
import re
import warnings

from .behaviors import compile
from .faults import *
from .utils import *


class Slot:
    """
    Mutable result cell for an option argument.

    Notes
    - value is None while unset; after a successful parse it holds the last
      argument given to the option.
    - Slots are written at dispatch time, after verification, so a rejected
      parse leaves them untouched.
    """
    __slots__ = ("value",)

    def __init__(self, value=None):
        self.value = value

    def __repr__(self):
        return f"slot({self.value!r})"


def _push(sequence, item, /):
    """
    Append to an internal container, surfacing growth failures as ResourceExhaustedError.
    """
    try:
        sequence.append(item)
    except MemoryError as exception:
        raise ResourceExhaustedError("unable to grow an internal container") from exception


class SpecType(type):
    """
    Metaclass that exposes __introspectable__ fields as read-only views and
    provides stable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - every name in __introspectable__ is backed by a private slot "_{name}".
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        introspectable = namespace.get("__introspectable__", ())
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
                "__slots__": tuple("_" + name for name in introspectable),
            } | {
                name: view(name) for name in introspectable
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class OptionSpec(metaclass=SpecType):
    """
    Immutable definition of a declared option.

    Properties
    - short: str | None        single alphanumeric character, or None for long-only options.
    - long: str                long identifier (used as --long).
    - traits: Traits           compiled behavior.
    - slot: Slot | None        where the argument is written on dispatch.
    - metavar: str             display name of the argument in help ("ARG" by default).
    - descr: str | None        short description for help.

    Shortcuts for traits fields (argument, multiflag, quantifier, negated, refs)
    are provided so matching code reads naturally.
    """

    __introspectable__ = (
        "short",
        "long",
        "traits",
        "slot",
        "metavar",
        "descr",
    )

    def __init__(self, short, long, traits, slot, metavar, descr):
        for name, value in zip(type(self).__introspectable__, (short, long, traits, slot, metavar, descr)):
            object.__setattr__(self, "_" + name, value)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    @property
    def argument(self):
        return self.traits.argument

    @property
    def multiflag(self):
        return self.traits.multiflag

    @property
    def quantifier(self):
        return self.traits.quantifier

    @property
    def negated(self):
        return self.traits.negated

    @property
    def refs(self):
        return self.traits.refs

    @property
    def names(self):
        """
        the command-line spellings of this option, short first.
        """
        return (("-" + self.short,) if self.short else ()) + ("--" + self.long,)

    @property
    def label(self):
        """
        display form used in messages (e.g. "-f/--file" or "--file").
        """
        return "/".join(self.names)


class Registry:
    """
    Ordered, append-only collection of OptionSpecs.

    Lookup
    - short identifiers and long identifiers each have a persistent map that is
      extended on every successful registration; the first registration of an
      identifier wins, so lookups follow registration order.
    """

    def __init__(self):
        self._options = []
        self._shorts = {}
        self._longs = {}

    options = view("options")

    def register(self, short, long, behavior="", slot=None, descr=Unset):
        """
        Validate, compile, and append a new option.

        Parameters
        - short: str | None
          single alphanumeric character, or None for a long-only option.
        - long: str
          non-empty long identifier.
        - behavior: str
          behavior string (see cmdapp.behaviors).
        - slot: Slot | None
          result slot; required when the behavior takes an argument. A value
          already held by the slot becomes the metavar and the slot is cleared.
        - descr: Unset | str
          short description for help.

        Returns
        - OptionSpec

        Raises
        - TypeError: wrong parameter types.
        - InvalidIdentifierError: bad short or long identifier.
        - MalformedBehaviorError: behavior does not compile.
        - MissingResultSlotError: the behavior takes an argument and no slot was given.
        - ResourceExhaustedError: the registry could not grow.
        """
        if short is not None and not isinstance(short, str):
            raise TypeError("register() short identifier must be a string or None")
        if short is not None and not (len(short) == 1 and short.isalnum()):
            raise InvalidIdentifierError("short identifier %r must be a single alphanumeric character" % short)

        if not isinstance(long, str):
            raise TypeError("register() long identifier must be a string")
        if not long:
            raise InvalidIdentifierError("long identifier cannot be empty")
        if not re.fullmatch(r"[^\W_][\w-]*", long):
            raise InvalidIdentifierError("long identifier %r must be a word (letters, digits, '-' or '_')" % long)

        traits = compile(behavior)

        if slot is not None and not isinstance(slot, Slot):
            raise TypeError("register() result slot must be a Slot or None")
        if traits.takes_argument and slot is None:
            raise MissingResultSlotError("option %r takes an argument but no result slot was given" % ("--" + long))

        if not isinstance(descr, str | Unset):
            raise TypeError("register() description must be a string")

        metavar = "ARG"
        if slot is not None and slot.value is not None:
            if not isinstance(slot.value, str) or not slot.value.strip():
                raise TypeError("register() preset slot value must be a non-empty string")
            metavar = slot.value.strip()

        duplicates = []
        if short is not None and short in self._shorts:
            duplicates.append("-" + short)
        if long in self._longs:
            duplicates.append("--" + long)

        option = OptionSpec(short, long, traits, slot, metavar, coalesce(descr))
        _push(self._options, option)

        # committed: nothing below may fail the registration
        if short is not None:
            self._shorts.setdefault(short, option)
        self._longs.setdefault(long, option)
        if slot is not None:
            slot.value = None

        for name in duplicates:
            warnings.warn(DuplicateOptionWarning(
                "identifier %r is already registered; lookups resolve to the first one" % name
            ), stacklevel=2)

        return option

    def lookup(self, short=None, long=None):
        """
        Resolve an option by short identifier if given, else by exact long identifier.

        Returns
        - OptionSpec | None: the first match in registration order.
        """
        if short is not None:
            return self._shorts.get(short)
        if long is not None:
            return self._longs.get(long)
        return None

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return f"registry({", ".join(option.label for option in self._options)})"


__all__ = (
    "Slot",
    "OptionSpec",
    "Registry",
)
