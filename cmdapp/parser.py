"""
cmdapp parser: declare options, parse an argument vector, dispatch results.

What this module provides
- Parser: an explicit, instance-local option registry plus the parse pipeline
  (tokenize → verify → dispatch), program metadata, and the built-in
  --help/--version options.

Pipeline
- parse() tokenizes argv[1:] with a fresh ParseState, verifies quantifiers,
  clears every result slot, then dispatches every result to the callbacks.
  Faults from tokenization or verification short-circuit the call: no
  callback runs and no slot is touched.

Fault handling
- shell=False (default): the ParseError is raised to the caller.
- shell=True: the fault is rendered on stderr and parse() returns False.
- a fallback handler (see Parser.fallback) receives the fault instead, and
  parse() returns False.

Quick start
    from cmdapp import Parser, Slot

    parser = Parser("tool", descr="do things")
    output = Slot("FILE")
    parser.option("o", "output", ".", output, descr="write to FILE")
    parser.option("v", "verbose", "*", descr="explain what is being done")
    parser.callbacks(
        lambda short, long, value, data: print(long, value),
        lambda value, data: print("argument", value),
    )
    parser.parse(["tool", "-v", "-o", "out.txt", "input.txt"])
"""
import copy
import shlex
import sys
from collections.abc import Iterable

from .dispatcher import dispatch
from .faults import *
from .options import Registry
from .program import Program, render_help, render_version
from .tokenizer import tokenize
from .utils import *
from .verifier import verify


class Parser:
    """
    Option parser bound to one program.

    Parameters
    - name: Unset | str
      program name; defaults to argv[0] of the first parse call.
    - descr: Unset | str
      program description shown in help.
    - shell: bool
      render faults on stderr instead of raising them.
    - fancy: bool
      panel chrome for help, version, and faults.
    - colorful: bool
      styled output.
    - eoo: bool
      honor "--" as the end-of-options marker.
    - override_help / override_version: bool
      let the option callback handle --help / --version instead of the
      built-in renderers.

    Notes
    - registration must be complete before the first parse call.
    - one parse call at a time: a parser is not reentrant and not thread-safe.
    """

    registry = view("registry")
    program = view("program")

    def __init__(
            self,
            name=Unset,
            /,
            descr=Unset,
            *,
            shell=False,
            fancy=False,
            colorful=False,
            eoo=True,
            override_help=False,
            override_version=False,
    ):
        self._program = Program(name, descr=descr)
        self._registry = Registry()
        self._on_option = None
        self._on_argument = None
        self._fallback = Unset

        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.eoo = bool(eoo)
        self.override_help = bool(override_help)
        self.override_version = bool(override_version)

        self._registry.register(None, "help", descr="display this help")
        self._registry.register(None, "version", descr="output version information")

    def option(self, short, long, behavior="", slot=None, /, descr=Unset):
        """
        Register an option -short/--long (short may be None).

        Parameters
        - short: str | None, single alphanumeric character.
        - long: str, long identifier.
        - behavior: str, behavior string (see cmdapp.behaviors).
        - slot: Slot | None, required when the behavior takes an argument.
        - descr: Unset | str, help description.

        Returns
        - OptionSpec

        Raises
        - RegistrationError (InvalidIdentifierError, MalformedBehaviorError,
          MissingResultSlotError), TypeError, ResourceExhaustedError.
        """
        return self._registry.register(short, long, behavior, slot, descr)

    def long_option(self, long, behavior="", slot=None, /, descr=Unset):
        """
        Register a strictly long option --long.
        """
        return self._registry.register(None, long, behavior, slot, descr)

    def callbacks(self, on_option=None, on_argument=None, /):
        """
        Set the option and argument callbacks (None leaves that kind unhandled).

        - on_option(short, long, value, data): once per option occurrence.
        - on_argument(value, data): once per plain argument.
        """
        if on_option is not None and not callable(on_option):
            raise TypeError("callbacks() option callback must be callable")
        if on_argument is not None and not callable(on_argument):
            raise TypeError("callbacks() argument callback must be callable")
        self._on_option = on_option
        self._on_argument = on_argument

    def fallback(self, fallback, /):
        """
        Register a one-time fallback handler for parse faults.

        Rules
        - Must be callable; it receives the fault (with runtime options merged in).
        - Can be set only once per parser (cannot be overridden).

        Returns
        - The same callable, enabling decorator-style usage: @parser.fallback
        """
        if not callable(fallback):
            raise TypeError("parser fallback must be callable")
        if self._fallback is not Unset:
            raise TypeError("parser fallback cannot be overridden")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        fault = copy.replace(fault, **options, parser=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)
        if self._fallback is not Unset:
            self._fallback(fault)
        else:
            trigger(fault)

    def print_help(self, console=None):
        render_help(self._program, self._registry, colorful=self.colorful, fancy=self.fancy, console=console)

    def print_version(self, console=None):
        render_version(self._program, colorful=self.colorful, fancy=self.fancy, console=console)

    def parse(self, argv=Unset, data=None, /):
        """
        Parse an argument vector and dispatch its results.

        Parameters
        - argv:
          • Unset: read sys.argv.
          • str: shell-like command line; split via shlex.split.
          • Iterable[str]: pre-tokenized argument vector.
          In every form the first element is the program name.
        - data: forwarded untouched to every callback.

        Returns
        - True when the results were dispatched; False when a fault was
          rendered (shell mode) or handed to the fallback.

        Raises
        - ParseError subclasses (non-shell mode without fallback).
        - TypeError / ValueError: argv is not a non-empty sequence of strings.
        """
        if argv is Unset:
            argv = list(sys.argv)
        elif isinstance(argv, str):
            argv = shlex.split(argv)
        elif isinstance(argv, Iterable):
            argv = list(argv)
            if not all(isinstance(arg, str) for arg in argv):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        if not argv:
            raise ValueError("parse() argument must contain at least the program name")

        self._program.rename(argv[0], weak=True)

        try:
            results, state = tokenize(argv[1:], self._registry, eoo=self.eoo)
            verify(results, self._registry, state)
        except ParseError as fault:
            self.trigger(fault, argv=tuple(argv))
            return False

        # slots only hold values from the call that was accepted last
        for option in self._registry:
            if option.slot is not None:
                option.slot.value = None

        dispatch(
            results,
            self._on_option,
            self._on_argument,
            data,
            override_help=self.override_help,
            override_version=self.override_version,
            helper=self.print_help,
            versioner=self.print_version,
        )
        return True

    def __repr__(self):
        return f"parser(program={self._program!r}, options={len(self._registry)!r})"


__all__ = (
    "Parser",
)
