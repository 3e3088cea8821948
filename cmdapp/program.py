"""
cmdapp program metadata and the built-in help/version renderers.

What this module provides
- Program: descriptive metadata of the running program (name, description,
  authors, copyright year, semantic version, extra versioning info, synopses).
  Setters ignore None and negative numbers instead of failing, so metadata
  calls can be written unconditionally at program start.
- render_help(program, options, ...): usage lines, description, and the
  option list with wrapped, hanging-indent descriptions.
- render_version(program, ...): "<name> <x.y.z>" and a copyright line.

Styling
- Palette keys can be overridden through __styles__ in __main__.
- colorful=False strips every style; fancy=True wraps the output in a panel.
"""
import datetime
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .behaviors import Argument
from .utils import *


class Program:
    """
    Descriptive metadata of the program that owns a parser.

    Properties (read-only)
    - name: str (program name as invoked; "cmdapp" until known)
    - descr: str | None
    - authors: list[str] (copy, registration order)
    - since: int | None (year when copyright began)
    - release: tuple[int, int, int] (major, minor, patch)
    - notice: str | None (additional versioning information)
    - synopses: list[str] (copy, registration order)
    """

    name = view("name")
    descr = view("descr")
    authors = mirror("authors")
    since = view("since")
    release = view("release")
    notice = view("notice")
    synopses = mirror("synopses")

    def __init__(self, name=Unset, /, descr=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError("program name must be a string")
        if not isinstance(descr, str | Unset):
            raise TypeError("program description must be a string")
        self._name = coalesce(name, "cmdapp")
        self._named = name is not Unset
        self._descr = coalesce(descr)
        self._authors = []
        self._since = None
        self._release = (0, 0, 0)
        self._notice = None
        self._synopses = []

    def rename(self, name, /, *, weak=False):
        """
        Set the program name; with weak=True only when no name was given yet.
        """
        if not isinstance(name, str):
            raise TypeError("program name must be a string")
        if weak and self._named:
            return
        self._name = name
        self._named = True

    def describe(self, descr, /):
        if descr is not None:
            self._descr = descr

    def author(self, author, /):
        if author is not None:
            self._authors.append(author)

    def year(self, year, /):
        if year is not None and year >= 0:
            self._since = year

    def version(self, major, minor, patch, /):
        if major >= 0 and minor >= 0 and patch >= 0:
            self._release = (major, minor, patch)

    def info(self, info, /):
        if info is not None:
            self._notice = info

    def synopsis(self, synopsis, /):
        if synopsis is not None:
            self._synopses.append(synopsis)

    @property
    def copyright(self):
        """
        "Copyright (C) <year>[-<this year>] <authors>." plus the versioning notice.

        the period after the author list is always printed, even with no authors.
        """
        years = ""
        if self._since is not None:
            current = datetime.date.today().year
            years = (str(self._since) if self._since == current else f"{self._since}-{current}") + " "
        line = f"Copyright (C) {years}{", ".join(self._authors)}."
        if self._notice:
            line += " " + self._notice
        return line

    def __repr__(self):
        return f"program(name={self._name!r}, release={".".join(map(str, self._release))!r})"


def _palette(colorful, defaults):
    styles = defaultdict(str, defaults | getattr(__import__('__main__'), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        # Normalize to Rich Text. In non-colorful mode, strip styles; preserve existing Text spans.
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def render_help(program, options, /, *, colorful=False, fancy=False, console=None):
    """
    Render the help screen of a program.

    Layout
    - one "usage:" line per synopsis (or "<name> [OPTION]..." when none).
    - description paragraph, if any.
    - "options:" section: "-s, --long ARG" names column, then the description
      wrapped with a hanging indent.
    """
    console = console or Console()
    styler, text = _palette(colorful, {
            "usage-label": "bold #FF4D94",  # Magenta usage headline
            "program-name": "bold #E6E6F0",
            "usage-section": "#E5E7EB",
            "description-section": "#D1D5DB",
            "group-label": "bold #FFD600",  # Amber section headline
            "option-name": "bold #36C5F0",  # Sky-blue option names
            "metavar": "italic #22C55E",
            "argument-description": "#9CA3AF",
            "panel-title": "bold #FF4D94",
            "panel-subtitle": "#9CA3AF",
    })

    renders = []
    width = console.width - 4 * fancy  # Account for panel gutters when fancy=True

    usage = Text()
    offset = len("usage: ")
    for index, synopsis in enumerate(program.synopses or ["[OPTION]..."]):
        if index == 0:
            usage.append(text("usage", styler("usage-label"))).append(": ")
        else:
            usage.append("\n").append(" " * offset)
        usage.append(text(program.name, styler("program-name")))
        usage.append(" ").append(text(synopsis, styler("usage-section")))
    renders.append(usage.append("\n"))

    if program.descr:
        renders.append(text(program.descr, styler("description-section")).append("\n"))

    section = Text()
    section.append(text("options", styler("group-label"))).append(":").append("\n")

    padding = 2   # Leading spaces before the names column
    indent = 24   # Column for description wrap/hanging indent

    for option in options:
        names = Text(" " * padding)
        if option.short:
            names.append(text("-" + option.short, styler("option-name"))).append(", ")
        else:
            names.append("    ")
        names.append(text("--" + option.long, styler("option-name")))
        match option.argument:
            case Argument.REQUIRED:
                names.append(" ").append(text(option.metavar, styler("metavar")))
            case Argument.OPTIONAL:
                names.append(" [").append(text(option.metavar, styler("metavar"))).append("]")

        if descr := text(option.descr, styler("argument-description")):
            # Break before the description when the names column is too wide
            if len(names) >= indent - 1:
                names.append("\n").append(" " * indent)
            else:
                names.append(" " * (indent - len(names)))
            wrapped = descr.wrap(console, max(width - indent, 16))
            for index, line in enumerate(wrapped):
                if index:
                    names.append("\n").append(" " * indent)
                names.append(line)

        section.append(names).append("\n")

    renders.append(section)
    renders[-1].rstrip()  # Trim trailing newline on the last chunk

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{program.name} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
            subtitle=text(program.copyright if program.since is not None else "", styler("panel-subtitle")),
        )

    console.print(renderable)


def render_version(program, /, *, colorful=False, fancy=False, console=None):
    """
    Render version information: "<name> <major>.<minor>.<patch>" then the copyright line.
    """
    console = console or Console()
    styler, text = _palette(colorful, {
            "program-name": "bold #FF4D94",  # Magenta-pink brand pop
            "program-version": "bold #00E6FF",  # Cyan version (clear contrast)
            "copyright-section": "#9CA3AF",  # Neutral gray
            "panel-title": "bold #FF4D94",
    })

    renders = [
        Text(" ").join((
            text(program.name, styler("program-name")),
            text(".".join(map(str, program.release)), styler("program-version")),
        )),
        text(program.copyright, styler("copyright-section")),
    ]

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{program.name} VERSION".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    console.print(renderable)


__all__ = (
    "Program",
    "render_help",
    "render_version",
)
