"""
Argosy faults (errors, signals and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue, grouped by
  domain so messages and searches stay predictable.
- ParserException: base of every parse-time error. Carries a message plus
  structured options and knows how to render and surface itself.
- ParserSignal: "stop normal processing" conditions raised after help or
  version text has been shown. They are not errors, so they do not derive
  from ParserException.
- ParserWarning: non-fatal diagnostics about parser declarations.
- trigger(): central entry point to surface any fault with runtime options.
- getdoc(): optional description lookup for a code from the host application.

Options understood by the renderers
- parser: the Parser the fault belongs to (used for the program name).
- title, code, hint: header and footer copy.
- option, input: the Option and the offending token, when relevant.
- shell, fancy, colorful: runtime flags (see Parser).

Integration
- Parser.parse raises faults directly; nothing is printed.
- Parser.invoke / Parser.trigger merge the parser's runtime flags and call
  __trigger__: raise in library mode, render through rich in shell mode.
"""
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce, progname

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - signals (1000x)
      • SHOW_HELP, SHOW_VERSION
    - routing (1110x)
      • MISSING_PARSER
    - options and values (1111x)
      • INVALID_OPTION, INVALID_CHOICE, INVALID_TYPE, TOO_FEW_ARGS,
        MISSING_ONE_OR_MORE_ARGS, MISSING_OPTION
    - environment (1112x)
      • MISSING_ENV_VAR
    - warnings (12xxx)
      • MULTIPLE_REMAINDERS
    """
    # --- signals (10xxx) ---
    SHOW_HELP                = 10001
    SHOW_VERSION             = 10002

    # --- routing errors (11xxx) ---
    MISSING_PARSER           = 11101

    # --- option/value errors (11xxx) ---
    INVALID_OPTION           = 11111
    INVALID_CHOICE           = 11112
    INVALID_TYPE             = 11113
    TOO_FEW_ARGS             = 11114
    MISSING_ONE_OR_MORE_ARGS = 11115
    MISSING_OPTION           = 11116

    # --- environment errors (11xxx) ---
    MISSING_ENV_VAR          = 11121

    # --- warnings (12xxx) ---
    MULTIPLE_REMAINDERS      = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_PALETTES = {
    "error": {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "title": "bold #FF4DA6",
        "message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    },
    "warning": {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "title": "bold #FFC2E0",
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    },
}


def _render(fault, palette, /):
    """
    Build the rich renderable shared by errors and warnings.

    Layout: "[ prog — code | title ]", the message, then an optional hint
    line. With fancy=True the body goes into a panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)

    styles = defaultdict(str, _PALETTES[palette] | getattr(main, "__styles__", {}))

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

    if parser := options.get("parser"):
        prog = parser.prog
    else:
        prog = getattr(main, "__prog__", progname(sys.argv[0]))

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(code.normalize() if code else "-", styler("code")),
        " | ",
        text(str(options.get("title", palette)).title(), styler("title")),
        " ]"
    )
    body = [text(fault.message, styler("message"))]
    if hint := options.get("hint"):
        body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if options.get("fancy", False):
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class _Fault:
    """
    Shared plumbing of faults: a message and a read-only options mapping.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParserException(_Fault, Exception):
    """
    Base class of every error raised while parsing user input.
    """

    def __rich__(self):
        return _render(self, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        if parser := self.options.get("parser"):
            parser.show_help(stderr=True)
            console.print()
        console.print(self)
        sys.exit(1)


class InvalidOptionError(ParserException): ...
class InvalidChoiceError(ParserException): ...
class InvalidTypeError(ParserException): ...
class TooFewArgsError(ParserException): ...
class MissingOneOrMoreArgsError(ParserException): ...
class MissingOptionError(ParserException): ...
class MissingParserError(ParserException): ...
class MissingEnvVarError(ParserException): ...


class ParserSignal(_Fault, Exception):
    """
    Base class of "halt normal processing" signals.

    The side effect (help or version text) has already happened when a signal
    is raised; the host decides whether to stop. In shell mode the process
    exits with status 0.
    """

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        sys.exit(0)


class ShowHelpSignal(ParserSignal): ...
class ShowVersionSignal(ParserSignal): ...


class ParserWarning(_Fault, Warning):
    """
    Base class of non-fatal diagnostics about parser declarations.
    """

    def __rich__(self):
        return _render(self, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=4)
        console.print(self)


class MultipleRemaindersWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, errors and
      signals are raised and warnings go through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode members and values are short documentation strings. when
    no entry exists, None is returned.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParserException",
    "InvalidOptionError",
    "InvalidChoiceError",
    "InvalidTypeError",
    "TooFewArgsError",
    "MissingOneOrMoreArgsError",
    "MissingOptionError",
    "MissingParserError",
    "MissingEnvVarError",
    "ParserSignal",
    "ShowHelpSignal",
    "ShowVersionSignal",
    "ParserWarning",
    "MultipleRemaindersWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
