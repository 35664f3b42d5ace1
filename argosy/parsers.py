"""
Argosy parser layer: declare options, parse argument vectors, route commands.

What this module provides
- Parser: owns an ordered list of Options, optional named sub-parsers,
  the Namespace that receives results, and presentation metadata (program
  name, description, usage, epilog, version).
- parser(...): build a Parser, or decorate a callback function into one.
- invoke(parser, prompt): host-boundary runner that reads sys.argv when no
  prompt is given and routes the outcome to the parser callbacks.

Parsing, in order (Parser.parse)
1. Seed the namespace with every option default ("$NAME" defaults come from
   the environment) and note the required and the remainder ("r") options.
2. With sub-parsers, the command is the first argument naming one of them
   that is neither escaped by "--" nor owed as a value to an option before
   it. The tokens before it belong to this parser; the tokens after it go
   to the selected child, whose namespace is merged back into ours.
3. Split tokens into option names and leftovers (argosy.tokens).
4. Resolve each name to the first non-positional option declaring it and run
   its action on the leftovers. Remainder options are left for step 5.
5. If leftovers remain, the first remainder option claims all of them.
6. Positional options consume the leftovers in declaration order.
7. A required option that was never met raises MissingOptionError.

Faults are raised, never printed, by parse(). A parser parses once.

Quick start
    from argosy import Parser, Option, flag, argument

    parser = Parser("copy files", prog="cp", version="1.0.0").add_help().add_version()
    parser.add(
        flag("r recursive", descr="copy directories recursively"),
        Option("m mode", choices=("copy", "link"), default="copy"),
        argument("source"),
        argument("target"),
    )
    namespace, leftovers = parser.parse(["-r", "a", "b"])
"""
import difflib
import functools
import inspect
import operator
import re
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .faults import *
from .formatter import plain, prefixed, render_help, render_usage, render_version
from .actions import Action
from .namespaces import Namespace
from .options import Option
from .tokens import extract_options, isoption
from .utils import *

_COMMAND = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.]*(?:-[A-Za-z0-9_.]+)*")


class ParserType(type):
    """
    Metaclass giving parsers read-only introspectable fields and a stable repr.

    Fields listed in __introspectable__ become mirror() properties over the
    matching "_name" attribute; __displayable__ narrows __rich_repr__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
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
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_strings(cls, metadata, /):
    """
    Internal: presentation scalars.

    - prog: Unset | str, non-empty after trimming.
    - descr, usage, epilog: Unset | str | Text, non-empty after trimming.
    - version: Unset | str, non-empty after trimming.
    Unset values become None.
    """
    for name, types in (
        ("prog", str),
        ("descr", str | Text),
        ("usage", str | Text),
        ("epilog", str | Text),
        ("version", str),
    ):
        if not isinstance(object := metadata[name], types | Unset):
            raise TypeError(f"{cls.__typename__} '{name}' must be a string")
        elif isinstance(object, str) and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} '{name}' cannot be empty")
        metadata[name] = coalesce(object)


def _sanitize_runtime(cls, metadata, /):
    """
    Internal: callback, namespace and runtime flags.

    - callback: Unset | callable (parser, namespace, leftovers, fault).
    - namespace: Unset | Namespace; a fresh Namespace is created when Unset.
    - greedy: bool, "--" escapes every following token instead of one.
    - shell/fancy/colorful: Unset | bool; Unset inherits from the parent
      parser once attached, and is False at the root.
    """
    if not callable(metadata["callback"]) and metadata["callback"] is not Unset:
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")
    metadata["callback"] = coalesce(metadata["callback"])

    if not isinstance(namespace := metadata["namespace"], Namespace | Unset):
        raise TypeError(f"{cls.__typename__} 'namespace' must be a namespace")
    metadata["namespace"] = coalesce(namespace, Namespace())

    metadata["greedy"] = bool(metadata["greedy"])
    for name in ("shell", "fancy", "colorful"):
        if metadata[name] is not Unset:
            metadata[name] = bool(metadata[name])


class Parser(metaclass=ParserType):
    """
    Ordered options plus sub-parsers, and the namespace they fill.

    Lifecycle
    - Built once per command level, filled through add()/add_help()/
      add_version()/add_parser(), then parse() is called exactly once.
    - Runtime flags (shell, fancy, colorful) inherit from the parent parser
      while they are left unset.

    Introspection
    - descr, usage, epilog, version, options, parsers, parent and callback
      are read-only; containers are returned as copies.
    - prog resolves, in order: the explicit program name, "<parent prog>
      <command name>", __main__.__prog__, then the basename of sys.argv[0].
    """

    __introspectable__ = (
        "descr",
        "usage",
        "epilog",
        "version",
        "options",
        "parsers",
        "parent",
        "callback",
    )

    __displayable__ = (
        "prog",
        "descr",
        "version",
        "options",
        "parsers",
        "shell",
        "fancy",
        "colorful",
    )

    def __new__(
            cls,
            descr=Unset,
            /,
            prog=Unset,
            usage=Unset,
            epilog=Unset,
            version=Unset,
            *,
            callback=Unset,
            namespace=Unset,
            greedy=False,
            shell=Unset,
            fancy=Unset,
            colorful=Unset,
    ):
        metadata = {
            "prog": prog,
            "descr": descr,
            "usage": usage,
            "epilog": epilog,
            "version": version,
            "callback": callback,
            "namespace": namespace,
            "greedy": greedy,
            "shell": shell,
            "fancy": fancy,
            "colorful": colorful,
        }
        _sanitize_strings(cls, metadata)
        _sanitize_runtime(cls, metadata)

        self = super().__new__(cls)
        self._options = []
        self._parsers = {}
        self._parent = Unset
        self._name = None
        self._parsed = False
        self._selected = Unset
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def prog(self):
        if self._prog:
            return self._prog
        if self._parent:
            return f"{self._parent.prog} {self._name}"
        return getattr(__import__("__main__"), "__prog__", None) or progname(sys.argv[0])

    @property
    def name(self):
        """
        Command name under the parent parser, None at the root.
        """
        return self._name

    @property
    def namespace(self):
        return self._namespace

    @property
    def shell(self):
        return coalesce(self._shell, getattr(self._parent, "shell", False))

    @property
    def fancy(self):
        return coalesce(self._fancy, getattr(self._parent, "fancy", False))

    @property
    def colorful(self):
        return coalesce(self._colorful, getattr(self._parent, "colorful", False))

    @property
    def root(self):
        """
        Topmost parser of the hierarchy.
        """
        parser = self
        while parser._parent:
            parser = parser._parent
        return parser

    @property
    def route(self):
        """
        Parsers from the root down to this one.
        """
        route = [parser := self]
        while parser._parent:
            route.append(parser := parser._parent)
        return tuple(reversed(route))

    @property
    def leaf(self):
        """
        Deepest parser selected by the last parse (self when no command ran).
        """
        parser = self
        while parser._selected:
            parser = parser._selected
        return parser

    def add(self, *options):
        """
        Register options in declaration order; returns the parser.

        Raises
        - TypeError for anything that is not an Option.
        - ValueError when a name is already declared, or when a positional
          option is added to a parser that routes sub-commands.
        """
        for option in options:
            if not isinstance(option, Option):
                raise TypeError(f"{type(self).__typename__} options must be Option instances")
            if option.positional and self._parsers:
                raise ValueError(f"{type(self).__typename__} with sub-parsers cannot have positional options")
            for name in option.names:
                if any(other.matches(name) for other in self._options):
                    raise ValueError(f"{type(self).__typename__} option name {prefixed(name)!r} is already in use")
            if option.nargs == "r" and any(other.nargs == "r" for other in self._options):
                self.trigger(MultipleRemaindersWarning(
                    "%s: only the first remainder option receives the leftover arguments" % option.display,
                    title="multiple remainders",
                    code=FaultCode.MULTIPLE_REMAINDERS,
                    option=option,
                    hint="declare a single option with nargs='r'",
                ))
            self._options.append(option)
        return self

    def add_help(self):
        return self.add(Option("h help", dest="help", action=Action.HELP, descr="show this help message and exit"))

    def add_version(self):
        return self.add(Option("v version", dest="version", action=Action.VERSION, descr="show version information and exit"))

    def add_parser(self, name, parser, /):
        """
        Mount a child parser as the sub-command `name`; returns self.
        """
        if not isinstance(parser, Parser):
            raise TypeError(f"{type(self).__typename__} sub-parsers must be parsers")
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} command names must be strings")
        if not _COMMAND.fullmatch(name):
            raise ValueError(f"{type(self).__typename__} command name {name!r} is not a valid command name")
        if name in self._parsers:
            raise ValueError(f"{type(self).__typename__} command name {name!r} is already in use")
        if parser._parent or parser in self.route:
            raise ValueError(f"{type(self).__typename__} {name!r} is already attached to a parser")
        if any(option.positional for option in self._options):
            raise ValueError(f"{type(self).__typename__} with positional options cannot have sub-parsers")

        parser._parent = self
        parser._name = name
        self._parsers[name] = parser
        return self

    def get_option(self, name, /):
        """
        Return the option declaring `name` (with or without dashes).
        """
        bare = name.lstrip("-") if isinstance(name, str) else name
        for option in self._options:
            if option.matches(bare):
                return option
        raise InvalidOptionError(
            'invalid flag name "%s"' % name,
            title="invalid option",
            code=FaultCode.INVALID_OPTION,
            input=name,
            parser=self,
        )

    def path(self, path, /):
        """
        Set the program name from an executable path; returns self.
        """
        self._prog = progname(path)
        return self

    def format_usage(self):
        return plain(render_usage(self))

    def format_help(self):
        return plain(render_help(self))

    def format_version(self):
        return plain(render_version(self))

    def show_help(self, *, stderr=False):
        Console(stderr=stderr).print(render_help(self))

    def show_version(self):
        Console().print(render_version(self))

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime flags attached.
        """
        trigger(fault, **options | {
            "parser": self,
            "shell": self.shell,
            "fancy": self.fancy,
            "colorful": self.colorful,
        })

    def _seed(self):
        pending = {}
        remainders = []
        for option in self._options:
            default = option.default
            if isenvvar(default) and (default := getenv(default)) is Unset:
                raise MissingEnvVarError(
                    'missing environmental variable "%s"' % option.default,
                    title="missing environment variable",
                    code=FaultCode.MISSING_ENV_VAR,
                    option=option,
                    input=option.default,
                    hint=f"export {option.default[1:]} before running {self.prog}",
                )
            self._namespace.set(option.dest, default)
            if option.required:
                pending[option] = None
            if option.nargs == "r":
                remainders.append(option)
        return pending, remainders

    def _apply(self, option, leftovers, /):
        remaining = option.action(self, option, list(leftovers))
        if isinstance(remaining, str) or not isinstance(remaining, Iterable):
            raise TypeError(f"action of {option.display} must return the remaining arguments")
        return list(remaining)

    def _consume(self, args, pending, remainders, /):
        names, leftovers = extract_options(args, greedy=self._greedy)

        for name in names:
            for option in self._options:
                if not option.positional and option.matches(name):
                    break
            else:
                known = [other for option in self._options if not option.positional for other in option.names]
                if close := difflib.get_close_matches(name, known, n=1):
                    hint = f"did you mean {prefixed(close[0])}?"
                else:
                    hint = f"run '{self.prog} --help' to see the available options"
                raise InvalidOptionError(
                    'invalid option "%s"' % name,
                    title="invalid option",
                    code=FaultCode.INVALID_OPTION,
                    input=name,
                    parser=self,
                    hint=hint,
                )
            if option in remainders:
                continue
            pending.pop(option, None)
            leftovers = self._apply(option, leftovers)

        for option in remainders:
            if not leftovers:
                break
            pending.pop(option, None)
            leftovers = self._apply(option, leftovers)

        for option in self._options:
            if option.positional and option not in remainders:
                pending.pop(option, None)
                leftovers = self._apply(option, leftovers)

        if pending:
            option = next(iter(pending))
            raise MissingOptionError(
                'option "%s" required' % option.display,
                title="missing option",
                code=FaultCode.MISSING_OPTION,
                option=option,
                parser=self,
                hint=f"pass {option.display}",
            )
        return leftovers

    def _locate(self, args, /):
        """
        Index of the command token, len(args) when there is none.

        Option values are owed front to back, the way actions consume
        leftovers: a non-option token first pays what the options before it
        still owe, and only an unowed token can name a command. Escaped
        tokens are never commands.
        """
        owed = 0
        index = 0
        while index < len(args):
            arg = args[index]
            if arg == "--" and index + 1 < len(args):
                if self._greedy:
                    break
                owed = max(owed - 1, 0)
                index += 2
                continue
            if isoption(arg):
                names, _ = extract_options([arg])
                for name in names:
                    for option in self._options:
                        if not option.positional and option.matches(name):
                            owed += option.nargs if isinstance(option.nargs, int) else int(option.nargs == "+")
                            break
            elif owed:
                owed -= 1
            elif arg in self._parsers:
                return index
            index += 1
        return len(args)

    def parse(self, args=(), /):
        """
        Parse an argument vector (without the program name).

        Returns (namespace, leftovers). Raises ParserException subclasses on
        bad input and ParserSignal subclasses after help/version output.
        Calling parse() twice on the same parser raises RuntimeError.
        """
        if isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        args = list(args)
        if not all(isinstance(arg, str) for arg in args):
            raise TypeError("parse() argument must be an iterable of strings")
        if self._parsed:
            raise RuntimeError(f"{type(self).__typename__} {self.prog!r} can only parse once")
        self._parsed = True

        pending, remainders = self._seed()

        if not self._parsers:
            return self._namespace, self._consume(args, pending, remainders)

        index = self._locate(args)
        leftovers = self._consume(args[:index], pending, remainders)
        if leftovers or index == len(args):
            raise MissingParserError(
                "must use an available command: {%s}" % ",".join(self._parsers),
                title="missing command",
                code=FaultCode.MISSING_PARSER,
                input=leftovers[0] if leftovers else None,
                parser=self,
                hint=f"run '{self.prog} --help' to see the available commands",
            )

        child = self._selected = self._parsers[args[index]]
        namespace, leftovers = child.parse(args[index + 1:])
        self._namespace.update(namespace)
        return self._namespace, leftovers

    def __invoke__(self, prompt=Unset):
        """
        Run this parser against a prompt and route the outcome.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:]; an unset program name is
            taken from sys.argv[0].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        Behavior
        - The callback of the deepest selected parser that has one (walking
          up to the root) receives (parser, namespace, leftovers, fault),
          fault being None on success; its result is returned.
        - Without any callback, faults are surfaced through trigger() and
          (namespace, leftovers) is returned on success.
        """
        if prompt is Unset:
            if not self._prog:
                self.path(sys.argv[0])
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        fault = None
        try:
            namespace, leftovers = self.parse(tokens)
        except (ParserException, ParserSignal) as error:
            fault = error
            namespace, leftovers = self.leaf.namespace, []

        leaf = self.leaf
        for parser in reversed(leaf.route):
            if parser.callback:
                return parser.callback(leaf, namespace, leftovers, fault)

        if fault is not None:
            leaf.trigger(fault)
        return namespace, leftovers


def parser(source=Unset, /, **metadata):
    """
    Create a Parser whose callback is `source`, or return a decorator.

    Forms
    - parser(function, prog="tool", ...) -> Parser
    - @parser(prog="tool", ...) applied to a function -> Parser

    The description defaults to the function's docstring.
    """
    @rename("parser")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@parser() must be applied to a callable")
        descr = metadata.pop("descr", Unset)
        return Parser(coalesce(descr, inspect.getdoc(source) or Unset), callback=source, **metadata)

    return wrapper(source) if source is not Unset else wrapper


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for parsers or plain callbacks.

    - object providing __invoke__: call it with prompt and return its result.
    - plain callable: wrap it with parser() first.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    if callable(object):
        return invoke(parser(object), prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Parser",
    "parser",
    "invoke",
)

del ParserType
