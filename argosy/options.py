r"""
Argosy option declarations.

Overview
- Option: immutable descriptor of one parseable unit. It can be a named
  option (-o/--output) or a positional argument, and records how many tokens
  it consumes (nargs), what happens with them (action), how values are
  checked (type, choices), and how it is presented (descr, metavar).
- Factories
  • option(...): plain Option.
  • flag(...): presence-only switch, store-true with nargs 0.
  • argument(...): positional Option storing a single value.

- Introspection & representation
  • OptionType metaclass exposes the sanitized fields listed in
    __introspectable__ as read-only properties and provides stable
    __repr__/__rich_repr__ implementations.

Metadata (sanitized on construction)
- names: bare identifiers without dashes, r"[A-Za-z][A-Za-z0-9]*(-[A-Za-z0-9]+)*".
  One-letter names display as "-x", longer ones as "--name". A single string
  with spaces ("o output") declares several names.
- dest: namespace key, defaults to the first name.
- nargs: int >= 0 | "?" | "*" | "+" | "r" (remainder). Digit strings become
  ints and "R" becomes "r". Defaults to 0 for nullary actions and custom
  callables, 1 for store/append.
- action: Action member or name (default store), or any callable
  (parser, option, args) -> args.
- const, default: values used by the const/default driven actions. The
  default of store-true is False, of store-false True, otherwise None.
- type: Kind, kind name, str/int/float/bool or None (untyped).
- choices: strings; duplicates rejected unless given as a set (sets are sorted).
- required, positional: bool.
- descr, metavar: presentation only.

Validation highlights
- Incompatible action/arity pairs (store-true with nargs 1, store with nargs 0,
  ...) fail at construction with TypeError.
- Invalid names, arities, kinds or choices fail with TypeError/ValueError.

Quick example:
    >>> output = Option("o output", dest="out", required=True)
    >>> output.display
    '-o, --output'
    >>> output.replace(nargs="+").nargs
    '+'
"""
import functools
import operator
import re
from collections.abc import Iterable, Set
from types import MappingProxyType

from rich.text import Text

from .actions import Action
from .utils import *
from .validators import Kind

_NAME = re.compile(r"[A-Za-z][A-Za-z0-9]*(?:-[A-Za-z0-9]+)*")


class OptionType(type):
    """
    Metaclass that turns option declarations into introspectable, read-only descriptors.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_name" field (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens, lowercased) and used in messages.
    - __displayable__ (if set) narrows what __rich_repr__ shows.
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
                name: mirror(name, frozen=True) for name in namespace.get("__introspectable__", ())
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


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate names and derive dest.

    - Every name must be a string; strings with whitespace declare several
      names at once.
    - Names are given bare (no dash prefix) and must match _NAME.
    - Duplicates are rejected; declaration order is kept.
    - dest defaults to the first name and must be a non-empty string.
    """
    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (parts := name.split()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        for part in parts:
            if part.startswith("-"):
                raise ValueError(f"{cls.__typename__} names are declared without dashes, got {part!r}")
            elif not _NAME.fullmatch(part):
                raise ValueError(f"{cls.__typename__} names must be letters and digits, optionally hyphen-separated, got {part!r}")
            elif part in names:
                raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
            names.append(part)

    if not names:
        raise TypeError(f"{cls.__typename__} must specify at least one name")
    metadata["names"] = tuple(names)

    if not isinstance(dest := metadata["dest"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'dest' must be a string")
    elif isinstance(dest, str) and not (dest := dest.strip()):
        raise ValueError(f"{cls.__typename__} 'dest' cannot be empty")
    metadata["dest"] = coalesce(dest, names[0])


def _sanitize_behavioral_metadata(cls, metadata, /):
    """
    Internal: normalize action and nargs, then check they fit together.

    - action: Unset -> Action.STORE; action names are looked up in Action;
      other callables are accepted as custom actions.
    - nargs: see the module docstring; Unset is derived from the action.
    - Action.admits(nargs) must hold for enumerated actions.
    """
    match action := metadata["action"]:
        case UnsetType():
            action = Action.STORE
        case Action():
            pass
        case str():
            try:
                action = Action(action)
            except ValueError:
                raise ValueError(f"{cls.__typename__} 'action' must be one of {", ".join(Action)}") from None
        case _ if not callable(action):
            raise TypeError(f"{cls.__typename__} 'action' must be an action or a callable")
    metadata["action"] = action

    match nargs := metadata["nargs"]:
        case UnsetType():
            nargs = 1 if isinstance(action, Action) and not action.nullary else 0
        case bool():
            raise TypeError(f"{cls.__typename__} 'nargs' must be a string or an integer")
        case int() if nargs < 0:
            raise ValueError(f"{cls.__typename__} 'nargs' must be a non-negative integer")
        case int() | "?" | "*" | "+" | "r":
            pass
        case "R":
            nargs = "r"
        case str() if nargs.isascii() and nargs.isdigit():
            nargs = int(nargs)
        case str():
            raise ValueError(f"{cls.__typename__} 'nargs' must be one of '?', '*', '+', 'r', or a count")
        case _:
            raise TypeError(f"{cls.__typename__} 'nargs' must be a string or an integer")
    metadata["nargs"] = nargs

    if isinstance(action, Action) and not action.admits(nargs):
        if action.nullary:
            raise TypeError(f"{cls.__typename__} action '{action}' requires 'nargs' to be 0, got {nargs!r}")
        raise TypeError(f"{cls.__typename__} action '{action}' must consume at least one value")


def _sanitize_valued_metadata(cls, metadata, /):
    """
    Internal: normalize type, choices, default and the boolean switches.

    default is not validated against type or choices; it is whatever the
    host wants to find in the namespace when the option is absent.
    """
    metadata["type"] = Kind.of(metadata["type"])

    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    if isinstance(choices, Set):
        choices = sorted(choices)
    else:
        sanitized = []
        for choice in choices:
            if choice in sanitized:
                raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
            sanitized.append(choice)
        choices = sanitized
    if not all(isinstance(choice, str) for choice in choices):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    metadata["choices"] = tuple(choices)

    if metadata["default"] is Unset:
        metadata["default"] = {Action.STORE_TRUE: False, Action.STORE_FALSE: True}.get(metadata["action"])

    metadata["required"] = bool(metadata["required"])
    metadata["positional"] = bool(metadata["positional"])


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: presentation fields.

    - descr: Unset | str | Text, non-empty after trimming; Unset becomes None.
    - metavar: Unset | str | Iterable[str]; normalized to a tuple of
      non-empty labels (empty tuple when Unset).
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    match metavar := metadata["metavar"]:
        case UnsetType():
            metavar = ()
        case str():
            metavar = (metavar,)
        case Iterable():
            metavar = tuple(metavar)
        case _:
            raise TypeError(f"{cls.__typename__} 'metavar' must be a string or an iterable of strings")
    for label in metavar:
        if not isinstance(label, str):
            raise TypeError(f"{cls.__typename__} 'metavar' must be a string or an iterable of strings")
        elif not label.strip():
            raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = tuple(label.strip() for label in metavar)


class Option(metaclass=OptionType):
    """
    Declaration of a named option or a positional argument.

    Instances are immutable: fields are read-only properties and replace()
    returns a new, fully re-validated Option. replace() starts from the
    arguments the option was built with, so derived values (nargs from the
    action, default from the action, dest from the first name) follow the
    change instead of sticking to the old derivation.
    """

    __introspectable__ = (
        "names",
        "dest",
        "nargs",
        "action",
        "const",
        "default",
        "type",
        "choices",
        "required",
        "positional",
        "descr",
        "metavar",
    )

    def __new__(
            cls,
            *names,
            dest=Unset,
            nargs=Unset,
            action=Unset,
            const=None,
            default=Unset,
            type=Kind.UNTYPED,
            choices=(),
            required=False,
            positional=False,
            descr=Unset,
            metavar=Unset,
    ):
        metadata = {
            "names": names,
            "dest": dest,
            "nargs": nargs,
            "action": action,
            "const": const,
            "default": default,
            "type": type,
            "choices": choices,
            "required": required,
            "positional": positional,
            "descr": descr,
            "metavar": metavar,
        }
        arguments = MappingProxyType(dict(metadata))

        _sanitize_names(cls, metadata)
        _sanitize_behavioral_metadata(cls, metadata)
        _sanitize_valued_metadata(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        self._arguments = arguments
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def display(self):
        """
        Public names with their dash prefixes, e.g. "-o, --output".
        Positional options show their names bare.
        """
        if self._positional:
            return ", ".join(self._names)
        return ", ".join(("-" if len(name) == 1 else "--") + name for name in self._names)

    def matches(self, name, /):
        return name in self._names

    def replace(self, /, **changes):
        arguments = dict(self._arguments) | changes
        names = arguments.pop("names")
        if isinstance(names, str):
            names = (names,)
        return type(self)(*names, **arguments)

    __replace__ = replace

    def __str__(self):
        return self.display


def option(*names, **metadata):
    """
    Build an Option (store one value by default).
    """
    return Option(*names, **metadata)


def flag(*names, **metadata):
    """
    Build a presence-only switch: store-true, nargs 0, default False.
    """
    metadata.setdefault("action", Action.STORE_TRUE)
    return Option(*names, **metadata)


def argument(*names, **metadata):
    """
    Build a positional argument storing exactly one value.
    """
    metadata.setdefault("action", Action.STORE)
    metadata.setdefault("nargs", 1)
    metadata.setdefault("positional", True)
    return Option(*names, **metadata)


__all__ = (
    "Option",
    "option",
    "flag",
    "argument",
)

del OptionType
