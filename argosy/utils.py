"""
Argosy utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the options, the actions and the parser.
- Host-boundary helpers: the only places that touch the process environment,
  the terminal size or a program path.

Overview
- UnsetType / Unset
  • Singleton sentinel for “value not provided”, distinct from None.
  • Falsey, printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default while keeping None/0/""/[] as given.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property over a private backing field (self._attr); containers
    are handed out as fresh copies so callers cannot mutate declared state.

- progname(path)
  • Program name from an executable path (basename).

- isenvvar(text) / getenv(text)
  • Recognize "$NAME" style defaults and resolve them from os.environ.

- getwidth()
  • Terminal width as rich sees it.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> progname("/usr/local/bin/jwt")
    'jwt'
    >>> isenvvar("$HOME"), isenvvar("HOME")
    (True, False)
"""
import builtins
import functools
import os
import os.path
import re
from collections.abc import Sequence, Mapping, Set
from typing import final

from rich.console import Console


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Used when None is a legitimate user value but the API still has to tell
    “not provided” apart from “provided as None”. The single instance, Unset,
    is the default of internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Sealed and singleton: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case the default is
    returned. Falsey values such as None, 0, "" or [] are preserved.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable, renamed in place.
    - rename(name) -> decorator applying the name to a future callable.

    Raises
    - TypeError on a non-callable target, a non-string name, a callable that
      refuses attribute updates, or the wrong number of arguments.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values.

    - Sequence (non-string): new list (tuples come back as lists).
    - Mapping: new dict with the same keys and processed values.
    - Set: new set.
    - Anything else: returned as-is, with Unset collapsed to None.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return coalesce(object)


def mirror(name, /, *, frozen=False):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" on the instance. Containers are returned as
    fresh copies (see _immortalize); with frozen=True sequences come back as
    tuples instead, for fields whose tuple shape is part of the contract.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        object = getattr(self, "_" + name)
        if frozen and isinstance(object, tuple):
            return object
        return _immortalize(object)

    return property(getter)


def progname(path, /):
    """
    Derive a program name from an executable path ("/usr/bin/jwt" -> "jwt").
    """
    if not isinstance(path, str):
        raise TypeError("progname() argument must be a string")
    return os.path.basename(path.rstrip(os.sep)) or path


_ENVVAR = re.compile(r"\$[A-Za-z_][0-9A-Za-z_]*")


def isenvvar(text, /):
    """
    Tell whether a default value names an environment variable ("$NAME").
    """
    return isinstance(text, str) and _ENVVAR.fullmatch(text) is not None


def getenv(text, /):
    """
    Resolve a "$NAME" reference from the process environment.

    Returns Unset when the variable is not defined; callers decide how to
    report it (the parser raises MissingEnvVarError).
    """
    if not isenvvar(text):
        raise ValueError(f"getenv() argument must look like '$NAME', got {text!r}")
    return os.environ.get(text[1:], Unset)


def getwidth():
    """
    Current terminal width in columns, as detected by rich.

    Honours the COLUMNS environment variable and falls back to 80 columns
    when the output is not a terminal.
    """
    return Console().width


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a meaningful user value, and materialize
it with coalesce(value, default) where a concrete value is needed.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "progname",
    "isenvvar",
    "getenv",
    "getwidth",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
