"""
Argosy actions: what happens when an option is met on the command line.

Protocol
    action(parser, option, args) -> remaining args

An action receives the leftover tokens that are still unclaimed, consumes as
many leading tokens as the option's arity asks for, writes the result into
parser.namespace[option.dest] and returns the rest. Failures raise a
ParserException; nothing is written and the args are left as they were.

Action is a closed enumeration dispatched through one __call__; an Option
also accepts any other callable with the same signature.

Arity per action
- STORE: "?", "*", "+", "r" or N >= 1.
- APPEND: anything; with 0 (or an unmet "?") it appends the option default.
- STORE_CONST, STORE_TRUE, STORE_FALSE, APPEND_CONST, HELP, VERSION: 0 only.
"""
from enum import StrEnum

from .faults import *
from .validators import validate


def _consume(option, args, /):
    """
    Split args into (values, rest) according to option.nargs, validating
    every consumed value (choices first, then kind).
    """
    match option.nargs:
        case "?":
            count = min(1, len(args))
        case "*" | "r":
            count = len(args)
        case "+":
            if not args:
                raise MissingOneOrMoreArgsError(
                    "%s: at least one argument required" % option.display,
                    title="missing arguments",
                    code=FaultCode.MISSING_ONE_OR_MORE_ARGS,
                    option=option,
                    hint=f"pass one or more values after {option.display}",
                )
            count = len(args)
        case int() as count:
            if len(args) < count:
                raise TooFewArgsError(
                    "%s: too few arguments" % option.display,
                    title="too few arguments",
                    code=FaultCode.TOO_FEW_ARGS,
                    option=option,
                    input=list(args),
                    hint=f"{option.display} expects {count} value{"s" * (count != 1)}, got {len(args)}",
                )
        case _:
            raise TypeError(f"unsupported nargs {option.nargs!r}")

    values = args[:count]
    for value in values:
        validate(option, value)
    return values, args[count:]


def _append(parser, option, values, /):
    current = parser.namespace.get(option.dest, None)
    items = list(current) if isinstance(current, list) else []
    items.extend(values)
    parser.namespace.set(option.dest, items)


class Action(StrEnum):
    STORE = "store"
    STORE_CONST = "store-const"
    STORE_TRUE = "store-true"
    STORE_FALSE = "store-false"
    APPEND = "append"
    APPEND_CONST = "append-const"
    HELP = "help"
    VERSION = "version"

    @property
    def nullary(self):
        """
        True for actions that never consume tokens (arity 0 only).
        """
        return self not in (Action.STORE, Action.APPEND)

    def admits(self, nargs, /):
        """
        Tell whether this action can work with the given arity.
        """
        if self.nullary:
            return nargs == 0
        if self is Action.STORE:
            return nargs != 0
        return True

    def __call__(self, parser, option, args, /):
        args = list(args)
        namespace = parser.namespace

        match self:
            case Action.STORE:
                values, rest = _consume(option, args)
                match option.nargs:
                    case "?":
                        if values:
                            namespace.set(option.dest, values[0])
                    case 1:
                        namespace.set(option.dest, values[0])
                    case _:
                        namespace.set(option.dest, values)
                return rest

            case Action.APPEND:
                values, rest = _consume(option, args)
                if option.nargs == 0 or (option.nargs == "?" and not values):
                    values = [option.default]
                _append(parser, option, values)
                return rest

            case Action.STORE_CONST:
                namespace.set(option.dest, option.const)
            case Action.STORE_TRUE:
                namespace.set(option.dest, True)
            case Action.STORE_FALSE:
                namespace.set(option.dest, False)
            case Action.APPEND_CONST:
                _append(parser, option, [option.const])

            case Action.HELP:
                parser.show_help()
                raise ShowHelpSignal(title="help", code=FaultCode.SHOW_HELP, parser=parser)
            case Action.VERSION:
                parser.show_version()
                raise ShowVersionSignal(title="version", code=FaultCode.SHOW_VERSION, parser=parser)

        return args


__all__ = (
    "Action",
)
