"""
Argosy value validators.

Every token an action consumes goes through two non-mutating checks, in this
order:

1. validate_choice: membership in the option's allowed choices (skipped when
   the option declares none) -> InvalidChoiceError.
2. validate_type: coercibility to the option's declared Kind (skipped for
   untyped and string options) -> InvalidTypeError.

The original string is what gets stored; Kind only answers "could this be
parsed as ...?".
"""
import builtins
import re
from enum import StrEnum

from .faults import FaultCode, InvalidChoiceError, InvalidTypeError

_INTEGER = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")
_BOOLEANS = frozenset({"1", "t", "T", "TRUE", "true", "True", "0", "f", "F", "FALSE", "false", "False"})


class Kind(StrEnum):
    """
    Scalar kind an option's values must be coercible to.
    """
    UNTYPED = "untyped"
    STRING = "string"
    INTEGER = "int"
    UNSIGNED = "uint"
    FLOAT = "float"
    BOOLEAN = "bool"

    @classmethod
    def of(cls, object, /):
        """
        Normalize a kind declaration.

        Accepts a Kind, one of the builtin types str/int/float/bool, None
        (untyped) or a kind name such as "uint". Anything else is a
        declaration bug and fails immediately.
        """
        match object:
            case Kind():
                return object
            case None:
                return cls.UNTYPED
            case builtins.str():
                try:
                    return cls(object)
                except ValueError:
                    raise ValueError(f"unknown kind {object!r} (choose from: {", ".join(cls)})") from None
            case type() if object in _BUILTINS:
                return _BUILTINS[object]
            case _:
                raise TypeError(f"kind must be a Kind, a kind name or one of str, int, float, bool, got {object!r}")

    def accepts(self, text, /):
        """
        Tell whether text parses as this kind.

        Integers are optionally signed decimal digits, unsigned integers are
        plain digits, floats are anything float() takes without surrounding
        whitespace or digit separators, and booleans are the usual spellings
        of true/false (1, t, T, TRUE, true, True and their negatives).
        """
        match self:
            case Kind.UNTYPED | Kind.STRING:
                return True
            case Kind.INTEGER:
                return _INTEGER.fullmatch(text) is not None
            case Kind.UNSIGNED:
                return _UNSIGNED.fullmatch(text) is not None
            case Kind.FLOAT:
                if not text or text != text.strip() or "_" in text:
                    return False
                try:
                    float(text)
                except ValueError:
                    return False
                return True
            case Kind.BOOLEAN:
                return text in _BOOLEANS


_BUILTINS = {
    builtins.str: Kind.STRING,
    builtins.int: Kind.INTEGER,
    builtins.float: Kind.FLOAT,
    builtins.bool: Kind.BOOLEAN,
}


def validate_choice(option, arg, /):
    if option.choices and arg not in option.choices:
        raise InvalidChoiceError(
            '%s: invalid choice "%s" (choose from: %s)' % (option.display, arg, ", ".join(option.choices)),
            title="invalid choice",
            code=FaultCode.INVALID_CHOICE,
            option=option,
            input=arg,
            hint="pick one of {%s}" % ",".join(option.choices),
        )


def validate_type(option, arg, /):
    if not option.type.accepts(arg):
        raise InvalidTypeError(
            '%s: invalid %s value: "%s"' % (option.display, option.type, arg),
            title="invalid value",
            code=FaultCode.INVALID_TYPE,
            option=option,
            input=arg,
            hint=f"{option.display} expects a value of kind {option.type!s}",
        )


def validate(option, arg, /):
    """
    Run both checks on a single token, choices first.
    """
    validate_choice(option, arg)
    validate_type(option, arg)


__all__ = (
    "Kind",
    "validate_choice",
    "validate_type",
    "validate",
)
