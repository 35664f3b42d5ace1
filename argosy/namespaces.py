"""
Argosy namespace: the result store of a parse.

A Namespace maps destination names to values. Values are strings, lists of
strings, booleans, or whatever default/const the option declared. Keys keep
insertion order, which is declaration order after a parse since the parser
seeds every destination before reading argv.

Reading
- namespace["out"] / namespace.get("out") raise KeyError for unknown keys;
  get() accepts an explicit fallback. An unset key is never reported as "".
- exists(key) / key in namespace.
- string(), sequence(), boolean() check the stored runtime type.
- integer(), unsigned(), floating() parse a stored string.
  Both families raise InvalidTypeError on mismatch.

Writing
- set(key, value) overwrites and returns the namespace for chaining.
- update(other) merges another namespace (used for sub-parser results).
There is no deletion.
"""
from collections.abc import Mapping

from .faults import FaultCode, InvalidTypeError, MissingOptionError
from .utils import Unset
from .validators import Kind


class Namespace:
    __slots__ = ("_mapping",)

    def __init__(self, mapping=(), /):
        self._mapping = dict(mapping)

    def set(self, key, value, /):
        if not isinstance(key, str):
            raise TypeError("namespace keys must be strings")
        self._mapping[key] = value
        return self

    def get(self, key, default=Unset, /):
        try:
            return self._mapping[key]
        except KeyError:
            if default is Unset:
                raise KeyError(key) from None
            return default

    def exists(self, key, /):
        return key in self._mapping

    def require(self, *keys):
        """
        Assert that every key is present; the first missing one raises
        MissingOptionError.
        """
        for key in keys:
            if key not in self._mapping:
                raise MissingOptionError(
                    'option "%s" required' % key,
                    title="missing option",
                    code=FaultCode.MISSING_OPTION,
                    input=key,
                )
        return self

    def update(self, other, /):
        if not isinstance(other, Namespace | Mapping):
            raise TypeError("update() argument must be a namespace or a mapping")
        for key, value in other.items():
            self.set(key, value)
        return self

    def _typed(self, key, expected, kind, /):
        value = self.get(key)
        if not isinstance(value, expected):
            raise InvalidTypeError(
                '%s: invalid %s value: "%s"' % (key, kind, value),
                title="invalid value",
                code=FaultCode.INVALID_TYPE,
                input=value,
            )
        return value

    def string(self, key, /):
        return self._typed(key, str, Kind.STRING)

    def sequence(self, key, /):
        return list(self._typed(key, list | tuple, "sequence"))

    def boolean(self, key, /):
        """
        Return a stored bool. Strings spelling a boolean ("true", "0", "F",
        ...) are accepted too, since bool-kind options store the raw token.
        """
        value = self.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and Kind.BOOLEAN.accepts(value):
            return value in ("1", "t", "T", "TRUE", "true", "True")
        return self._typed(key, bool, Kind.BOOLEAN)

    def _coerced(self, key, kind, convert, /):
        value = self._typed(key, str, kind)
        if not kind.accepts(value):
            raise InvalidTypeError(
                '%s: invalid %s value: "%s"' % (key, kind, value),
                title="invalid value",
                code=FaultCode.INVALID_TYPE,
                input=value,
            )
        return convert(value)

    def integer(self, key, /):
        return self._coerced(key, Kind.INTEGER, int)

    def unsigned(self, key, /):
        return self._coerced(key, Kind.UNSIGNED, int)

    def floating(self, key, /):
        return self._coerced(key, Kind.FLOAT, float)

    def keys(self):
        return self._mapping.keys()

    def values(self):
        return self._mapping.values()

    def items(self):
        return self._mapping.items()

    def __getitem__(self, key, /):
        return self.get(key)

    def __contains__(self, key, /):
        return self.exists(key)

    def __iter__(self):
        return iter(self._mapping)

    def __len__(self):
        return len(self._mapping)

    def __eq__(self, other, /):
        if isinstance(other, Namespace):
            return self._mapping == other._mapping
        if isinstance(other, Mapping):
            return self._mapping == dict(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return "namespace(%s)" % ", ".join("%s=%r" % item for item in self._mapping.items())

    def __rich_repr__(self):
        yield from self._mapping.items()


__all__ = (
    "Namespace",
)
