"""
Argosy tokenizer: split a raw argument vector into option names and leftovers.

Rules
- "-abc" is a group of short options and explodes into "a", "b", "c";
  "-f" yields "f".
- "--name" yields "name". Long names are letters and digits, optionally made
  of hyphen-separated words ("--dry-run"), and must start with a letter.
- Anything else ("value", "-", "-5", "--out=x") is a leftover.
- "--" escapes the single token that follows it: that token becomes a
  leftover whatever it looks like. A trailing "--" is itself a leftover.
  With greedy=True, "--" escapes every token after it instead.

Each output list keeps the input order. How names and leftovers interleaved
is not kept; the parser hands leftovers to options front to back.

    >>> extract_options(["-f", "foobar", "--fizzbuzz", "four", "five", "-irtusc"])
    (['f', 'fizzbuzz', 'i', 'r', 't', 'u', 's', 'c'], ['foobar', 'four', 'five'])
"""
import re

_SHORT = re.compile(r"-([A-Za-z]+)")
_LONG = re.compile(r"--([A-Za-z][A-Za-z0-9]*(?:-[A-Za-z0-9]+)*)")


def isoption(token, /):
    """
    Tell whether a token is option-shaped (short group or long name).
    """
    return bool(_SHORT.fullmatch(token) or _LONG.fullmatch(token))


def extract_options(args, /, *, greedy=False):
    """
    Return (names, leftovers) for the given argument vector.
    """
    names = []
    leftovers = []

    index = 0
    while index < len(args):
        token = args[index]

        if token == "--" and index + 1 < len(args):
            if greedy:
                leftovers.extend(args[index + 1:])
                break
            leftovers.append(args[index + 1])
            index += 2
            continue

        if match := _SHORT.fullmatch(token):
            names.extend(match.group(1))
        elif match := _LONG.fullmatch(token):
            names.append(match.group(1))
        else:
            leftovers.append(token)
        index += 1

    return names, leftovers


__all__ = (
    "isoption",
    "extract_options",
)
