"""
Argosy help, usage and version rendering.

The parser core never formats text itself; it asks this module for rich
renderables (show_help/show_version) or plain strings (format_*).

Fragments
- prefixed(name): "-x" for one-letter names, "--name" otherwise.
- choices(option): "{a,b}" or "" when unrestricted.
- shape(option): the arity-shaped metavar ("OUT", "[OUT]", "OUT [OUT ...]",
  "[OUT [OUT ...]]", "...").
- usage(option): one usage-line fragment. Optional named options are
  bracketed and show their first name only; positionals show the shape.

Layout of render_help()
    usage: <prog> <fragments...>

    <descr>

    commands:
      <name>           <descr>

    positional arguments:
      <usage>          <descr>

    optional arguments:
      -o, --out OUT    <descr>

    <epilog>

Styling
- Palette keys: usage-label, program-name, usage-section, description-section,
  epilog-section, group-label, argument-description, option-name, metavar,
  children, program-version, panel-title.
- Define a mapping named __styles__ in __main__ to override any entry; when
  the parser is not colorful the palette is ignored.
"""
from collections import defaultdict, deque

from rich.console import Console, Group
from rich.containers import Lines
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce, getwidth


def prefixed(name, /):
    return ("-" if len(name) == 1 else "--") + name


def choices(option, /):
    if not option.choices:
        return ""
    return "{%s}" % ",".join(option.choices)


def _labels(option, /):
    if option.metavar:
        return list(option.metavar)
    if option.choices:
        return [choices(option)]
    return [option.dest if option.positional else option.dest.upper()]


def shape(option, /):
    labels = _labels(option)
    first = labels[0]
    second = labels[1] if len(labels) > 1 else first

    match option.nargs:
        case "?":
            return f"[{first}]"
        case "*":
            return f"[{first} [{second} ...]]"
        case "+":
            return f"{first} [{second} ...]"
        case "r":
            return "..."
        case int() as count:
            return " ".join(labels[index] if index < len(labels) else labels[-1] for index in range(count))


def usage(option, /):
    if option.positional:
        return shape(option) or option.dest
    fragment = " ".join(filter(None, (prefixed(option.names[0]), shape(option))))
    return fragment if option.required else f"[{fragment}]"


def _palette(parser, /):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "usage-section": "bold #36C5F0",
        "description-section": "italic #A3A3A3",
        "epilog-section": "#737373",

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",
        "argument-description": "#9CA3AF",
        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "children": "bold #36C5F0",

        # === Version ===
        "program-version": "bold #00E6FF",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not parser.colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def render_usage(parser, /, *, width=Unset):
    """
    Build the "usage: ..." line. Fragments wrap under the program name.
    """
    styler, text = _palette(parser)
    width = coalesce(width, getwidth())

    line = Text()
    line.append("usage", styler("usage-label")).append(": ")
    if parser.usage:
        return line.append(text(parser.usage, styler("usage-section")))

    line.append(text(parser.prog, styler("program-name")))
    offset = len(line) + 1

    options = sorted(parser.options, key=lambda option: option.positional)
    fragments = deque(text(usage(option), styler("usage-section")) for option in options)
    if parser.parsers:
        fragments.append(text("{%s} ..." % ",".join(parser.parsers), styler("children")))

    lines = Lines()
    while fragments:
        fragment = fragments.popleft()
        if lines and len(lines[-1]) + 1 + len(fragment) <= width - offset:
            lines[-1].append(Text(" ") + fragment)
        else:
            lines.append(fragment)

    for index, fragment in enumerate(lines):
        line.append(" " if index == 0 else "\n" + " " * offset).append(fragment)
    return line


def render_help(parser, /, *, width=Unset):
    """
    Build the help renderable of a parser.
    """
    styler, text = _palette(parser)
    width = coalesce(width, getwidth()) - 4 * parser.fancy
    console = Console(width=max(width, 20))

    options = parser.options
    positionals = [option for option in options if option.positional]
    named = [option for option in options if not option.positional]

    renders = [render_usage(parser, width=width)]

    if parser.descr:
        renders.append(text(parser.descr, styler("description-section")))

    sections = []
    if parser.parsers:
        sections.append(("commands", [
            (text(name, styler("children")), child.descr) for name, child in parser.parsers.items()
        ]))
    if positionals:
        sections.append(("positional arguments", [
            (text(usage(option), styler("metavar")), option.descr) for option in positionals
        ]))
    if named:
        rows = []
        for option in named:
            label = text(option.display, styler("option-name"))
            if option.nargs != 0:
                label = Text.assemble(label, " ", text(shape(option), styler("metavar")))
            rows.append((label, option.descr))
        sections.append(("optional arguments", rows))

    padding = 2
    longest = max((len(label) for _, rows in sections for label, _ in rows), default=0)
    indent = min(padding + longest + 2, max(width // 2, padding + 2))

    for title, rows in sections:
        section = Text()
        section.append(text(title, styler("group-label"))).append(":")
        for label, descr in rows:
            section.append("\n").append(" " * padding).append(label)
            if not descr:
                continue
            if padding + len(label) + 2 > indent:
                section.append("\n").append(" " * indent)
            else:
                section.append(" " * (indent - padding - len(label)))
            wrapped = text(descr, styler("argument-description")).wrap(console, max(width - indent, 10))
            for index, line in enumerate(wrapped):
                if index:
                    section.append("\n").append(" " * indent)
                section.append(line)
        renders.append(section)

    if parser.epilog:
        renders.append(text(parser.epilog, styler("epilog-section")))

    renderable = Group(*_spaced(renders))
    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{parser.prog} HELP".upper(), " ]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


def render_version(parser, /):
    """
    Build the version renderable: "<prog> version <version>".
    """
    styler, text = _palette(parser)
    renderable = Text.assemble(
        text(parser.prog, styler("program-name")),
        " version ",
        text(coalesce(parser.version, None) or "unknown", styler("program-version")),
    )
    if parser.fancy:
        return Panel(
            renderable,
            title=Text.assemble("[ ", f"{parser.prog} VERSION".upper(), " ]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


def _spaced(renders, /):
    for index, render in enumerate(renders):
        if index:
            yield Text("")
        yield render


def plain(renderable, /, *, width=Unset):
    """
    Render to a plain string (no styles, no colors).
    """
    console = Console(width=coalesce(width, getwidth()), color_system=None)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


__all__ = (
    "prefixed",
    "choices",
    "shape",
    "usage",
    "render_usage",
    "render_help",
    "render_version",
    "plain",
)
