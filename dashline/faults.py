"""
Dashline faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue. Codes are
  grouped by domain (scan faults recorded on switches, access faults raised to
  the caller, warnings) so logs and searches stay predictable.
- SwitchFault / SwitchWarning: base types that carry message + options and
  know how to render themselves with rich.
- SwitchExit: an ExceptionGroup bundling every recorded fault of a parser.
- trigger(): surface a fault (raise it, or print it in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Recorded vs raised
- MissingSwitchError, ArityError and ConversionError are *recorded* during the
  matching pass: the parser stores them on the switch and hands them back in the
  registration result. They are never raised by registration.
- StateError and ValueIndexError are *raised* immediately when a caller reads a
  value it is not allowed to read.

Host customization (read from __main__)
- __codes__: mapping FaultCode -> label, used by FaultCode.normalize().
- __styles__: palette overrides for the rich renderers.
- __prog__: program name shown in fault headers.
- __docs__: mapping FaultCode -> documentation string, used by getdoc().
"""
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - scan faults (2111x), recorded on the switch during its matching pass
      • MISSING_SWITCH, NOT_ENOUGH_VALUES, UNCASTABLE_VALUE
    - access faults (2112x), raised when reading values
      • UNMATCHED_SWITCH, VALUE_OUT_OF_RANGE
    - warnings (2211x)
      • DUPLICATED_FLAG
    """
    # --- scan faults (21xxx) ---
    MISSING_SWITCH              = 21111
    NOT_ENOUGH_VALUES           = 21112
    UNCASTABLE_VALUE            = 21113

    # --- access faults (21xxx) ---
    UNMATCHED_SWITCH            = 21121
    VALUE_OUT_OF_RANGE          = 21122

    # --- warnings (22xxx) ---
    DUPLICATED_FLAG             = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(self, palette):
    """
    build the (header, message, hint) triple shared by faults and warnings.
    """
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = self.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    prog = getattr(main, "__prog__", self.options.get("prog") or "dashline")
    code = self.options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize() if code else "?", "code"),
        " | ",
        text(str(self.options.get("title", "")).title(), "title"),
        " ]"
    )
    message = text(self.message, "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))
    return header, message, hint


class SwitchFault(Exception):
    """
    base fault: a message plus read-only options (code, title, hint, flag, index, token, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def flag(self):
        return self.options.get("flag")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        header, message, hint = _renderer(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })
        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")
        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingSwitchError(SwitchFault): ...
class ArityError(SwitchFault): ...
class ConversionError(SwitchFault): ...
class StateError(SwitchFault): ...
class ValueIndexError(SwitchFault, IndexError): ...


class SwitchWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        header, message, hint = _renderer(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })
        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")
        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicatedFlagWarning(SwitchWarning): ...


class SwitchExit(ExceptionGroup):
    """
    every fault recorded by a parser, bundled for a single raise or render.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad command line", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad command line", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "title": "bold #FF4DA6",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(main, "__prog__", self.options.get("prog") or "dashline")
        header = Text.assemble("[ ", text(prog, "prog-name"), " — ", text(self.message.title(), "title"), " ]")

        renders = [exception.__replace__(**self.options) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=True the fault is printed on stderr (errors then exit unless
      deferred=True); otherwise errors are raised and warnings are emitted.
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
    optional documentation fetch for a fault code from a __docs__ mapping in __main__.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "SwitchFault",
    "MissingSwitchError",
    "ArityError",
    "ConversionError",
    "StateError",
    "ValueIndexError",
    "SwitchWarning",
    "DuplicatedFlagWarning",
    "SwitchExit",
    "FaultCode",
    "trigger",
    "getdoc",
)
