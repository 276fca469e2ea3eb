r"""
Dashline switch handles.

Overview
- Switch: a single-character, presence-only flag (e.g. -v), possibly clustered
  with other boolean switches in one token (-vV).
- ValueSwitch[_T]: a Switch that consumes exactly `nargs` tokens after it and
  converts each one to its element type (int, unsigned, float or str).

Ownership
- Handles are created by Parser.add_switch()/Parser.add_value_switch() and owned
  by that parser. The matching pass settles a handle exactly once, right after
  creation; every public attribute is read-only afterwards.

Introspection & representation
- SwitchType metaclass exposes the fields listed in __introspectable__ as
  read-only properties and provides stable __repr__/__rich_repr__.

Reading values
- ValueSwitch.value(index=0) (or handle[index]) returns one converted value.
  • ValueIndexError when index is outside [0, nargs).
  • StateError when the switch is absent or errored.
"""
import builtins
import functools
import operator
import re

from .converters import converter
from .faults import *
from .utils import *


class SwitchType(type):
    """
    Metaclass that turns switch classes into introspectable handles.

    Responsibilities
    - Expose every name of __introspectable__ as a read-only property mirroring "_<name>".
    - Derive __typename__ from the class name ("ValueSwitch" -> "value-switch").
    - Provide __repr__/__rich_repr__ driven by __displayable__ (or __introspectable__).
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


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the metadata shared by every switch.

    - flag: a one-character string, printable, not whitespace, not the '-' introducer.
    - descr: a string, trimmed (may be empty).
    - required: coerced to bool.

    Raises
    - TypeError: flag or descr is not a string.
    - ValueError: flag is not a single usable character.
    """
    if not isinstance(flag := metadata["flag"], str):
        raise TypeError(f"{cls.__typename__} 'flag' must be a string")
    if len(flag) != 1:
        raise ValueError(f"{cls.__typename__} 'flag' must be a single character")
    if flag == "-" or flag.isspace() or not flag.isprintable():
        raise ValueError(f"{cls.__typename__} 'flag' must be a printable character other than '-'")

    if not isinstance(descr := metadata["descr"], str):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = descr.strip()

    metadata["required"] = bool(metadata["required"])


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate metadata of value-bearing switches.

    - nargs: an int >= 1 (bool is rejected).
    - type: one of int, unsigned, float, str (checked through converter()).
    """
    if not isinstance(nargs := metadata["nargs"], int) or isinstance(nargs, bool):
        raise TypeError(f"{cls.__typename__} 'nargs' must be an integer")
    if nargs < 1:
        raise ValueError(f"{cls.__typename__} 'nargs' must be a positive integer")

    # Raises TypeError outside the closed set of element types.
    converter(metadata["type"])


class Switch(metaclass=SwitchType):
    """
    Boolean switch handle.

    Properties (read-only)
    - flag: the switch character.
    - descr: the human-readable description.
    - required: whether absence is a fault.
    - present: whether the matching pass found the flag.
    - faults: the faults recorded by the matching pass (tuple).
    - errored: True when at least one fault was recorded.
    """

    __introspectable__ = (
        "flag",
        "descr",
        "required",
        "present",
        "faults",
    )
    __displayable__ = (
        "flag",
        "descr",
        "required",
        "present",
        "errored",
    )

    def __init__(self, flag, descr="", /, required=False):
        metadata = {
            "flag": flag,
            "descr": descr,
            "required": required,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self._present = False
        self._faults = []
        self._settled = False

    @property
    def errored(self):
        return bool(self._faults)

    def fragment(self):
        """
        Synopsis fragment for this switch, e.g. " [-v]".
        """
        return " [-%s]" % self._flag

    def _settle(self, present, faults, values=(), /):
        # Called once by the owning parser at the end of the matching pass; booleans carry no values.
        if self._settled:
            raise RuntimeError(f"{type(self).__typename__} '-{self._flag}' was already scanned")
        self._present = bool(present)
        self._faults = list(faults)
        self._settled = True


class ValueSwitch[_T](Switch):
    """
    Switch carrying exactly `nargs` typed values.

    The values are only meaningful when the switch is present and not errored;
    value()/values enforce that and raise StateError otherwise.
    """

    __introspectable__ = Switch.__introspectable__ + (
        "nargs",
        "type",
    )
    __displayable__ = (
        "flag",
        "descr",
        "nargs",
        "type",
        "required",
        "present",
        "errored",
    )

    def __init__(self, flag, descr="", /, nargs=1, type=str, required=False):
        metadata = {
            "nargs": nargs,
            "type": type,
        }
        _sanitize_parametric_metadata(builtins.type(self), metadata)
        super().__init__(flag, descr, required)

        self._nargs = nargs
        self._type = type
        self._values = [Unset] * nargs

    def fragment(self):
        """
        Synopsis fragment with one placeholder per value, e.g. " [-s x x x]".
        """
        return " [-%s%s]" % (self._flag, " x" * self._nargs)

    def convert(self, token, /):
        """
        Convert one raw token to this switch's element type (ValueError on failure).
        """
        return converter(self._type)(token)

    def value(self, index=0, /):
        """
        Return the converted value at `index` (0 <= index < nargs); the first one by default.

        Raises
        - ValueIndexError: index out of range (also an IndexError).
        - StateError: the switch was not matched, or its matching pass recorded faults.
        """
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"{type(self).__typename__} indices must be integers")
        if not 0 <= index < self._nargs:
            raise ValueIndexError(
                "value index %d is out of range for switch '-%s' (it holds %d value%s)" % (
                    index, self._flag, self._nargs, "" if self._nargs == 1 else "s"
                ),
                title="value index out of range",
                code=FaultCode.VALUE_OUT_OF_RANGE,
                hint="use an index between 0 and %d" % (self._nargs - 1),
                flag=self._flag,
                index=index,
            )
        self._ensure_readable()
        return self._values[index]

    __getitem__ = value

    def __len__(self):
        return self._nargs

    @property
    def values(self):
        """
        All converted values, in command-line order (same guards as value()).
        """
        self._ensure_readable()
        return tuple(self._values)

    def _ensure_readable(self):
        if not self._present:
            raise StateError(
                "switch '-%s' was not found in the command line" % self._flag,
                title="unmatched switch",
                code=FaultCode.UNMATCHED_SWITCH,
                hint="check 'present' before reading values",
                flag=self._flag,
            )
        if self._faults:
            raise StateError(
                "switch '-%s' has invalid values" % self._flag,
                title="unmatched switch",
                code=FaultCode.UNMATCHED_SWITCH,
                hint="check 'errored' (or the parser's 'valid') before reading values",
                flag=self._flag,
            )

    def _settle(self, present, faults, values=(), /):
        super()._settle(present, faults)
        for position, value in enumerate(values):
            self._values[position] = value


__all__ = (
    "Switch",
    "ValueSwitch",
)

# Keep the metaclass out of star-imports and autocompletion; it is not public API.
del SwitchType
