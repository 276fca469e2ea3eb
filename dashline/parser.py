r"""
Dashline parser: register switches against a raw argument list.

What this module provides
- Parser: owns the raw argument list (token 0 is the program name) and every
  switch registered on it. Each registration runs its own matching pass over
  the tokens, settles the new handle and returns a Registration.
- Registration: (switch, faults) result of one registration; `ok` is True when
  the matching pass recorded no fault.

Matching pass (one per registration, independent of the others)
- Tokens that do not start with '-' are skipped (they only matter as values).
- Boolean switches match when their flag appears anywhere after the '-', so
  clusters such as '-vV' mark every clustered switch present.
- Value switches only match when their flag is the character right after the
  '-' ('-s 1 2 3', and also '-sfoo'); they are never found inside clusters.
  Parser(..., unified=True) applies the cluster rule to value switches as well.
- A matched value switch takes the next `nargs` tokens. Too few tokens left is an
  ArityError; a token that does not convert is a ConversionError (the remaining
  tokens are still converted). A later occurrence overwrites earlier values.
- A required switch that never matched records a MissingSwitchError.

Faults are recorded, never raised: registration always succeeds. Consumers
check `parser.valid` before trusting any value, and typically show
`parser.help()` and exit when it is False:

    parser = Parser(sys.argv, "Resample a volume.")
    source, _ = parser.add_value_switch("i", "Input file (.vti)", required=True)
    spacing, _ = parser.add_value_switch("s", "Spacing: x y z", 3, float)
    verbose, _ = parser.add_switch("v", "Verbose output")
    if not parser.valid:
        parser.help()
        sys.exit(2)

Usage text (Parser.usage(), plain; Parser.help() prints it with rich)

    <blank>
    Utility <prog> :
    <blank>
    <descr>
    <blank>
    Usage:
     [shell]$ <prog> [-i x] [-s x x x] [-v]
    \t-i : Input file (.vti) (Required).
         *\t-s : Spacing: x y z (Optional).
    \t-v : Verbose output (Optional).
    * indicate(s) wrong argument(s).
"""
from collections.abc import Sequence
from typing import NamedTuple

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .converters import typename
from .faults import *
from .switches import Switch, ValueSwitch
from .utils import *


class Registration(NamedTuple):
    """
    result of a registration: the settled handle and the faults of its matching pass.
    """
    switch: Switch
    faults: tuple

    @property
    def ok(self):
        return not self.faults


class Parser:
    """
    Registry of switches over one raw argument list.

    Parameters
    - argv: Sequence[str]
      the process arguments, program name first (e.g. sys.argv).
    - descr: Unset | str
      free-text description shown by usage(); settable later through `descr`.
    - unified: bool
      match value switches with the cluster rule of boolean switches.
    - colorful: bool
      style help()/report() output (usage() is always plain text).
    - fancy: bool
      wrap help()/report() output in a rich Panel.
    """

    argv = mirror("argv")
    switches = mirror("switches")
    unified = mirror("unified")

    def __init__(self, argv, /, descr=Unset, *, unified=False, colorful=True, fancy=False):
        if isinstance(argv, str) or not isinstance(argv, Sequence):
            raise TypeError("parser 'argv' must be a sequence of strings")
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("parser 'argv' must only contain strings")

        self._argv = tuple(argv)
        self._switches = []
        self._unified = bool(unified)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)
        self.descr = coalesce(descr, "")

    @property
    def prog(self):
        return self._argv[0] if self._argv else ""

    @property
    def descr(self):
        return self._descr

    @descr.setter
    def descr(self, descr):
        if not isinstance(descr, str):
            raise TypeError("parser 'descr' must be a string")
        self._descr = descr

    @property
    def valid(self):
        """
        False as soon as any registered switch recorded a fault (never flips back).
        """
        return not any(switch.errored for switch in self._switches)

    @property
    def faults(self):
        """
        every recorded fault, in registration order.
        """
        return tuple(fault for switch in self._switches for fault in switch.faults)

    def add_switch(self, flag, descr="", /, required=False):
        """
        register a boolean switch and match it against the arguments.

        returns
        - Registration(switch, faults); faults can only hold a MissingSwitchError.
        """
        switch = Switch(flag, descr, required)
        return self._register(switch, self._scan_switch(switch), [])

    def add_value_switch(self, flag, descr="", /, nargs=1, type=str, required=False):
        """
        register a switch taking `nargs` values of element type `type`
        (int, unsigned, float or str) and match it against the arguments.

        returns
        - Registration(switch, faults) with any MissingSwitchError, ArityError or
          ConversionError recorded by the matching pass.
        """
        switch = ValueSwitch(flag, descr, nargs, type, required)
        return self._register(switch, *self._scan_value_switch(switch))

    def _register(self, switch, present, faults, values=(), /):
        if any(other.flag == switch.flag for other in self._switches):
            trigger(DuplicatedFlagWarning(
                "flag '-%s' is registered more than once" % switch.flag,
                title="duplicated flag",
                code=FaultCode.DUPLICATED_FLAG,
                hint="every registration of '-%s' scans the same tokens" % switch.flag,
                flag=switch.flag,
                prog=self.prog,
                docs=getdoc(FaultCode.DUPLICATED_FLAG),
            ), shell=False)

        if switch.required and not present:
            faults.append(MissingSwitchError(
                "missing required switch '-%s'" % switch.flag,
                title="missing switch",
                code=FaultCode.MISSING_SWITCH,
                hint="add%s to the command line" % switch.fragment().replace("[", "'").replace("]", "'"),
                flag=switch.flag,
                prog=self.prog,
                docs=getdoc(FaultCode.MISSING_SWITCH),
            ))

        switch._settle(present, faults, values)
        self._switches.append(switch)
        return Registration(switch, switch.faults)

    def _scan_switch(self, switch):
        present = False
        for token in self._argv[1:]:
            if not token.startswith("-"):
                continue
            # clustered booleans: '-vV' carries both 'v' and 'V'
            if switch.flag in token[1:]:
                present = True
        return present

    def _scan_value_switch(self, switch):
        present = False
        faults = []
        values = [Unset] * switch.nargs

        for index, token in enumerate(self._argv[1:], 1):
            if not token.startswith("-"):
                continue
            if self._unified:
                matched = switch.flag in token[1:]
            else:
                matched = token[1:2] == switch.flag
            if not matched:
                continue

            present = True
            tail = self._argv[index + 1:index + 1 + switch.nargs]

            if len(tail) < switch.nargs:
                faults.append(ArityError(
                    "switch '-%s' at %s position expects %d value%s but %s" % (
                        switch.flag,
                        ordinal(index),
                        switch.nargs,
                        "" if switch.nargs == 1 else "s",
                        "none follows" if not tail else "only %d follow%s" % (len(tail), "s" if len(tail) == 1 else ""),
                    ),
                    title="not enough values",
                    code=FaultCode.NOT_ENOUGH_VALUES,
                    hint="add the missing value%s after '%s'" % ("" if switch.nargs - len(tail) == 1 else "s", token),
                    flag=switch.flag,
                    index=index,
                    token=token,
                    prog=self.prog,
                    docs=getdoc(FaultCode.NOT_ENOUGH_VALUES),
                ))
                continue

            for position, raw in enumerate(tail):
                try:
                    values[position] = switch.convert(raw)
                except ValueError as exception:
                    faults.append(ConversionError(
                        "value %r at %s position for switch '-%s' is not a valid %s" % (
                            raw, ordinal(index + 1 + position), switch.flag, typename(switch.type)
                        ),
                        title="uncastable value",
                        code=FaultCode.UNCASTABLE_VALUE,
                        hint="pass %s %s value instead" % (
                            "an" if typename(switch.type)[0] in "aeiou" else "a", typename(switch.type)
                        ),
                        flag=switch.flag,
                        index=index + 1 + position,
                        token=raw,
                        prog=self.prog,
                        exception=exception,
                        docs=getdoc(FaultCode.UNCASTABLE_VALUE),
                    ))

        return present, faults, values

    def _render(self, colorful):
        """
        build the usage text as rich Text; its plain form is the usage() contract.
        """
        styles = {
            "utility": "bold #E6E6F0",
            "program-name": "bold #FF4D94",
            "description-section": "italic #A3A3A3",
            "usage-label": "bold #00E6FF",
            "flag-name": "bold #22C55E",
            "metavar": "bold #FFD600",
            "required": "bold #FFFFFF",
            "optional": "#9CA3AF",
            "argument-description": "#9CA3AF",
            "error-marker": "bold #EF4444",
            "legend": "#737373",
        } | getattr(__import__("__main__"), "__styles__", {})

        text = Text()

        def append(fragment, style=""):
            text.append(fragment, styles.get(style, "") if colorful else "")

        append("\nUtility ")
        append(self.prog, "program-name")
        append(" :\n")
        append("\n")
        append(self._descr, "description-section")
        append("\n")
        append("\nUsage: \n", "usage-label")
        append(" [shell]$ ")
        append(self.prog, "program-name")
        for switch in self._switches:
            append(" [")
            append("-" + switch.flag, "flag-name")
            if isinstance(switch, ValueSwitch):
                append(" x" * switch.nargs, "metavar")
            append("]")
        append("\n")

        for switch in self._switches:
            if switch.errored:
                append("     *", "error-marker")
            append("\t")
            append("-" + switch.flag, "flag-name")
            append(" : ")
            append(switch.descr, "argument-description")
            append(" (")
            if switch.required:
                append("Required", "required")
            else:
                append("Optional", "optional")
            append(").\n")

        append("* indicate(s) wrong argument(s).\n", "legend")
        return text

    def usage(self):
        """
        render the usage text (pure: no effect on parser state).
        """
        return self._render(colorful=False).plain

    def help(self, console=Unset):
        """
        print the usage text; goes to stderr when the parser is invalid.
        """
        console = coalesce(console, Console(stderr=not self.valid))
        renderable = self._render(colorful=self.colorful)
        if self.fancy:
            renderable = Panel(renderable, title=Text(self.prog), title_align="left")
            return console.print(renderable)
        console.print(renderable, end="", soft_wrap=True)

    def report(self, console=Unset):
        """
        print every recorded fault (nothing when the parser is valid).
        """
        if self.valid:
            return
        console = coalesce(console, Console(stderr=True))
        console.print(SwitchExit(self.faults, prog=self.prog, colorful=self.colorful, fancy=self.fancy))

    def ensure(self):
        """
        raise a SwitchExit bundling every recorded fault when the parser is invalid.
        """
        if self.valid:
            return
        trigger(SwitchExit(self.faults), prog=self.prog, colorful=self.colorful, fancy=self.fancy, shell=False)

    def __repr__(self):
        return "parser(prog=%r, switches=%r, valid=%r)" % (self.prog, len(self._switches), self.valid)


__all__ = (
    "Parser",
    "Registration",
)
