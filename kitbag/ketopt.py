"""Command-line option parsing in the style of getopt_long.

Short options are described by a getopt option string (a letter followed by
``:`` takes an argument). Long options may be abbreviated to any unique prefix.
With ``permute`` enabled, options may appear after non-option arguments; the
argument list is reordered so that all non-options end up at the back.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

UNKNOWN = "?"
MISSING_ARGUMENT = ":"


class ArgKind(enum.IntEnum):
    """Whether a long option takes an argument."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long option: its name, argument kind and the value reported for it."""

    name: str
    has_arg: ArgKind = ArgKind.NONE
    val: Any = 0


@dataclass(frozen=True)
class ParsedOption:
    """One parsed option.

    ``opt`` is the option letter, a long option's ``val``, ``"?"`` for an
    unknown or ambiguous option, or ``":"`` when a required argument is
    missing. ``optopt`` is the option character or value that was seen, and
    ``longidx`` is the index of the matched long option or -1.
    """

    opt: Any
    arg: Optional[str] = None
    longidx: int = -1
    optopt: Any = 0


def _permute(argv: List[str], j: int, n: int) -> None:
    """Move ``argv[j]`` ``n`` places to the left."""
    argv.insert(j - n, argv.pop(j))


def _is_option(arg: str) -> bool:
    return arg.startswith("-") and arg != "-"


class OptionParser:
    """Iterator over the options in ``argv`` (``argv[0]`` is skipped).

    After iteration ends, ``ind`` is the index in ``argv`` of the first
    non-option argument; ``argv`` holds the possibly reordered arguments.
    """

    def __init__(
        self,
        argv: Sequence[str],
        ostr: str = "",
        longopts: Optional[Sequence[LongOption]] = None,
        permute: bool = True,
    ) -> None:
        self.argv: List[str] = list(argv)
        self.ostr = ostr
        self.longopts = list(longopts or [])
        self.permute = permute
        self.ind = 1
        self._i = 1
        self._pos = 0
        self._n_args = 0
        self._done = False

    def __iter__(self) -> Iterator[ParsedOption]:
        return self

    def _stop(self) -> None:
        self.ind = self._i - self._n_args
        self._done = True
        raise StopIteration

    def __next__(self) -> ParsedOption:
        if self._done:
            raise StopIteration
        argv = self.argv
        argc = len(argv)
        if self.permute:
            while self._i < argc and not _is_option(argv[self._i]):
                self._i += 1
                self._n_args += 1
        arg: Optional[str] = None
        longidx = -1
        optopt: Any = 0
        i0 = self._i
        if self._i >= argc or not _is_option(argv[self._i]):
            self._stop()
        current = argv[self._i]
        if current.startswith("--"):
            if current == "--":
                _permute(argv, self._i, self._n_args)
                self._i += 1
                self._stop()
            opt: Any = UNKNOWN
            self._pos = -1
            if self.longopts:
                eq = current.find("=", 2)
                end = eq if eq >= 0 else len(current)
                name = current[2:end]
                exact = [k for k, o in enumerate(self.longopts) if o.name == name]
                partial = [
                    k for k, o in enumerate(self.longopts) if o.name != name and o.name.startswith(name)
                ]
                chosen: Optional[int] = None
                if len(exact) == 1:
                    chosen = exact[0]
                elif not exact and len(partial) == 1:
                    chosen = partial[0]
                # An ambiguous name is reported as unknown and then consumed.
                if chosen is not None:
                    o = self.longopts[chosen]
                    optopt = opt = o.val
                    longidx = chosen
                    if eq >= 0:
                        arg = current[end + 1:]
                    if o.has_arg == ArgKind.REQUIRED and eq < 0:
                        if self._i < argc - 1:
                            self._i += 1
                            arg = argv[self._i]
                        else:
                            opt = MISSING_ARGUMENT
        else:
            if self._pos == 0:
                self._pos = 1
            ch = current[self._pos]
            self._pos += 1
            opt = optopt = ch
            p = self.ostr.find(ch)
            if p < 0:
                opt = UNKNOWN
            elif self.ostr[p + 1:p + 2] == ":":
                if self._pos >= len(current):
                    if self._i < argc - 1:
                        self._i += 1
                        arg = argv[self._i]
                    else:
                        opt = MISSING_ARGUMENT
                else:
                    arg = current[self._pos:]
                self._pos = -1
        if self._pos < 0 or self._pos >= len(argv[self._i]):
            self._i += 1
            self._pos = 0
            if self._n_args > 0:
                for j in range(i0, self._i):
                    _permute(argv, j, self._n_args)
        self.ind = self._i - self._n_args
        return ParsedOption(opt=opt, arg=arg, longidx=longidx, optopt=optopt)


def getopt(
    argv: Sequence[str],
    ostr: str = "",
    longopts: Optional[Sequence[LongOption]] = None,
    permute: bool = True,
) -> Tuple[List[ParsedOption], List[str]]:
    """Parse all options in ``argv``; return them and the remaining arguments."""
    parser = OptionParser(argv, ostr, longopts, permute)
    options = list(parser)
    return options, parser.argv[parser.ind:]