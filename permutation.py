# permutation.py
from __future__ import annotations

import re
from typing import List, overload

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError

debug = Debug()

# one cycle, a run of whitespace, or any single stray character
_TOKEN_RE = re.compile(r"\(([^()\s]+)\)|(\s+)|(.)", re.DOTALL)


class Permutation:
    """A permutation of ALPHABET written in cycle notation, e.g.
    ``"(AELTPHQXRU) (BKNW) (S)"``.  Cycles may also be written back to back
    (``"(ABC)(DE)"``).  Characters that appear in no cycle map to
    themselves.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        n = alphabet.size()

        # integer lookup tables, -1 = not yet assigned
        self._fwd: List[int] = [-1] * n
        self._rev: List[int] = [-1] * n

        for cycle in self._split(cycles):
            self._add_cycle(cycle)

        # anything untouched is a fixed point
        for i in range(n):
            if self._fwd[i] == -1:
                self._fwd[i] = self._rev[i] = i

        self._is_derangement = all(self._fwd[i] != i for i in range(n))
        debug.log("permutation", "%r", self)

    @classmethod
    def identity(cls, alphabet: Alphabet) -> "Permutation":
        return cls("", alphabet)

    # ── parsing ──────────────────────────────────────────────────
    @staticmethod
    def _split(cycles: str) -> List[str]:
        found: List[str] = []
        for m in _TOKEN_RE.finditer(cycles):
            body, _space, stray = m.groups()
            if body is not None:
                found.append(body)
            elif stray is not None:
                raise ConfigurationError(
                    f"Malformed cycle notation {cycles!r} at position {m.start()}"
                )
        return found

    def _add_cycle(self, cycle: str) -> None:
        """Add c0 -> c1 -> ... -> cm -> c0 for CYCLE == c0c1...cm."""
        idx = [self._index_of(ch) for ch in cycle]
        for a, b in zip(idx, idx[1:] + idx[:1]):
            if self._fwd[a] != -1:
                ch = self._alphabet.to_char(a)
                raise ConfigurationError(
                    f"Character {ch!r} appears in more than one cycle position"
                )
            self._fwd[a] = b
            self._rev[b] = a

    def _index_of(self, ch: str) -> int:
        if not self._alphabet.contains(ch):
            ch = ch.upper()
        if not self._alphabet.contains(ch):
            raise ConfigurationError(f"Cycle character {ch!r} not in alphabet")
        return self._alphabet.to_int(ch)

    # ── contract ─────────────────────────────────────────────────
    def size(self) -> int:
        return self._alphabet.size()

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def wrap(self, p: int) -> int:
        """P modulo size(), never negative."""
        # Python's % already follows the sign of the divisor
        return p % self.size()

    @overload
    def permute(self, p: int) -> int: ...
    @overload
    def permute(self, p: str) -> str: ...

    def permute(self, p):
        if isinstance(p, str):
            return self._alphabet.to_char(self._fwd[self._alphabet.to_int(p)])
        return self._fwd[self.wrap(p)]

    @overload
    def invert(self, c: int) -> int: ...
    @overload
    def invert(self, c: str) -> str: ...

    def invert(self, c):
        if isinstance(c, str):
            return self._alphabet.to_char(self._rev[self._alphabet.to_int(c)])
        return self._rev[self.wrap(c)]

    def derangement(self) -> bool:
        """True iff no character maps to itself."""
        return self._is_derangement

    def is_involution(self) -> bool:
        return all(self._fwd[self._fwd[i]] == i for i in range(self.size()))

    # ── niceties ─────────────────────────────────────────────────
    def cycles(self) -> str:
        """Canonical cycle notation, fixed points left out."""
        seen: set[int] = set()
        parts: List[str] = []
        for start in range(self.size()):
            if start in seen or self._fwd[start] == start:
                continue
            chars: List[str] = []
            i = start
            while i not in seen:
                seen.add(i)
                chars.append(self._alphabet.to_char(i))
                i = self._fwd[i]
            parts.append("(" + "".join(chars) + ")")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or '()'}>"


__all__ = ["Permutation"]
