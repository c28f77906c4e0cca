# rotor_and_reflector.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError
from permutation import Permutation

debug = Debug()


class RotorKind(Enum):
    MOVING = "M"
    FIXED = "N"
    REFLECTOR = "R"

    @classmethod
    def from_code(cls, code: str) -> "RotorKind":
        """Config-file type code: first letter of ``R``, ``N`` or ``M...``."""
        try:
            return cls(code[:1].upper())
        except ValueError:
            raise ConfigurationError(f"Rotor type {code!r} not recognized") from None


@dataclass(frozen=True, slots=True)
class _Behaviour:
    rotates: bool
    reflecting: bool


# fixed wheels and reflectors never move; they differ only in `reflecting`
BEHAVIOUR: Dict[RotorKind, _Behaviour] = {
    RotorKind.MOVING:    _Behaviour(rotates=True,  reflecting=False),
    RotorKind.FIXED:     _Behaviour(rotates=False, reflecting=False),
    RotorKind.REFLECTOR: _Behaviour(rotates=False, reflecting=True),
}


# ── catalog entry ─────────────────────────────────────────────────
@dataclass(frozen=True)
class RotorTemplate:
    """Immutable description of a wheel: wiring plus notches.

    Every slot a machine fills gets its own live Rotor from `build()`, so
    settings are never shared between machines using the same catalog.
    """

    name: str
    kind: RotorKind
    permutation: Permutation
    notches: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Rotor name must not be empty")
        object.__setattr__(self, "name", self.name.upper())
        notches = frozenset(ch.upper() for ch in self.notches)
        if notches and self.kind is not RotorKind.MOVING:
            raise ConfigurationError(
                f"Rotor {self.name}: only moving rotors carry notches"
            )
        alpha = self.permutation.alphabet
        bad = sorted(ch for ch in notches if not alpha.contains(ch))
        if bad:
            raise ConfigurationError(
                f"Rotor {self.name}: notch characters {''.join(bad)!r} not in alphabet"
            )
        object.__setattr__(self, "notches", notches)
        if self.kind is RotorKind.REFLECTOR and not self.permutation.is_involution():
            debug.warn("Reflector %s is not wired as an involution", self.name)

    def build(self) -> "Rotor":
        return Rotor(self.name, self.permutation, self.kind, self.notches)


# ── live rotor ────────────────────────────────────────────────────
class Rotor:
    """A wired wheel mounted at a rotational offset (its *setting*)."""

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: FrozenSet[str] | str = frozenset(),
    ) -> None:
        self._name = name.upper()
        self._permutation = perm
        self._kind = kind
        self._behaviour = BEHAVIOUR[kind]
        self._notches = frozenset(ch.upper() for ch in notches)
        self._setting = 0

    # ── accessors ────────────────────────────────────────────────
    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> RotorKind:
        return self._kind

    @property
    def notches(self) -> FrozenSet[str]:
        return self._notches

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    @property
    def permutation(self) -> Permutation:
        return self._permutation

    def size(self) -> int:
        return self._permutation.size()

    def setting(self) -> int:
        return self._setting

    def set(self, posn: int | str) -> None:
        """Set the rotor to index POSN, or to the index of character POSN."""
        if isinstance(posn, str):
            posn = self.alphabet.to_int(posn.upper())
        self._setting = self._permutation.wrap(posn)

    # ── behaviour table lookups ──────────────────────────────────
    def rotates(self) -> bool:
        return self._behaviour.rotates

    def reflecting(self) -> bool:
        return self._behaviour.reflecting

    def at_notch(self) -> bool:
        if not self._behaviour.rotates:
            return False
        return self.alphabet.to_char(self._setting) in self._notches

    def advance(self) -> None:
        if self._behaviour.rotates:
            self._setting = self._permutation.wrap(self._setting + 1)
            debug.log("rotor", "%s -> %d", self._name, self._setting)

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        perm = self._permutation
        mapped = perm.permute(perm.wrap(self._setting + p))
        return perm.wrap(mapped - self._setting)

    def convert_backward(self, e: int) -> int:
        perm = self._permutation
        mapped = perm.invert(perm.wrap(e + self._setting))
        return perm.wrap(mapped - self._setting)

    def template(self) -> RotorTemplate:
        return RotorTemplate(self._name, self._kind, self._permutation, self._notches)

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor {self._name} {self._kind.name} pos={self._setting}>"


def MovingRotor(name: str, perm: Permutation, notches: str) -> Rotor:
    return Rotor(name, perm, RotorKind.MOVING, notches)


def FixedRotor(name: str, perm: Permutation) -> Rotor:
    return Rotor(name, perm, RotorKind.FIXED)


def Reflector(name: str, perm: Permutation) -> Rotor:
    return Rotor(name, perm, RotorKind.REFLECTOR)


__all__ = [
    "RotorKind",
    "BEHAVIOUR",
    "RotorTemplate",
    "Rotor",
    "MovingRotor",
    "FixedRotor",
    "Reflector",
]
