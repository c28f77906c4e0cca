# machine.py  ──────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Dict, List, overload

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError, ConversionError
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorTemplate

debug = Debug()


class Machine:
    """An Enigma-style machine with `num_rotors` slots.

    Slot 0 holds the reflector, the last slot the fast (entry) rotor.  The
    right-most `pawls` slots are the ones mechanically able to step.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        catalog: Iterable[RotorTemplate | Rotor],
    ) -> None:
        if num_rotors < 2:
            raise ConfigurationError(f"Need at least 2 rotor slots, got {num_rotors}")
        if not (0 <= pawls < num_rotors):
            raise ConfigurationError(
                f"Pawl count {pawls} must be in 0..{num_rotors - 1}"
            )

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls

        self._catalog: Dict[str, RotorTemplate] = {}
        for entry in catalog:
            tmpl = entry.template() if isinstance(entry, Rotor) else entry
            if tmpl.permutation.alphabet != alphabet:
                raise ConfigurationError(
                    f"Rotor {tmpl.name} is wired over a different alphabet"
                )
            if tmpl.name in self._catalog:
                raise ConfigurationError(f"Rotor {tmpl.name} defined twice")
            self._catalog[tmpl.name] = tmpl

        self._rotors: List[Rotor] = []
        self._plugboard = Permutation.identity(alphabet)
        self._ready = False

    # ── accessors ───────────────────────────────────────────────

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._pawls

    @property
    def catalog(self) -> Dict[str, RotorTemplate]:
        return dict(self._catalog)

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        return tuple(self._rotors)

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    @property
    def ready(self) -> bool:
        """True once rotors are inserted *and* set."""
        return self._ready

    def settings(self) -> str:
        """Current window letters, slot 0 included."""
        return "".join(self._alphabet.to_char(r.setting()) for r in self._rotors)

    # ── setup ───────────────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots left to right with fresh rotors named NAMES
        (NAMES[0] is the reflector).  Every rotor starts at setting 0.
        Nothing changes unless the whole assignment is valid.
        """
        if len(names) != self._num_rotors:
            raise ConfigurationError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )

        chosen: List[Rotor] = []
        seen: set[str] = set()
        for raw in names:
            name = raw.upper()
            if name in seen:
                raise ConfigurationError(f"Rotor {name} inserted twice")
            seen.add(name)
            try:
                chosen.append(self._catalog[name].build())
            except KeyError:
                raise ConfigurationError(f"Unknown rotor {raw!r}") from None

        moving = sum(r.rotates() for r in chosen)
        if moving != self._pawls:
            debug.warn(
                "%d moving rotors inserted into a machine with %d pawls",
                moving, self._pawls,
            )

        self._rotors = chosen
        self._ready = False
        debug.log("stepping", "inserted %s", [r.name for r in chosen])

    def set_rotors(self, setting: str) -> None:
        """Set slots 1.. from SETTING, one character per settable rotor,
        left-most first."""
        if len(self._rotors) != self._num_rotors:
            raise ConfigurationError("Rotors must be inserted before they are set")
        if len(setting) != self._num_rotors - 1:
            raise ConfigurationError(
                f"Setting {setting!r} must have {self._num_rotors - 1} characters"
            )
        if not self._rotors[0].reflecting():
            raise ConfigurationError(
                f"Slot 0 holds {self._rotors[0].name}, not a reflector"
            )

        positions = [self._alphabet.to_int(ch.upper()) for ch in setting]
        for rotor, posn in zip(self._rotors[1:], positions):
            rotor.set(posn)
        self._ready = True

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self._alphabet:
            raise ConfigurationError("Plugboard is wired over a different alphabet")
        self._plugboard = plugboard
        debug.log("plugboard", "%r", plugboard)

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors for one key-press.

        Every decision is taken from the pre-step notch positions; a left
        slot may turn its neighbour's flag on but never off.
        """
        rotors = self._rotors
        last = self._num_rotors - 1
        advance = [False] * self._num_rotors

        for i, rotor in enumerate(rotors):
            if not rotor.rotates():
                advance[i] = False
            elif i == last:
                advance[i] = True
            elif rotors[i + 1].at_notch():
                advance[i] = True
                advance[i + 1] = True

        for rotor, step in zip(rotors, advance):
            if step:
                rotor.advance()

    # ── encipher one symbol  ────────────────────────────────────

    @overload
    def convert(self, msg: int) -> int: ...
    @overload
    def convert(self, msg: str) -> str: ...

    def convert(self, msg):
        """Convert index MSG, or every character of string MSG, stepping
        the rotors before each one."""
        if not self._ready:
            raise ConversionError("Machine rotors are not inserted and set")
        if isinstance(msg, str):
            alpha = self._alphabet
            # look everything up first so a bad character moves no rotor
            indices = [alpha.to_int(ch) for ch in msg]
            return "".join(alpha.to_char(self._convert_index(i)) for i in indices)
        return self._convert_index(msg)

    def _convert_index(self, c: int) -> int:
        self._step_rotors()
        if debug.is_on("stepping"):
            debug.log("stepping", "Rotor pos %s", self.settings())

        signal = self._plugboard.permute(c)

        for rotor in reversed(self._rotors):
            signal = rotor.convert_forward(signal)

        for rotor in self._rotors[1:]:
            signal = rotor.convert_backward(signal)

        signal = self._plugboard.permute(signal)
        debug.log("convert", "%d -> %d", c, signal)
        return signal

    def __repr__(self) -> str:
        names = [r.name for r in self._rotors]
        return f"<Machine slots={self._num_rotors} pawls={self._pawls} rotors={names}>"


__all__ = ["Machine"]
