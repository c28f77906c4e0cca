# config_reader.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import RotorKind, RotorTemplate

debug = Debug()


# ────────────────────────────────────────────────────────────────────────
#  0. Parsed forms
# ────────────────────────────────────────────────────────────────────────


@dataclass
class MachineConfig:
    """Everything needed to build a Machine from a configuration file."""

    alphabet: Alphabet
    num_rotors: int
    pawls: int
    templates: List[RotorTemplate] = field(default_factory=list)

    def build(self) -> Machine:
        return Machine(self.alphabet, self.num_rotors, self.pawls, self.templates)


@dataclass
class Settings:
    """One ``* <rotors> <setting> <plugboard>`` line."""

    rotors: List[str]
    setting: str
    plugboard: str = ""

    def apply(self, machine: Machine) -> None:
        # parse the plugboard up front so a bad one leaves the machine alone
        plugboard = Permutation(self.plugboard, machine.alphabet)
        machine.insert_rotors(self.rotors)
        machine.set_rotors(self.setting)
        machine.set_plugboard(plugboard)
        debug.log("config", "applied %s", self)


# ────────────────────────────────────────────────────────────────────────
#  1. Text configuration
# ────────────────────────────────────────────────────────────────────────


class _Tokens:
    """Whitespace tokens with one token of look-ahead."""

    def __init__(self, text: str) -> None:
        self._items = text.split()
        self._pos = 0

    def has_next(self) -> bool:
        return self._pos < len(self._items)

    def peek(self) -> str | None:
        return self._items[self._pos] if self.has_next() else None

    def next(self, what: str) -> str:
        if not self.has_next():
            raise ConfigurationError(f"Configuration file truncated: expected {what}")
        tok = self._items[self._pos]
        self._pos += 1
        return tok

    def next_int(self, what: str) -> int:
        tok = self.next(what)
        try:
            return int(tok)
        except ValueError:
            raise ConfigurationError(f"Expected {what}, got {tok!r}") from None

    def cycles(self) -> Iterator[str]:
        while (tok := self.peek()) is not None and tok.startswith("("):
            self._pos += 1
            yield tok


def read_config(text: str) -> MachineConfig:
    """Parse the whitespace separated configuration format:

        <alphabet> <num rotors> <pawls> { <name> <type> <cycles>... }
    """
    tokens = _Tokens(text)
    alphabet = Alphabet.parse(tokens.next("alphabet"))
    num_rotors = tokens.next_int("number of rotor slots")
    pawls = tokens.next_int("number of pawls")

    templates: List[RotorTemplate] = []
    while tokens.has_next():
        name = tokens.next("rotor name")
        if "(" in name or ")" in name:
            raise ConfigurationError(f"Improper rotor name {name!r}")
        code = tokens.next(f"type of rotor {name}")
        kind = RotorKind.from_code(code)
        cycles = " ".join(tokens.cycles())
        templates.append(
            RotorTemplate(name, kind, Permutation(cycles, alphabet), frozenset(code[1:]))
        )
        debug.log("config", "rotor %s %s %s", name.upper(), kind.name, cycles)

    if not templates:
        raise ConfigurationError("Configuration file defines no rotors")
    return MachineConfig(alphabet, num_rotors, pawls, templates)


# ────────────────────────────────────────────────────────────────────────
#  2. JSON configuration
# ────────────────────────────────────────────────────────────────────────


def read_json_config(data: Dict[str, Any]) -> MachineConfig:
    required = {"alphabet", "rotors", "pawls", "catalog"}
    missing = required - data.keys()
    if missing:
        raise ConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")

    alphabet = Alphabet.parse(str(data["alphabet"]))
    templates: List[RotorTemplate] = []
    for entry in data["catalog"]:
        try:
            name, kind = entry["name"], entry["kind"]
        except KeyError as excp:
            raise ConfigurationError(f"Catalog entry missing {excp.args[0]!r}") from None
        templates.append(
            RotorTemplate(
                name,
                RotorKind.from_code(kind),
                Permutation(entry.get("cycles", ""), alphabet),
                frozenset(entry.get("notches", "")),
            )
        )
    try:
        num_rotors, pawls = int(data["rotors"]), int(data["pawls"])
    except (TypeError, ValueError):
        raise ConfigurationError("'rotors' and 'pawls' must be integers") from None
    return MachineConfig(alphabet, num_rotors, pawls, templates)


def load_config(path: str | Path) -> MachineConfig:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        raise ConfigurationError(f"could not open {path}") from None

    if path.suffix.lower() == ".json":
        try:
            return read_json_config(json.loads(text))
        except json.JSONDecodeError as excp:
            raise ConfigurationError(f"{path}: {excp}") from None
    return read_config(text)


# ────────────────────────────────────────────────────────────────────────
#  3. Settings lines
# ────────────────────────────────────────────────────────────────────────


def parse_settings(line: str, num_rotors: int) -> Settings:
    parts = line.upper().split()
    if not parts or parts[0] != "*":
        raise ConfigurationError("No valid setting detected. Must start with a *.")
    if len(parts) < num_rotors + 2:
        raise ConfigurationError("No valid setting detected. Too few elements.")

    names = parts[1 : num_rotors + 1]
    if any("(" in n or ")" in n for n in names):
        raise ConfigurationError("Improperly formatted rotor names in settings.")

    setting = parts[num_rotors + 1]
    if setting.startswith("("):
        raise ConfigurationError("Improperly formatted rotor setting in settings.")

    rest = parts[num_rotors + 2 :]
    if any(not p.startswith("(") for p in rest):
        raise ConfigurationError(f"Unexpected text in settings: {' '.join(rest)!r}")
    return Settings(names, setting, " ".join(rest))


__all__ = [
    "MachineConfig",
    "Settings",
    "read_config",
    "read_json_config",
    "load_config",
    "parse_settings",
]
