# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable, List, TextIO

from config_reader import MachineConfig, load_config, parse_settings
from debug import Debug
from errors import ConfigurationError, EnigmaError
from machine import Machine
from wheels import naval

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for the message loop."""

    block: int = 5                  # output group size


# ────────────────────────────────────────────────────────────────────────
#  1. Output helpers
# ────────────────────────────────────────────────────────────────────────


def group(text: str, block: int = 5) -> str:
    """Split TEXT into groups of BLOCK characters (last may be shorter)."""
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


def normalise_message(line: str) -> str:
    """Upper-case and drop all whitespace."""
    return "".join(line.split()).upper()


# ────────────────────────────────────────────────────────────────────────
#  2. Message loop
# ────────────────────────────────────────────────────────────────────────


def process(
    machine_cfg: MachineConfig,
    lines: Iterable[str],
    out: TextIO,
    cfg: Config | None = None,
) -> Machine:
    """Run every message in LINES through a machine built from MACHINE_CFG.

    The first line must be a settings line (``* ...``); later settings lines
    re-configure the same machine.  Blank lines are copied through.
    """
    cfg = cfg or Config()
    machine = machine_cfg.build()
    configured = False

    for raw in lines:
        line = raw.strip()
        if not configured:
            if not line:
                continue
            if not line.startswith("*"):
                raise ConfigurationError("Input must start with a settings line")

        if not line:
            out.write("\n")
        elif "*" in line:
            parse_settings(line, machine.num_rotors).apply(machine)
            configured = True
        else:
            out.write(group(machine.convert(normalise_message(line)), cfg.block) + "\n")

    if not configured:
        raise ConfigurationError("No settings line in input")
    return machine


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("config", nargs="?", help="Machine configuration file (.conf or .json). Default: built-in Naval wheels.")
    p.add_argument("input", nargs="?", help="File of settings lines and messages. Default: stdin.")
    p.add_argument("output", nargs="?", help="File for converted messages. Default: stdout.")
    p.add_argument("--group", type=int, default=5, metavar="N", help="Output group size; 0 disables grouping. Default: 5")
    p.add_argument(
        "--debug", action="append", default=[], metavar="COMPONENT",
        choices=sorted(debug.status()), help="Switch on logging for a component (repeatable).",
    )
    p.add_argument("--log-file", metavar="FILE", help="Also write log records to FILE.")
    p.add_argument("--quiet", action="store_true", help="Suppress all log output, warnings included.")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def run(args: argparse.Namespace) -> None:
    machine_cfg = load_config(args.config) if args.config else naval()
    cfg = Config(block=args.group)

    try:
        src: TextIO = open(args.input, encoding="utf-8") if args.input else sys.stdin
    except OSError:
        raise ConfigurationError(f"could not open {args.input}") from None
    try:
        dst: TextIO = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
    except OSError:
        if src is not sys.stdin:
            src.close()
        raise ConfigurationError(f"could not open {args.output}") from None

    try:
        process(machine_cfg, src, dst, cfg)
    finally:
        if src is not sys.stdin:
            src.close()
        if dst is not sys.stdout:
            dst.close()


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)

    # logging switches last for this run only
    was_off = [c for c, on in debug.status().items() if not on]
    debug.enable(*args.debug)
    if args.quiet:
        debug.toggle_global(False)
    handler = None
    try:
        if args.log_file:
            try:
                handler = debug.add_file(args.log_file)
            except OSError:
                raise ConfigurationError(f"could not open {args.log_file}") from None
        run(args)
    except EnigmaError as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1
    finally:
        if handler is not None:
            debug.remove_file(handler)
        debug.disable(*(c for c in args.debug if c in was_off))
        debug.toggle_global(True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
