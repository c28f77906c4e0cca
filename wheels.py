# wheels.py
from __future__ import annotations

from config_reader import MachineConfig, read_config

# ────────────────────────────────────────────────────────────────────────
#  Wheel database – historical Naval Enigma (M4) wiring in cycle notation
# ────────────────────────────────────────────────────────────────────────

NAVAL = """\
ABCDEFGHIJKLMNOPQRSTUVWXYZ
5 3
I     MQ   (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II    ME   (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III   MV   (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
IV    MJ   (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
V     MZ   (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
VI    MZM  (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
VII   MZM  (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
VIII  MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
Beta  N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
Gamma N    (AFNIRLBSQWVXGUZDKMTPCOYJHE)
B     R    (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)
C     R    (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) (QZ) (SX) (UY)
"""


def naval() -> MachineConfig:
    """Fresh parse each call; callers may mutate the returned config."""
    return read_config(NAVAL)


__all__ = ["NAVAL", "naval"]
