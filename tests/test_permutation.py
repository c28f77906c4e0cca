import pytest

from alphabet import CharacterList, CharacterRange
from errors import ConfigurationError
from permutation import Permutation
from conftest import UPPER_STRING

NAVAL_I = "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"


def check_perm(perm, from_alpha, to_alpha):
    """PERM maps each character of FROM_ALPHA to the matching one of
    TO_ALPHA, both as characters and as indices, and inverts back."""
    assert perm.size() == len(from_alpha)
    for c, e in zip(from_alpha, to_alpha):
        assert perm.permute(c) == e, f"wrong translation of {c!r}"
        assert perm.invert(e) == c, f"wrong inverse of {e!r}"
        ci, ei = UPPER_STRING.index(c), UPPER_STRING.index(e)
        assert perm.permute(ci) == ei
        assert perm.invert(ei) == ci


def test_identity(upper):
    perm = Permutation("", upper)
    check_perm(perm, UPPER_STRING, UPPER_STRING)
    assert not perm.derangement()


def test_naval_rotor_i(upper):
    p = Permutation(NAVAL_I, upper)
    check_perm(p, UPPER_STRING, "EKMFLGDQVZNTOWYHXUSPAIBRCJ")
    assert p.permute("A") == "E"
    assert p.permute("N") == "W"
    assert p.permute(12) == 14
    assert p.permute(9) == 25
    assert not p.derangement()      # (S) is a fixed point


def test_unlisted_characters_are_fixed(upper):
    p = Permutation("(PNH) (ABDFIKLZYXW) (JC)", upper)
    assert p.invert("B") == "A"
    assert p.invert("G") == "G"
    assert p.permute("B") == "D"
    assert p.permute("G") == "G"
    assert not p.derangement()


def test_round_trip_every_character(upper):
    p = Permutation("(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ)", upper)
    for c in UPPER_STRING:
        assert p.invert(p.permute(c)) == c
        assert p.permute(p.invert(c)) == c


def test_back_to_back_cycles_and_derangement():
    alpha = CharacterRange("A", "E")
    p = Permutation("(ABC)(DE)", alpha)
    assert p.permute("C") == "A"
    assert p.invert("A") == "C"
    assert p.permute("E") == "D"
    assert p.derangement()
    assert p.is_involution() is False


def test_single_character_cycle_is_not_a_derangement():
    alpha = CharacterList("AB")
    p = Permutation("(A) (B)", alpha)
    assert not p.derangement()
    assert p.permute("A") == "A"


def test_wrap_is_never_negative(upper):
    p = Permutation("", upper)
    assert p.wrap(-1) == 25
    assert p.wrap(-27) == 25
    assert p.wrap(52) == 0
    assert p.permute(-1) == 25


def test_lowercase_cycle_characters(upper):
    assert Permutation("(ab)", upper).permute("A") == "B"


@pytest.mark.parametrize(
    "cycles",
    ["(AB", "AB)", "(A(B))", "()", "AB", "(A1)", "(AB) x", "(ABA)", "(AB) (BC)"],
)
def test_malformed_cycles(upper, cycles):
    with pytest.raises(ConfigurationError):
        Permutation(cycles, upper)


def test_cycles_render(upper):
    p = Permutation("(BA)  (CDE)", upper)
    assert p.cycles() == "(AB) (CDE)"
    assert "AB" in repr(p)
