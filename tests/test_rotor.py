import pytest

from alphabet import CharacterRange
from errors import AlphabetError, ConfigurationError
from permutation import Permutation
from rotor_and_reflector import (
    BEHAVIOUR,
    FixedRotor,
    MovingRotor,
    Reflector,
    Rotor,
    RotorKind,
    RotorTemplate,
)

ABCD = CharacterRange("A", "D")


def test_behaviour_table_is_closed():
    assert set(BEHAVIOUR) == set(RotorKind)
    assert BEHAVIOUR[RotorKind.FIXED].rotates is False
    assert BEHAVIOUR[RotorKind.REFLECTOR].reflecting is True


def test_notch_detection_for_every_setting():
    rotor = MovingRotor("r", Permutation("(ABCD)", ABCD), "C")
    assert rotor.name == "R"
    for posn in range(ABCD.size()):
        rotor.set(posn)
        assert rotor.at_notch() == (ABCD.to_char(posn) == "C")


def test_moving_rotor_advances_and_wraps():
    rotor = MovingRotor("R", Permutation("(ABCD)", ABCD), "")
    assert rotor.rotates() and not rotor.reflecting()
    rotor.set("D")
    rotor.advance()
    assert rotor.setting() == 0


def test_fixed_and_reflector_never_move():
    fixed = FixedRotor("F", Permutation("(AB)", ABCD))
    refl = Reflector("B", Permutation("(AC) (BD)", ABCD))
    for rotor in (fixed, refl):
        rotor.set(2)
        rotor.advance()
        assert rotor.setting() == 2
        assert not rotor.rotates()
        assert not rotor.at_notch()
    assert refl.reflecting() and not fixed.reflecting()


def test_set_by_character():
    rotor = FixedRotor("F", Permutation("", ABCD))
    rotor.set("c")
    assert rotor.setting() == 2
    with pytest.raises(AlphabetError):
        rotor.set("Z")


def test_conversion_accounts_for_setting(upper):
    rotor = Rotor("I", Permutation("(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)", upper))
    # setting 0: plain wiring
    assert rotor.convert_forward(0) == 4
    assert rotor.convert_backward(4) == 0
    rotor.set(1)
    # A enters at B of the wiring -> K, shifted back one -> J
    assert rotor.convert_forward(0) == 9
    for p in range(26):
        assert rotor.convert_backward(rotor.convert_forward(p)) == p


def test_template_builds_independent_rotors():
    tmpl = RotorTemplate("iii", RotorKind.MOVING, Permutation("(ABCD)", ABCD), frozenset("c"))
    assert tmpl.name == "III"
    assert tmpl.notches == frozenset("C")
    a, b = tmpl.build(), tmpl.build()
    a.advance()
    assert a.setting() == 1
    assert b.setting() == 0


def test_template_validation():
    with pytest.raises(ConfigurationError):
        RotorTemplate("N", RotorKind.FIXED, Permutation("", ABCD), frozenset("A"))
    with pytest.raises(ConfigurationError):
        RotorTemplate("M", RotorKind.MOVING, Permutation("", ABCD), frozenset("Z"))
    with pytest.raises(ConfigurationError):
        RotorTemplate("", RotorKind.MOVING, Permutation("", ABCD))


def test_kind_codes():
    assert RotorKind.from_code("MQ") is RotorKind.MOVING
    assert RotorKind.from_code("N") is RotorKind.FIXED
    assert RotorKind.from_code("r") is RotorKind.REFLECTOR
    with pytest.raises(ConfigurationError):
        RotorKind.from_code("X")
    with pytest.raises(ConfigurationError):
        RotorKind.from_code("")


def test_accessors_are_attributes_everywhere():
    perm = Permutation("(ABCD)", ABCD)
    rotor = MovingRotor("R", perm, "C")
    tmpl = rotor.template()
    assert rotor.name == tmpl.name == "R"
    assert rotor.permutation is tmpl.permutation is perm
    assert rotor.permutation.alphabet is rotor.alphabet is ABCD
