# alphabet.py
from __future__ import annotations

from collections.abc import Iterator

from debug import Debug
from errors import AlphabetError

debug = Debug()


def _upper(ch: str) -> str:
    """Upper-case one character; keep it when the upper form is longer."""
    up = ch.upper()
    return up if len(up) == 1 else ch


class Alphabet:
    """Bidirectional map between characters and the indices 0..size-1.

    Build one through `CharacterRange`, `CharacterList` or `Alphabet.parse`.
    """

    def __init__(self, chars: str) -> None:
        if not chars:
            raise AlphabetError("Empty set of characters")
        self.char_to_index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch in self.char_to_index:
                raise AlphabetError(f"Duplicate character {ch!r} in alphabet")
            self.char_to_index[ch] = i
        self._chars: str = chars
        debug.log("alphabet", "%s size=%d", type(self).__name__, len(chars))

    # ── config-file token ────────────────────────────────────────
    @staticmethod
    def parse(token: str) -> "Alphabet":
        """`A-Z` style tokens are ranges, anything else an explicit list."""
        if len(token) == 3 and token[1] == "-":
            return CharacterRange(token[0], token[2])
        return CharacterList(token)

    # ── contract ─────────────────────────────────────────────────
    def size(self) -> int:
        return len(self._chars)

    def contains(self, ch: str) -> bool:
        return ch in self.char_to_index

    # character → integer index
    def to_int(self, ch: str) -> int:
        try:
            return self.char_to_index[ch]
        except KeyError:
            raise AlphabetError(
                f"Character {ch!r} is not in the alphabet"
            ) from None

    # integer index → character
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self._chars)):
            hi = len(self._chars) - 1
            raise AlphabetError(f"Index {index} out of range 0–{hi}")
        return self._chars[index]

    @property
    def chars(self) -> str:
        return self._chars

    # ── niceties ─────────────────────────────────────────────────
    def __len__(self) -> int:
        return len(self._chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self.char_to_index

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._chars!r}>"


# ── Range ─────────────────────────────────────────────────────────
class CharacterRange(Alphabet):
    """All characters from FIRST to LAST inclusive, in code-point order."""

    def __init__(self, first: str, last: str) -> None:
        if len(first) != 1 or len(last) != 1:
            raise AlphabetError("Range bounds must be single characters")
        first, last = _upper(first), _upper(last)
        if first > last:
            raise AlphabetError(f"Empty range {first}-{last}: first > last")
        super().__init__(
            "".join(chr(c) for c in range(ord(first), ord(last) + 1))
        )
        self.first = first
        self.last = last

    def __repr__(self) -> str:
        return f"<CharacterRange {self.first}-{self.last}>"


# ── Explicit list ─────────────────────────────────────────────────
class CharacterList(Alphabet):
    """The given characters, upper-cased one at a time, in the order supplied."""

    def __init__(self, chars: str) -> None:
        super().__init__("".join(_upper(ch) for ch in chars))


__all__ = ["Alphabet", "CharacterRange", "CharacterList"]
