import sys
from pathlib import Path

import pytest

# flat layout: make the repository root importable while running tests
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from alphabet import CharacterRange  # noqa: E402
from wheels import naval  # noqa: E402

UPPER_STRING = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


@pytest.fixture
def upper():
    return CharacterRange("A", "Z")


@pytest.fixture
def naval_config():
    return naval()


@pytest.fixture
def naval_machine(naval_config):
    return naval_config.build()
