"""Charset registry: maps glyph source characters to BFF glyph indices."""

from functools import lru_cache
from pathlib import Path

import yaml

CHARSETS_PATH = Path(__file__).parent / "charsets.yaml"


class Charset:
    """A named single-byte character encoding with its BFF header tag."""

    def __init__(self, name: str, tag: int, codec: str):
        self.name = name
        self.tag = tag
        self.codec = codec

    def encode(self, char: str) -> int:
        """Return the glyph index for a source character.

        Raises UnicodeEncodeError/ValueError when the character has no
        single-byte encoding in this charset.
        """
        encoded = char.encode(self.codec)
        if len(encoded) != 1:
            raise ValueError(f"{char!r} does not encode to a single byte in {self.name}")
        return encoded[0]

    def decode(self, index: int) -> str:
        return bytes([index]).decode(self.codec, errors="replace")

    def __repr__(self):
        return f"Charset({self.name!r}, tag={self.tag})"


def load_charsets(path: Path = CHARSETS_PATH) -> dict[str, Charset]:
    """Load the charset table from YAML, keyed by upper-cased name."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    charsets = {}
    for name, entry in data.items():
        tag = int(entry["tag"])
        if not 0 <= tag <= 0xFF:
            raise ValueError(f"Charset '{name}' has tag {tag}, expected 0-255")
        charsets[name.upper()] = Charset(name.upper(), tag, entry["codec"])
    return charsets


@lru_cache(maxsize=None)
def default_charsets() -> dict[str, Charset]:
    return load_charsets()


def get_charset(name: str, charsets: dict[str, Charset] | None = None) -> Charset | None:
    """Look up a charset by name, ignoring case. Returns None if unknown."""
    if charsets is None:
        charsets = default_charsets()
    return charsets.get(name.strip().upper())
