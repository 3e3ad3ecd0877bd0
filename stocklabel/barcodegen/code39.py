"""
Code 39 symbology encoder.

Turns a barcode-safe token into a ModuleTrain:

    *TOKEN*  ->  [start pattern] gap [char pattern] gap ... gap [stop pattern]

The symbol is built by python-barcode without a check character. Tokens are
validated against the alphabet first; errors carry the offending position.

Every character is nine elements (bar, space, bar, ... bar), three of them
wide. Characters are separated by one narrow space.

Example:
    >>> train = encode("PRODUCTONE-XS")
    >>> len(train) == 9 * 15 + 14
    True
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Final, Tuple, Union

import barcode as pybarcode
from barcode.errors import BarcodeError

from stocklabel.barcodegen.errors import (
    BarcodeFormatError,
    BarcodeInputError,
    EmptyInputError,
    UnsupportedCharacterError,
)
from stocklabel.barcodegen.sanitize import SanitizedToken
from stocklabel.model.enums import SanitizePolicy
from stocklabel.model.module_train import Module, ModuleTrain

logger = logging.getLogger(__name__)

__all__ = [
    "ALPHABET",
    "SENTINEL",
    "NARROW",
    "WIDE",
    "CHARACTER_ELEMENTS",
    "encode",
    "pattern_for",
    "is_encodable",
]

# Ширина элементов в модулях (python-barcode: 3:1)
NARROW: Final[int] = 1
WIDE: Final[int] = 3
SENTINEL: Final[str] = "*"
CHARACTER_ELEMENTS: Final[int] = 9

ALPHABET: Final[frozenset] = frozenset("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ-. $/+%")


def _symbol_bits(text: str) -> str:
    """Unit-level bar/space string of *text*, start/stop included."""
    try:
        symbol = pybarcode.get_barcode_class("code39")(text, add_checksum=False)
        return symbol.build()[0]
    except BarcodeError as e:
        logger.error("python-barcode rejected %r: %r", text, e)
        raise BarcodeFormatError(f"Failed to build Code 39 symbol for {text!r}", cause=e) from e


@lru_cache(maxsize=None)
def _pattern(char: str) -> Tuple[Module, ...]:
    # "*c*": start (0-8), gap (9), c (10-18)
    sample = "0" if char == SENTINEL else char
    modules = ModuleTrain.from_bits(int(b) for b in _symbol_bits(sample)).modules
    if char == SENTINEL:
        return modules[:CHARACTER_ELEMENTS]
    return modules[CHARACTER_ELEMENTS + 1 : 2 * CHARACTER_ELEMENTS + 1]


def pattern_for(char: str) -> Tuple[Module, ...]:
    """Return the nine-element pattern of one character (sentinel included)."""
    if char != SENTINEL and char not in ALPHABET:
        raise UnsupportedCharacterError(char)
    return _pattern(char)


def is_encodable(text: str) -> bool:
    return bool(text) and all(c in ALPHABET for c in text)


def encode(token: Union[SanitizedToken, str]) -> ModuleTrain:
    """
    Encode a token as a Code 39 module train.

    Args:
        token: barcode-safe token (or plain text already in the alphabet).

    Returns:
        ModuleTrain framed by start/stop sentinels.

    Raises:
        EmptyInputError: on empty input.
        UnsupportedCharacterError: on a character outside the alphabet.
        BarcodeInputError: when given a path-safe token.
    """
    if isinstance(token, SanitizedToken):
        if token.policy is not SanitizePolicy.BARCODE:
            raise BarcodeInputError(
                f"Cannot encode a {token.policy.value}-safe token; use barcode_safe()"
            )
        text = token.value
    else:
        text = token

    if not text:
        raise EmptyInputError("Barcode data must be non-empty string")
    for position, char in enumerate(text):
        if char not in ALPHABET:
            logger.debug("Rejected character %r at %d", char, position)
            raise UnsupportedCharacterError(char, position)

    train = ModuleTrain.from_bits(int(b) for b in _symbol_bits(text))
    logger.debug(
        "Encoded %d chars into %d modules (%d units)",
        len(text),
        len(train),
        train.total_width,
    )
    return train
