"""
Text sanitizing policies.

Two independent, pure, total functions over arbitrary user text:

- path_safe: a token usable as a directory segment
  ("Product One/XL" -> "PRODUCT_ONE-XL")
- barcode_safe: a single unbroken token for the encoder
  ("Product One" -> "PRODUCTONE")

Both are idempotent and map "" to "". Emptiness is rejected later, by the
encoder. The two are never applied to each other's output: each result is a
SanitizedToken that remembers its policy.

Примеры:
    >>> path_safe("Product One!!").value
    'PRODUCT_ONE!!'
    >>> PathSanitizer(strip_chars="!")("Product One!!").value
    'PRODUCT_ONE'
    >>> barcode_safe(" Product  One ").value
    'PRODUCTONE'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Final, Pattern

from stocklabel.model.enums import SanitizePolicy
from stocklabel.model.settings import DEFAULT_PATH_REPLACE_CHARS

logger = logging.getLogger(__name__)

__all__ = [
    "SanitizedToken",
    "PathSanitizer",
    "path_safe",
    "barcode_safe",
]

_WHITESPACE_RUN: Final[Pattern[str]] = re.compile(r"\s+")
_HYPHEN_RUN: Final[Pattern[str]] = re.compile(r"-+")
_UNDERSCORE_RUN: Final[Pattern[str]] = re.compile(r"_+")


@dataclass(frozen=True)
class SanitizedToken:
    value: str
    policy: SanitizePolicy

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)

    def __bool__(self) -> bool:
        return bool(self.value)


def _char_class(chars: str) -> Pattern[str]:
    return re.compile("[" + "".join(re.escape(c) for c in sorted(set(chars))) + "]")


class PathSanitizer:
    """
    Path-safe policy with configurable punctuation sets.

    Args:
        replace_chars: characters replaced by a hyphen.
        strip_chars: characters deleted outright (applied first).

    Raises:
        ValueError: if a set contains letters, digits, '-', '_' or whitespace;
            such sets would make the policy non-idempotent.
    """

    def __init__(
        self,
        replace_chars: str = DEFAULT_PATH_REPLACE_CHARS,
        strip_chars: str = "",
    ) -> None:
        for label, chars in (("replace_chars", replace_chars), ("strip_chars", strip_chars)):
            bad = sorted(
                {c for c in chars if c.isalnum() or c.isspace() or c in "-_"}
            )
            if bad:
                raise ValueError(f"{label} must not contain {''.join(bad)!r}")
        overlap = set(replace_chars) & set(strip_chars)
        if overlap:
            raise ValueError(
                f"Characters cannot be both replaced and stripped: {''.join(sorted(overlap))!r}"
            )
        self.replace_chars = replace_chars
        self.strip_chars = strip_chars
        self._replace = _char_class(replace_chars) if replace_chars else None
        self._strip = _char_class(strip_chars) if strip_chars else None

    def __call__(self, text: str) -> SanitizedToken:
        if self._strip is not None:
            text = self._strip.sub("", text)
        text = text.strip()
        if self._replace is not None:
            text = self._replace.sub("-", text)
        text = _WHITESPACE_RUN.sub("_", text)
        text = _HYPHEN_RUN.sub("-", text)
        text = _UNDERSCORE_RUN.sub("_", text)
        return SanitizedToken(text.upper(), SanitizePolicy.PATH)

    def __repr__(self) -> str:
        return (
            f"PathSanitizer(replace_chars={self.replace_chars!r}, "
            f"strip_chars={self.strip_chars!r})"
        )


_DEFAULT_PATH_SANITIZER: Final[PathSanitizer] = PathSanitizer()


def path_safe(text: str) -> SanitizedToken:
    """Path-safe policy with the default punctuation set."""
    return _DEFAULT_PATH_SANITIZER(text)


def barcode_safe(text: str) -> SanitizedToken:
    """Trim, drop every whitespace character, uppercase."""
    return SanitizedToken("".join(text.split()).upper(), SanitizePolicy.BARCODE)
