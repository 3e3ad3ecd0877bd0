# RU: Модель последовательности модулей штрихкода (бар/пробел) и её сериализуемая проекция.
# EN: Module train (alternating bar/space runs) and its serializable BarcodeDocument projection.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Tuple

logger = logging.getLogger(__name__)

__all__ = ["Module", "ModuleTrain", "BarcodeDocument"]


@dataclass(frozen=True)
class Module:
    """One run of identical units: a bar (drawn) or a space (gap)."""

    width: int
    is_bar: bool

    def __post_init__(self) -> None:
        if not isinstance(self.width, int) or self.width <= 0:
            raise ValueError(f"Module width must be a positive integer, got {self.width!r}")


@dataclass(frozen=True)
class ModuleTrain:
    """
    Ordered, strictly alternating sequence of modules.

    Invariants (checked on construction):
        - non-empty
        - first and last modules are bars
        - neighbours never share a color

    Because neighbours always differ, the unit-level bit form produced by
    bits() maps back to exactly one train (see from_bits).
    """

    modules: Tuple[Module, ...]

    def __post_init__(self) -> None:
        if not self.modules:
            raise ValueError("Module train must not be empty")
        if not self.modules[0].is_bar or not self.modules[-1].is_bar:
            raise ValueError("Module train must begin and end with a bar")
        for prev, cur in zip(self.modules, self.modules[1:]):
            if prev.is_bar == cur.is_bar:
                raise ValueError("Module train must alternate bars and spaces")

    def __len__(self) -> int:
        return len(self.modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules)

    @property
    def total_width(self) -> int:
        """Width of the whole symbol in units (narrow module = 1)."""
        return sum(m.width for m in self.modules)

    @property
    def bars(self) -> Tuple[Module, ...]:
        return tuple(m for m in self.modules if m.is_bar)

    def bar_spans(self) -> Iterator[Tuple[int, int]]:
        """Yield (start_unit, width) for each bar, left to right."""
        offset = 0
        for m in self.modules:
            if m.is_bar:
                yield offset, m.width
            offset += m.width

    def bits(self) -> bytes:
        """One byte per unit: 1 for bar, 0 for space."""
        return b"".join(
            (b"\x01" if m.is_bar else b"\x00") * m.width for m in self.modules
        )

    @classmethod
    def from_bits(cls, bits: Iterable[int]) -> "ModuleTrain":
        """Run-length decode a unit sequence produced by bits()."""
        modules = []
        run_value = None
        run_width = 0
        for bit in bits:
            if bit not in (0, 1):
                raise ValueError(f"Encoding values must be 0 or 1, got {bit!r}")
            value = bool(bit)
            if value == run_value:
                run_width += 1
                continue
            if run_value is not None:
                modules.append(Module(run_width, run_value))
            run_value = value
            run_width = 1
        if run_value is not None:
            modules.append(Module(run_width, run_value))
        return cls(tuple(modules))


@dataclass(frozen=True)
class BarcodeDocument:
    """
    Serializable projection of a module train plus print-scale parameters.

    height/xdim are caller-supplied and never derived from the train.
    encoding is the unit-level bit form (ModuleTrain.bits()).
    """

    height: int
    xdim: int
    encoding: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.height, int) or self.height <= 0:
            raise ValueError(f"height must be a positive integer, got {self.height!r}")
        if not isinstance(self.xdim, int) or self.xdim <= 0:
            raise ValueError(f"xdim must be a positive integer, got {self.xdim!r}")

    @classmethod
    def from_train(cls, train: ModuleTrain, height: int, xdim: int) -> "BarcodeDocument":
        return cls(height=height, xdim=xdim, encoding=train.bits())

    def to_train(self) -> ModuleTrain:
        return ModuleTrain.from_bits(self.encoding)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "height": self.height,
            "xdim": self.xdim,
            "encoding": list(self.encoding),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BarcodeDocument":
        try:
            height = d["height"]
            xdim = d["xdim"]
            raw = d["encoding"]
        except KeyError as e:
            raise ValueError(f"Barcode document is missing field {e.args[0]!r}") from e
        if not isinstance(raw, (list, tuple, bytes)):
            raise ValueError("Barcode document encoding must be a list of 0/1 values")
        if any(not isinstance(v, int) or v not in (0, 1) for v in raw):
            raise ValueError("Barcode document encoding must contain only 0 and 1")
        return cls(height=height, xdim=xdim, encoding=bytes(raw))
