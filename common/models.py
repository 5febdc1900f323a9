from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Collection, Iterator, Tuple, Union

from common.units import Q_
from common.constants import ReferenceState, DEFAULT_REFERENCE
from common.exceptions import UnknownSpeciesError, StreamShapeError
from common.heat_capacity import (
    CpFunction, cp_hg, cp_n2, cp_powder, cp_glass, cp_al, cp_water,
)


class Phase(str, Enum):
    SOLID = "s"
    LIQUID = "l"
    GAS = "g"


class Species(str, Enum):
    HG = "Hg"
    N2 = "N2"
    POWDER = "powder"
    GLASS = "glass"
    AL = "Al"
    WATER = "water"

    @classmethod
    def parse(cls, tag: Union[str, "Species"]) -> "Species":
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownSpeciesError(tag) from None

    @property
    def cp(self) -> CpFunction:
        return _CP[self]


_CP = {
    Species.HG: cp_hg,
    Species.N2: cp_n2,
    Species.POWDER: cp_powder,
    Species.GLASS: cp_glass,
    Species.AL: cp_al,
    Species.WATER: cp_water,
}
if set(_CP) != set(Species):
    raise RuntimeError(f"no heat capacity bound for {set(Species) - set(_CP)}")

SOLIDS = frozenset({Species.POWDER, Species.GLASS, Species.AL})


def _quantity(v, unit: str, what: str) -> Q_:
    if isinstance(v, Q_):
        return v.to(unit)       # DimensionalityError on a wrong dimension
    if v == 0:
        return Q_(0.0, unit)
    raise TypeError(f"{what} must be a quantity in {unit}, got {v!r}")


@dataclass(frozen=True)
class Component:
    m: Q_             # g
    h: Q_             # J/g, relative to the reference state
    species: Species
    phase: Phase = Phase.SOLID
    cp: CpFunction = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "species", Species.parse(self.species))
        object.__setattr__(self, "phase", Phase(self.phase))
        object.__setattr__(self, "m", _quantity(self.m, "g", "mass"))
        object.__setattr__(self, "h", _quantity(self.h, "J/g", "specific enthalpy"))
        if self.m.magnitude < 0:
            raise ValueError(f"{self.species.value}: negative mass {self.m:~P}")
        object.__setattr__(self, "cp", self.species.cp)

    @property
    def H(self) -> Q_:
        return (self.m * self.h).to("J")


@dataclass(frozen=True)
class Stream:
    """Components at one well-mixed temperature.

    Order is mercury first, then the carrier gas or solids.
    """
    components: Tuple[Component, ...]
    T: Q_             # K
    ID: str = "-"

    def __post_init__(self):
        object.__setattr__(self, "components", tuple(self.components))
        object.__setattr__(self, "T", self.T.to("K"))

    @property
    def species(self) -> Tuple[Species, ...]:
        return tuple(c.species for c in self.components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __getitem__(self, key: Union[str, Species]) -> Component:
        sp = Species.parse(key)
        for c in self.components:
            if c.species is sp:
                return c
        raise KeyError(f"stream {self.ID}: no {sp.value} component")

    def relabel(self, ID) -> "Stream":
        return replace(self, ID=str(ID))


def expect_shape(stream: Stream, *leading: Species,
                 trailing: Collection[Species] = (), min_trailing: int = 0,
                 where: str = "") -> None:
    """Raise StreamShapeError unless the stream starts with `leading` and the
    rest are drawn from `trailing`."""
    got = stream.species
    head, tail = got[:len(leading)], got[len(leading):]
    ok = (head == tuple(leading)
          and all(sp in trailing for sp in tail)
          and len(tail) >= min_trailing)
    if not ok:
        want = "[" + ", ".join(s.value for s in leading)
        if trailing:
            want += ", " + "|".join(sorted(s.value for s in trailing)) + "..."
        want += "]"
        raise StreamShapeError(
            f"{where or 'stream'}: expected {want}, got [{', '.join(s.value for s in got)}]")


__all__ = [
    "Phase", "Species", "SOLIDS", "Component", "Stream", "expect_shape",
    "ReferenceState", "DEFAULT_REFERENCE",
]
