from __future__ import annotations

import math
from typing import Sequence, Union

from common.units import Q_
from common.models import Stream
from common.exceptions import MassBalanceError, EnergyBalanceError

Streams = Union[Stream, Sequence[Stream]]


def _as_list(streams: Streams):
    return [streams] if isinstance(streams, Stream) else list(streams)


def stream_energy(streams: Streams) -> Q_:
    """Total enthalpy H of a stream, or summed over several."""
    total = Q_(0.0, "J")
    for s in _as_list(streams):
        for c in s:
            total += c.H
    return total


def stream_mass(streams: Streams) -> Q_:
    total = Q_(0.0, "g")
    for s in _as_list(streams):
        for c in s:
            total += c.m
    return total


def mass_check(inputs: Streams, outputs: Streams, rtol: float = 0.01) -> Q_:
    m_in = stream_mass(inputs)
    m_out = stream_mass(outputs)
    dm = (m_in - m_out).to("g")
    if not math.isclose(m_in.magnitude, m_out.to("g").magnitude, rel_tol=rtol):
        raise MassBalanceError(dm, f"in={m_in:.6g~P}, out={m_out:.6g~P}")
    return dm


def energy_check(inputs: Streams, outputs: Streams,
                 extraneous_energy: Q_ = Q_(0.0, "J"),
                 atol: Q_ = Q_(0.01, "J")) -> Q_:
    """in - out + extraneous (duty not carried by a stream) must vanish."""
    dH = (stream_energy(inputs) - stream_energy(outputs) + extraneous_energy).to("J")
    if abs(dH) > atol:
        raise EnergyBalanceError(dH)
    return dH


def relative_energy_check(lhs: Q_, rhs: Q_, rtol: float) -> Q_:
    """For balances derived from a ratio rather than closed algebraically."""
    d = (lhs - rhs).to("J")
    if not math.isclose(lhs.to("J").magnitude, rhs.to("J").magnitude, rel_tol=rtol):
        raise EnergyBalanceError(d, f"lhs={lhs.to('J'):.6g~P}, rhs={rhs.to('J'):.6g~P}")
    return d
