from __future__ import annotations

import logging

from scipy.optimize import root_scalar

from common.units import Q_
from common.constants import dh_vap_Hg, DEFAULT_REFERENCE, ReferenceState
from common.models import Component, Stream, Species, expect_shape
from common.heat_capacity import absolute_h
from common.balances import energy_check, mass_check
from common.exceptions import ConvergenceError, StreamShapeError
from common.logging_utils import op_extra, trace_calls

log = logging.getLogger(__name__)


@trace_calls(values=True)
def merge_streams(s1: Stream, s2: Stream, *, T_guess: Q_ = Q_(500.0, "K"),
                  ref: ReferenceState = DEFAULT_REFERENCE) -> Stream:
    """
    Adiabatic mixing of two streams carrying the same two species.

    The outlet temperature is the root of H_out(T3) = H_1(T1) + H_2(T2); the
    enthalpy of mixing is neglected. Mercury in the first slot is taken as
    vapour and carries its latent heat.
    """
    if len(s1) != 2:
        raise StreamShapeError(f"merge inlet 1: expected two components, got {len(s1)}")
    a, b = s1.species
    expect_shape(s2, a, b, where="merge inlet 2")

    L_a = dh_vap_Hg if a is Species.HG else Q_(0.0, "J/g")

    def h_a(T: Q_) -> Q_:
        return absolute_h(a.cp, T, ref) + L_a

    def h_b(T: Q_) -> Q_:
        return absolute_h(b.cp, T, ref)

    m1a, m1b = s1[a].m, s1[b].m
    m2a, m2b = s2[a].m, s2[b].m
    m3a, m3b = m1a + m2a, m1b + m2b

    H_in = (m1a * h_a(s1.T) + m2a * h_a(s2.T) + m1b * h_b(s1.T) + m2b * h_b(s2.T)).to("J")

    def f(T: float) -> float:
        T = Q_(T, "K")
        return (m3a * h_a(T) + m3b * h_b(T) - H_in).to("J").magnitude

    x0 = T_guess.to("K").magnitude
    sol = root_scalar(f, x0=x0, x1=x0 + 10.0, method="secant", xtol=1e-10)
    if not sol.converged:
        raise ConvergenceError(f"mixing temperature did not converge: {sol.flag}")
    T3 = Q_(sol.root, "K")

    out = Stream((Component(m3a, h_a(T3), a, s1[a].phase),
                  Component(m3b, h_b(T3), b, s1[b].phase)), T3)

    energy_check([s1, s2], [out])
    mass_check([s1, s2], [out])

    log.info(f"T1={s1.T:.2f~P} T2={s2.T:.2f~P} -> T3={T3:.2f~P}",
             extra=op_extra("mixer", "T3"))
    return out
