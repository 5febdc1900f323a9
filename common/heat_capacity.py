from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, Union

import numpy as np
from scipy.integrate import quad
from scipy.interpolate import interp1d

from common.units import Q_
from common.exceptions import RecoveryRangeError
from common.constants import (
    DEFAULT_REFERENCE, ReferenceState, T_sat_Hg, molar_masses,
    cp_N2, cp_Hg_gas, cp_Hg_liq_coeffs, cp_Al_coeffs, cp_glass_coeffs,
    cp_powder_table, cp_water_table, vp_Hg_coeffs, vp_Hg_valid,
)

log = logging.getLogger(__name__)

CpFunction = Callable[[Q_], Q_]
CpLike = Union[CpFunction, Q_]

_CP_UNIT = "J/g/K"

# Table data is interpolated linearly and extrapolated along the end segments
_powder_interp = interp1d(*map(np.asarray, cp_powder_table), kind="linear", fill_value="extrapolate")
_water_interp = interp1d(*map(np.asarray, cp_water_table), kind="linear", fill_value="extrapolate")


def _K(T: Q_) -> Q_:
    return T.to("K")


# ------------------------- species -------------------------

def cp_hg_liquid(T: Q_) -> Q_:
    a, b = cp_Hg_liq_coeffs
    return ((a - b * _K(T)) / molar_masses["Hg"]).to(_CP_UNIT)


def cp_hg(T: Q_, T_sat: Q_ = T_sat_Hg) -> Q_:
    """Liquid correlation below T_sat, ideal-gas constant at and above it.

    The jump at T_sat is a modelling simplification.
    """
    if _K(T) < T_sat:
        return cp_hg_liquid(T)
    return cp_Hg_gas


def cp_n2(T: Q_) -> Q_:
    return cp_N2


def cp_powder(T: Q_) -> Q_:
    cp_mol = Q_(float(_powder_interp(_K(T).magnitude)), "J/mol/K")
    return (cp_mol / molar_masses["powder"]).to(_CP_UNIT)


def cp_water(T: Q_) -> Q_:
    return Q_(float(_water_interp(_K(T).magnitude)), _CP_UNIT)


def cp_al(T: Q_) -> Q_:
    a, b = cp_Al_coeffs
    return ((a + b * _K(T)) / molar_masses["Al"]).to(_CP_UNIT)


def cp_glass(T: Q_) -> Q_:
    a, b, c = cp_glass_coeffs
    T = _K(T)
    return ((a + b * T - c * T**-2) / molar_masses["glass"]).to(_CP_UNIT)


# ------------------------ integration ------------------------

def as_cp_function(cp: CpLike) -> CpFunction:
    """Accept a cp(T) callable or a constant specific heat quantity."""
    if callable(cp):
        return cp
    if isinstance(cp, Q_) and cp.check("[energy] / [mass] / [temperature]"):
        return lambda T: cp
    raise TypeError(f"Heat capacity must be a function of T or a J/(g*K) quantity, got {cp!r}")


def integrate_cp(cp: CpLike, T1: Q_, T2: Q_, breakpoints: Iterable[Q_] = (T_sat_Hg,)) -> Q_:
    """Specific enthalpy change from T1 to T2, integral of cp dT."""
    f_cp = as_cp_function(cp)
    a, b = _K(T1).magnitude, _K(T2).magnitude
    if a == b:
        return Q_(0.0, "J/g")
    lo, hi = min(a, b), max(a, b)
    pts = [p.to("K").magnitude for p in breakpoints]
    pts = [p for p in pts if lo < p < hi]

    def f(T):
        return f_cp(Q_(T, "K")).to(_CP_UNIT).magnitude

    val, _err = quad(f, lo, hi, points=pts or None, limit=100)
    return Q_(val if b > a else -val, "J/g")


def absolute_h(cp: CpLike, T: Q_, ref: ReferenceState = DEFAULT_REFERENCE) -> Q_:
    """Specific enthalpy at T relative to the reference state."""
    return (ref.h0 + integrate_cp(cp, ref.T0, T)).to("J/g")


# ------------------------ vapour pressure ------------------------

def vapour_pressure_hg(T: Q_) -> Q_:
    lo, hi = vp_Hg_valid
    T = _K(T)
    if not (lo <= T <= hi):
        log.warning(f"Hg vapour pressure correlation used outside 0-150 degC (T={T:.2f~P})")
    A, B = vp_Hg_coeffs
    return Q_(math.exp(A / T.magnitude + B), "kPa")


def condenser_recovery(T_out: Q_, P_cond: Q_) -> float:
    """Fraction of mercury condensed at T_out.

    Rough estimate: the mercury partial pressure is taken as the full
    condenser pressure (little nitrogen in the stream).
    """
    Pv = vapour_pressure_hg(T_out)
    if P_cond <= Pv:
        raise RecoveryRangeError(
            f"condenser pressure {P_cond:~P} does not exceed Hg vapour pressure {Pv:.4g~P} at {_K(T_out):.2f~P}")
    return 1.0 - (Pv / (P_cond - Pv)).to("").magnitude
