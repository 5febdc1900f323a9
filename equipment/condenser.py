from __future__ import annotations

import logging

from common.units import Q_
from common.constants import dh_vap_Hg, DEFAULT_REFERENCE, ReferenceState
from common.models import Component, Stream, Species, Phase, expect_shape
from common.heat_capacity import absolute_h, condenser_recovery
from common.balances import energy_check
from common.exceptions import RecoveryRangeError
from common.results import CondenserResult
from common.logging_utils import op_extra, trace_calls

log = logging.getLogger(__name__)


@trace_calls(values=True)
def condenser(stream: Stream, T_out: Q_, eff: float, P_cond: Q_,
              *, ref: ReferenceState = DEFAULT_REFERENCE) -> CondenserResult:
    """
    Cool an [Hg, N2] vapour to T_out and condense part of the mercury.

    eff is the combined condenser/chiller efficiency. The recovery comes from
    the Hg vapour pressure at T_out against the condenser pressure. Returns
    (vapour [Hg, N2], liquid [Hg], Q); Q < 0 when heat is removed.
    """
    expect_shape(stream, Species.HG, Species.N2, where="condenser inlet")
    if not 0 < eff <= 1:
        raise ValueError(f"condenser efficiency must be in (0, 1], got {eff}")

    T_out = T_out.to("K")
    r_C = condenser_recovery(T_out, P_cond)
    if not 0 <= r_C <= 1:
        raise RecoveryRangeError(
            f"condenser recovery {r_C:.4g} outside [0, 1] at T_out={T_out:.2f~P}, P={P_cond:~P}")

    hg = stream[Species.HG]
    n2 = stream[Species.N2]
    h_hg = absolute_h(hg.cp, T_out, ref)

    hg_vap = Component(hg.m * (1 - r_C), h_hg, Species.HG, Phase.GAS)
    n2_out = Component(n2.m, absolute_h(n2.cp, T_out, ref), Species.N2, Phase.GAS)
    hg_liq = Component(hg.m * r_C, h_hg + dh_vap_Hg, Species.HG, Phase.LIQUID)

    vapour = Stream((hg_vap, n2_out), T_out)
    liquid = Stream((hg_liq,), T_out)

    Q = ((hg_vap.m * (hg_vap.h - hg.h)
          + n2_out.m * (n2_out.h - n2.h)
          + hg_liq.m * (hg_liq.h - hg.h)) / eff).to("kJ")
    energy_check([stream], [vapour, liquid], Q * eff)

    log.info(f"r_C={r_C:.4f} Hg condensed={hg_liq.m:.4g~P} Q={Q:.4g~P}",
             extra=op_extra("condenser", "duty"))
    return CondenserResult(vapour, liquid, Q)
