from __future__ import annotations

import logging
from typing import Optional

from common.units import Q_
from common.constants import DEFAULT_REFERENCE, ReferenceState
from common.models import Component, Stream, Species, Phase
from common.heat_capacity import CpLike, absolute_h, as_cp_function, integrate_cp
from common.balances import relative_energy_check
from common.results import ChillerResult
from common.logging_utils import op_extra, trace_calls

log = logging.getLogger(__name__)


@trace_calls(values=True)
def chiller(Q: Q_, cp_coolant: CpLike, Tc: Q_, Th: Q_, eff: float,
            *, T_limit: Optional[Q_] = None, species: Species = Species.WATER,
            ref: ReferenceState = DEFAULT_REFERENCE) -> ChillerResult:
    """
    Coolant loop that takes up the heat duty Q between Tc (supply) and Th (return).

    Tc < Th is required, and Th <= T_limit when the condenser outlet
    temperature is given. The coolant flow is |Q| / (h(Th) - h(Tc)); the
    returned chiller duty has the sign of Q.
    """
    Tc, Th = Tc.to("K"), Th.to("K")
    if not Tc < Th:
        raise ValueError(f"chiller supply {Tc:.2f~P} must be colder than return {Th:.2f~P}")
    if T_limit is not None and Th > T_limit:
        raise ValueError(f"chiller return {Th:.2f~P} above the condenser outlet {T_limit:.2f~P}")
    if not 0 < eff <= 1:
        raise ValueError(f"chiller efficiency must be in (0, 1], got {eff}")

    cp = as_cp_function(cp_coolant)
    dh = integrate_cp(cp, Tc, Th)
    m = (abs(Q) / dh).to("g")

    cold = Stream((Component(m, absolute_h(cp, Tc, ref), species, Phase.LIQUID),), Tc)
    warm = Stream((Component(m, absolute_h(cp, Th, ref), species, Phase.LIQUID),), Th)

    sign = -1.0 if Q.magnitude < 0 else 1.0
    Q_chiller = (sign * m * dh / eff).to("kJ")

    relative_energy_check(warm.components[0].H - cold.components[0].H,
                          abs(Q_chiller) * eff, rtol=5e-4)

    log.info(f"coolant={m:.4g~P} Q_chiller={Q_chiller:.4g~P}",
             extra=op_extra("chiller", "duty"))
    return ChillerResult(cold, warm, Q_chiller)
