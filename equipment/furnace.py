from __future__ import annotations

import logging

from common.units import Q_
from common.constants import dh_vap_Hg, DEFAULT_REFERENCE, ReferenceState
from common.models import Component, Stream, Species, Phase, SOLIDS, expect_shape
from common.heat_capacity import absolute_h, integrate_cp
from common.balances import stream_energy, energy_check
from common.results import FurnaceResult
from common.logging_utils import op_extra, trace_calls

log = logging.getLogger(__name__)


@trace_calls(values=True)
def furnace(feed: Stream, carrier: Stream, Tf: Q_, eff: float, r_F: float,
            *, ref: ReferenceState = DEFAULT_REFERENCE) -> FurnaceResult:
    """
    Heat a mercury-bearing solid to Tf under a carrier gas sweep.

    feed    : [Hg, solid, (solid...)]; the solids are powder, glass or Al
    carrier : [N2] at its own inlet temperature
    eff     : thermal efficiency, 0 < eff <= 1
    r_F     : fraction of the mercury vaporized, 0 <= r_F <= 1

    Returns (vapour [Hg, N2], solids [Hg, solid...], Qf). Nitrogen that leaves
    with the solids when the furnace is opened is neglected.
    """
    expect_shape(feed, Species.HG, trailing=SOLIDS, min_trailing=1, where="furnace feed")
    expect_shape(carrier, Species.N2, where="furnace carrier")
    if not 0 < eff <= 1:
        raise ValueError(f"furnace efficiency must be in (0, 1], got {eff}")
    if not 0 <= r_F <= 1:
        raise ValueError(f"furnace Hg removal fraction must be in [0, 1], got {r_F}")

    Tf = Tf.to("K")
    hg = feed[Species.HG]
    gas = carrier[Species.N2]
    h_hg = absolute_h(hg.cp, Tf, ref)

    hg_vap = Component(hg.m * r_F, dh_vap_Hg + h_hg, Species.HG, Phase.GAS)
    n2_out = Component(gas.m, gas.h + integrate_cp(gas.cp, carrier.T, Tf), Species.N2, Phase.GAS)
    # really a solid solution, carried with the liquid heat capacity
    hg_left = Component(hg.m * (1 - r_F), h_hg, Species.HG, Phase.LIQUID)
    solids = [Component(c.m, absolute_h(c.cp, Tf, ref), c.species, Phase.SOLID)
              for c in feed.components[1:]]

    vapour = Stream((hg_vap, n2_out), Tf)
    residue = Stream((hg_left, *solids), Tf)

    Qf = ((stream_energy([vapour, residue]) - stream_energy([feed, carrier])) / eff).to("kJ")
    energy_check([feed, carrier], [vapour, residue], Qf * eff)

    log.info(f"Tf={Tf:.2f~P} Hg vaporized={hg_vap.m:.4g~P} Qf={Qf:.4g~P}",
             extra=op_extra("furnace", "duty"))
    return FurnaceResult(vapour, residue, Qf)
