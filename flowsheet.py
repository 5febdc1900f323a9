# flowsheet.py
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from loader import DEFAULT_CONFIG, ProcessParameters, load_process
from common.units import Q_
from common.logging_utils import op_extra
from common.constants import R, molar_masses, DEFAULT_REFERENCE, ReferenceState
from common.models import Component, Stream, Species, Phase
from common.heat_capacity import absolute_h, cp_water
from common.balances import stream_energy, mass_check, energy_check
from common.results import stream_table, quantity_table, write_results_csvs
from equipment.furnace import furnace
from equipment.mixer import merge_streams
from equipment.condenser import condenser
from equipment.carbon_filter import carbon_filter
from equipment.chiller import chiller

log = logging.getLogger(__name__)


def feed_inventory(p: ProcessParameters) -> Dict[str, Q_]:
    """Masses of each material and of the mercury it carries, per batch."""
    m_glass = (p.m_feed * p.x_glass).to("g")
    m_powder = (p.m_feed * p.x_powder).to("g")
    m_Al = (p.m_feed * p.x_Al).to("g")
    inv = {
        "glass": m_glass,
        "powder": m_powder,
        "Al": m_Al,
        "Hg_glass": m_glass * p.x_Hg_glass,
        "Hg_powder": m_powder * p.x_Hg_powder,
        "Hg_Al": m_Al * p.x_Hg_Al,
    }
    inv["Hg_total"] = inv["Hg_glass"] + inv["Hg_powder"] + inv["Hg_Al"]
    return inv


def nitrogen_per_cycle(p: ProcessParameters) -> Q_:
    """Sweep gas mass over one powder cycle, ideal gas at furnace conditions."""
    M = molar_masses["N2"]
    return (M * p.P_system * p.V_N2 / (R * p.Tf_powder) * p.tcyc_powder).to("g")


def run_recovery_case(
    config_path: str | Path = DEFAULT_CONFIG,
    *,
    write_csv: bool = True,
    outdir: str | Path = "results",
    run_id: str | None = None,
    overrides: Dict[str, Any] | None = None,
    ref: ReferenceState = DEFAULT_REFERENCE,
) -> Dict[str, Any]:
    """
    One batch through the fixed recovery topology.

    Returns a dict with:
      - 'streams'     : {ID: Stream}
      - 'duties'      : {name: Q_} furnace, condenser and chiller energies per batch
      - 'inventory'   : feed material and mercury masses
      - 'tables'      : {name: DataFrame} stream, equipment, parameter and result tables
      - 'csv_paths'   : {name: path} or None
    """
    p = load_process(config_path)
    if overrides:
        p = p.with_overrides(**overrides)

    inv = feed_inventory(p)
    m_N2 = nitrogen_per_cycle(p)
    T0, h0 = ref.T0, ref.h0

    # --- feed and sieve ---
    s1 = Stream((Component(inv["Hg_total"], h0, Species.HG, Phase.SOLID),
                 Component(inv["powder"], h0, Species.POWDER, Phase.SOLID),
                 Component(inv["glass"], h0, Species.GLASS, Phase.SOLID),
                 Component(inv["Al"], h0, Species.AL, Phase.SOLID)), T0)
    s2 = s1.relabel("2")
    # mercury bound to the aluminium follows the glass fraction
    s3 = Stream((Component(inv["Hg_glass"] + inv["Hg_Al"], h0, Species.HG, Phase.SOLID),
                 Component(inv["glass"], h0, Species.GLASS, Phase.SOLID),
                 Component(inv["Al"], h0, Species.AL, Phase.SOLID)), T0)
    s4 = Stream((Component(inv["Hg_powder"], h0, Species.HG, Phase.SOLID),
                 Component(inv["powder"], h0, Species.POWDER, Phase.SOLID)), T0)
    mass_check([s3, s4], [s2])

    # same sweep gas feeds both furnaces, drawn at the condenser outlet temperature
    s16 = Stream((Component(m_N2, absolute_h(Species.N2.cp, p.T_out, ref), Species.N2, Phase.GAS),), p.T_out)
    s17 = s16.relabel("17")

    log.info("furnaces", extra=op_extra("flowsheet", "furnace"))
    s5, s19, Qf_powder = furnace(s4, s17, p.Tf_powder, p.eta_powder_furnace, p.r_F_powder, ref=ref)
    s6, s18, Qf_glass = furnace(s3, s16, p.Tf_glass, p.eta_glass_furnace, p.r_F_glass, ref=ref)

    s7 = merge_streams(s5, s6, ref=ref)
    s8, s21, Qc = condenser(s7, p.T_out, p.eta_condenser, p.P_system, ref=ref)
    s9, s_collect = carbon_filter(s8)
    s12, s11, Q_chiller = chiller(Qc, cp_water, p.Tc, p.Th, p.eta_chiller, T_limit=p.T_out, ref=ref)

    # nitrogen recirculation; these depend on the system volume
    s10 = s9.relabel("10")
    s13, s14, s15, s20 = (s10.relabel(i) for i in ("13", "14", "15", "20"))

    streams = {
        "1": s1, "2": s2, "3": s3, "4": s4, "5": s5, "6": s6, "7": s7, "8": s8,
        "9": s9, "10": s10, "11": s11, "12": s12, "13": s13, "14": s14, "15": s15,
        "16": s16, "17": s17, "18": s18, "19": s19, "20": s20, "21": s21,
        "CCollect": s_collect,
    }
    streams = {k: s.relabel(k) for k, s in streams.items()}

    # --- plant-wide checks ---
    S = streams
    mass_check([S["2"]], [S["18"], S["19"], S["21"], S["CCollect"]])
    # chiller power is left out: it is the condenser duty seen from the coolant side
    added = Qf_glass * p.eta_glass_furnace + Qf_powder * p.eta_powder_furnace + Qc * p.eta_condenser
    energy_check([S["2"], S["14"]],
                 [S["18"], S["19"], S["21"], S["CCollect"], S["20"]],
                 added)

    duties = {"Qf_powder": Qf_powder, "Qf_glass": Qf_glass,
              "Qcondense": Qc, "Qchiller": Q_chiller}
    tables = _summary_tables(p, inv, m_N2, streams, duties, ref)

    log.info(f"Hg recovered: condenser={S['21'].components[0].m:.4g~P}, "
             f"carbon={S['CCollect'].components[0].m:.4g~P}",
             extra=op_extra("flowsheet", "done"))

    csv_paths = None
    if write_csv:
        run_id = run_id or datetime.now().strftime("%Y%m%d-%H%M%S")
        csv_paths = write_results_csvs(tables, outdir, run_id)

    return {
        "params": p,
        "streams": streams,
        "duties": duties,
        "inventory": inv,
        "m_N2": m_N2,
        "tables": tables,
        "csv_paths": csv_paths,
    }


def _summary_tables(p: ProcessParameters, inv, m_N2, streams, duties, ref) -> Dict[str, pd.DataFrame]:
    cycle = {"Qf_powder": p.tcyc_powder, "Qf_glass": p.tcyc_glass,
             "Qcondense": p.tcyc_powder, "Qchiller": p.tcyc_powder}
    eff = {"Qf_powder": p.eta_powder_furnace, "Qf_glass": p.eta_glass_furnace,
           "Qcondense": p.eta_condenser, "Qchiller": p.eta_chiller}
    equipment = pd.DataFrame(
        [
            {
                "variables": k,
                "energy (kJ)": Q.to("kJ").magnitude,
                "power (W)": (Q / cycle[k]).to("W").magnitude,
                "efficiency": eff[k],
                "cycle_time (hr)": cycle[k].to("hour").magnitude,
            }
            for k, Q in duties.items()
        ]
    )

    parameters = quantity_table(
        [
            ("Feed/batch", p.m_feed), ("T₀", ref.T0), ("X Al in feed", p.x_Al),
            ("X powder in feed", p.x_powder), ("X Hg in Al", p.x_Hg_Al),
            ("X Hg in powder", p.x_Hg_powder), ("X Hg in glass", p.x_Hg_glass),
            ("η condenser", p.eta_condenser), ("η powder furnace", p.eta_powder_furnace),
            ("η glass furnace", p.eta_glass_furnace), ("η chiller", p.eta_chiller),
            ("Tout", p.T_out), ("Tf glass", p.Tf_glass), ("Tf powder", p.Tf_powder),
            ("Tc chiller", p.Tc), ("Th chiller", p.Th), ("V̇ nitrogen", p.V_N2),
            ("Cycle time", p.tcyc_powder),
        ],
        "parameter", "value",
    )

    # heating times at the installed furnace power
    g_heat = (stream_energy(streams["18"]) / p.pmax_glass).to("minute")
    p_heat = (stream_energy(streams["19"]) / p.pmax_powder).to("minute")
    carbon_use = (streams["CCollect"].components[0].m / p.carbon_capacity).to("mg")
    results = quantity_table(
        [
            ("Mass Hg", inv["Hg_total"]), ("Mass glass", inv["glass"].to("kg")),
            ("Mass powder", inv["powder"].to("kg")), ("Mass Al", inv["Al"].to("kg")),
            ("Mass N₂", m_N2), ("Activated carbon use", carbon_use),
            ("Glass heating time", g_heat), ("Powder heating time", p_heat),
        ],
        "variable", "values",
    )

    return {
        "streams": stream_table(list(streams.values())),
        "equipment_energy": equipment,
        "system_parameters": parameters,
        "system_results": results,
    }
