from __future__ import annotations
from dataclasses import dataclass, replace, fields
from pathlib import Path
from typing import Any, Dict
import yaml
from common.units import Q_

DEFAULT_CONFIG = Path(__file__).resolve().parent / "config" / "process.yaml"


def _q(node: Any) -> Q_:
    if isinstance(node, dict) and "value" in node and "unit" in node:
        unit = str(node["unit"])
        if unit in ("dimensionless", "1"):
            unit = ""
        return Q_(node["value"], unit)
    raise ValueError(f"Invalid quantity format: {node!r}")


def _get(d: Dict[str, Any] | None, key: str, default=None):
    return d.get(key, default) if isinstance(d, dict) else default


def _req(doc: Dict[str, Any], section: str, key: str) -> Q_:
    sec = _get(doc, section)
    if not isinstance(sec, dict):
        raise KeyError(f"'{section}' is required")
    if key not in sec:
        raise KeyError(f"{section}: '{key}' is required")
    return _q(sec[key])


def _frac(q: Q_) -> float:
    return float(q.to("").magnitude)


@dataclass(frozen=True)
class ProcessParameters:
    # feed
    m_feed: Q_
    x_Al: float
    x_powder: float
    x_Hg_Al: float
    x_Hg_powder: float
    x_Hg_glass: float
    # efficiencies
    eta_condenser: float
    eta_powder_furnace: float
    eta_glass_furnace: float
    eta_chiller: float
    # temperatures (K)
    Tf_powder: Q_
    Tf_glass: Q_
    T_out: Q_
    Tc: Q_
    Th: Q_
    # furnace / condenser pressure
    P_system: Q_
    r_F_powder: float
    r_F_glass: float
    pmax_powder: Q_
    pmax_glass: Q_
    tcyc_powder: Q_
    tcyc_glass: Q_
    V_N2: Q_
    carbon_capacity: float

    @property
    def x_glass(self) -> float:
        return 1.0 - self.x_Al - self.x_powder

    def with_overrides(self, **kw) -> "ProcessParameters":
        known = {f.name for f in fields(self)}
        bad = set(kw) - known
        if bad:
            raise KeyError(f"unknown process parameter(s): {sorted(bad)}")
        return replace(self, **kw)


def load_process(path: str | Path = DEFAULT_CONFIG) -> ProcessParameters:
    with open(path, "r", encoding="utf-8") as fh:
        doc = yaml.safe_load(fh)

    def T(key):
        return _req(doc, "temperatures", key).to("K")

    params = ProcessParameters(
        m_feed=_req(doc, "feed", "batch_mass").to("kg"),
        x_Al=_frac(_req(doc, "feed", "x_Al")),
        x_powder=_frac(_req(doc, "feed", "x_powder")),
        x_Hg_Al=_frac(_req(doc, "feed", "Hg_in_Al")),
        x_Hg_powder=_frac(_req(doc, "feed", "Hg_in_powder")),
        x_Hg_glass=_frac(_req(doc, "feed", "Hg_in_glass")),
        eta_condenser=_frac(_req(doc, "efficiency", "condenser")),
        eta_powder_furnace=_frac(_req(doc, "efficiency", "powder_furnace")),
        eta_glass_furnace=_frac(_req(doc, "efficiency", "glass_furnace")),
        eta_chiller=_frac(_req(doc, "efficiency", "chiller")),
        Tf_powder=T("powder_furnace"),
        Tf_glass=T("glass_furnace"),
        T_out=T("condenser_out"),
        Tc=T("chiller_cold"),
        Th=T("chiller_hot"),
        P_system=_req(doc, "pressure", "system").to("kPa"),
        r_F_powder=_frac(_req(doc, "furnace", "Hg_removal_powder")),
        r_F_glass=_frac(_req(doc, "furnace", "Hg_removal_glass")),
        pmax_powder=_req(doc, "furnace", "max_power_powder").to("kW"),
        pmax_glass=_req(doc, "furnace", "max_power_glass").to("kW"),
        tcyc_powder=_req(doc, "cycle_time", "powder").to("hour"),
        tcyc_glass=_req(doc, "cycle_time", "glass").to("hour"),
        V_N2=_req(doc, "nitrogen", "volumetric_flow").to("L/min"),
        carbon_capacity=_frac(_req(doc, "carbon", "Hg_capacity")),
    )
    if params.x_glass < 0:
        raise ValueError("feed: x_Al + x_powder exceeds 1")
    return params
