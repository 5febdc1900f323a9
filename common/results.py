from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Iterator, List, Sequence

import pandas as pd

from common.units import Q_
from common.models import Stream


@dataclass(frozen=True)
class UnitResult:
    def __iter__(self) -> Iterator:
        # unpacks in field order, e.g. vapour, liquid, Q = condenser(...)
        return (getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class FurnaceResult(UnitResult):
    vapour: Stream
    solids: Stream
    Q: Q_


@dataclass(frozen=True)
class CondenserResult(UnitResult):
    vapour: Stream
    liquid: Stream
    Q: Q_


@dataclass(frozen=True)
class CarbonFilterResult(UnitResult):
    gas: Stream
    collected: Stream


@dataclass(frozen=True)
class ChillerResult(UnitResult):
    cold: Stream
    warm: Stream
    Q: Q_


STREAM_COLUMNS = ["Stream", "Species", "Mass (g)", "Temp (K)",
                  "Enthalpy (J/g)", "Enthalpy (J)", "Phase"]


def stream_rows(stream: Stream) -> List[Dict[str, object]]:
    return [
        {
            "Stream": stream.ID,
            "Species": c.species.value,
            "Mass (g)": c.m.to("g").magnitude,
            "Temp (K)": stream.T.to("K").magnitude,
            "Enthalpy (J/g)": c.h.to("J/g").magnitude,
            "Enthalpy (J)": c.H.to("J").magnitude,
            "Phase": c.phase.value,
        }
        for c in stream
    ]


def stream_table(streams: Sequence[Stream]) -> pd.DataFrame:
    rows = [r for s in streams for r in stream_rows(s)]
    return pd.DataFrame(rows, columns=STREAM_COLUMNS)


def _cell(v):
    # quantities go out as "value unit" so the CSV stays self-describing
    if isinstance(v, Q_):
        return f"{v.magnitude:.6g} {v.units:~P}"
    return v


def quantity_table(pairs, key: str, value: str) -> pd.DataFrame:
    return pd.DataFrame([{key: k, value: _cell(v)} for k, v in pairs], columns=[key, value])


def write_results_csvs(tables: Dict[str, pd.DataFrame], outdir: str | Path, run_id: str) -> Dict[str, str]:
    """Write each table to <outdir>/<run_id>_<name>.csv; returns name -> path."""
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    paths = {}
    for name, df in tables.items():
        p = outdir / f"{run_id}_{name}.csv"
        df.to_csv(p, index=False)
        paths[name] = str(p)
    return paths
