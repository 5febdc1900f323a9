# main.py
import argparse
import logging

from common.logging_utils import setup_logging
from flowsheet import run_recovery_case
from loader import DEFAULT_CONFIG


def run_default_case(args) -> dict:
    return run_recovery_case(
        args.config,
        write_csv=not args.no_csv,
        outdir=args.out,
        run_id=args.run_id,
    )


def run_condenser_sensitivity(args) -> None:
    """Condenser outlet temperature sweep; one set of CSVs per case."""
    from common.units import Q_
    for t in (0, 5, 10, 15):
        logging.getLogger(__name__).info(f"Running case with condenser_out={t} degC")
        run_recovery_case(
            args.config,
            overrides={"T_out": Q_(273.15 + t, "K"), "Th": Q_(273.15 + min(t, 9), "K"),
                       "Tc": Q_(273.15 + min(t, 9) - 1, "K")},
            write_csv=not args.no_csv,
            outdir=args.out,
            run_id=f"{args.run_id or 'sweep'}_Tout{t}C",
        )


def main(argv=None) -> None:
    ap = argparse.ArgumentParser(description="Mercury recovery mass and energy balance")
    ap.add_argument("--config", default=str(DEFAULT_CONFIG))
    ap.add_argument("--out", default="results")
    ap.add_argument("--run-id", default=None)
    ap.add_argument("--log", default="INFO")
    ap.add_argument("--no-csv", action="store_true")
    ap.add_argument("--plots", action="store_true")
    ap.add_argument("--sweep", action="store_true")
    args = ap.parse_args(argv)

    setup_logging(args.log)

    if args.sweep:
        run_condenser_sensitivity(args)
        return

    res = run_default_case(args)
    d = res["duties"]
    hg = res["streams"]["21"].components[0].m
    print(f"OK | streams={len(res['streams'])} | Qf_powder={d['Qf_powder']:.4g~P} | "
          f"Qf_glass={d['Qf_glass']:.4g~P} | Qcondense={d['Qcondense']:.4g~P} | "
          f"Hg condensed={hg:.4g~P}")

    if args.plots and res["csv_paths"]:
        from plots import main as plot_main
        plot_main(res["csv_paths"]["streams"], res["csv_paths"]["equipment_energy"])


if __name__ == "__main__":
    main()
