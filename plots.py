import os
import sys
import pandas as pd
import matplotlib.pyplot as plt

def main(streams_csv, equipment_csv=None):
    df = pd.read_csv(streams_csv)

    outdir = os.path.join(os.path.dirname(streams_csv), "fig")
    os.makedirs(outdir, exist_ok=True)

    def save(fig, name):
        fig.tight_layout()
        fig.savefig(os.path.join(outdir, name), dpi=200)
        plt.close(fig)

    # 1) mercury by stream
    hg = df[df["Species"] == "Hg"]
    fig = plt.figure()
    plt.bar(hg["Stream"].astype(str), hg["Mass (g)"])
    plt.xlabel("Stream"); plt.ylabel("Hg mass [g]"); plt.yscale("log")
    save(fig, "01_hg_by_stream.png")

    # 2) stream enthalpy
    H = df.groupby("Stream", sort=False)["Enthalpy (J)"].sum()
    fig = plt.figure()
    plt.bar(H.index.astype(str), H.values / 1000.0)
    plt.xlabel("Stream"); plt.ylabel("Enthalpy [kJ]")
    save(fig, "02_stream_enthalpy.png")

    # 3) equipment energy
    if equipment_csv:
        eq = pd.read_csv(equipment_csv)
        fig = plt.figure()
        plt.bar(eq["variables"], eq["energy (kJ)"])
        plt.ylabel("Energy per batch [kJ]")
        save(fig, "03_equipment_energy.png")

    return outdir

if __name__ == "__main__":
    main(*sys.argv[1:3])
