from dataclasses import dataclass
from common.units import Q_

R = Q_(8.314, "J/mol/K")

# Reference state for every specific enthalpy in the model
T_ref = Q_(300.0, "K")
h_ref = Q_(0.0, "J/g")

molar_masses = {
    "Hg": Q_(200.59, "g/mol"),
    "N2": Q_(28.014, "g/mol"),
    "powder": Q_(225.809, "g/mol"),   # Y2O3 taken for the whole phosphor powder
    "glass": Q_(60.08, "g/mol"),      # SiO2
    "Al": Q_(26.98, "g/mol"),
}

# Heat of vaporization of mercury (CRC, 1 atm)
dh_vap_Hg = Q_(294.68, "J/g")

# Mercury saturation temperature at 10 kPa (FactSage); changes with system pressure
T_sat_Hg = Q_(521.0, "K")

cp_N2 = (Q_(30.0, "J/mol/K") / molar_masses["N2"]).to("J/g/K")
cp_Hg_gas = (Q_(20786.0, "J/kmol/K") / molar_masses["Hg"]).to("J/g/K")

# Liquid mercury, H.G. Lee, Materials Thermodynamics: (a - b*T)
cp_Hg_liq_coeffs = (Q_(30.39, "J/mol/K"), Q_(11.47e-3, "J/mol/K^2"))

cp_Al_coeffs = (Q_(20.67, "J/mol/K"), Q_(12.39e-3, "J/mol/K^2"))

cp_glass_coeffs = (Q_(46.95, "J/mol/K"), Q_(34.31e-3, "J/mol/K^2"), Q_(11.3e-5, "J*K/mol"))

# Y2O3, SGTE thermodynamic properties of compounds (2001)
cp_powder_table = (
    [300, 390, 480, 570, 660, 750, 840, 930, 1020, 1110, 1200],                      # K
    [101.85, 110, 116.9, 119.2, 121.5, 123.8, 124.95, 126.1, 127.25, 128.4, 128.4],  # J/mol/K
)

# Liquid water, CRC handbook, 0..100 degC
cp_water_table = (
    [273.15 + t for t in range(0, 101, 10)],                                                   # K
    [4.2176, 4.1921, 4.1818, 4.1784, 4.1785, 4.1806, 4.1843, 4.1895, 4.1963, 4.2050, 4.2159],  # J/g/K
)

# Kirk-Othmer: ln(Pv/kPa) = A/T + B, valid 0-150 degC
vp_Hg_coeffs = (-3212.5, 7.150)
vp_Hg_valid = (Q_(273.15, "K"), Q_(423.15, "K"))


@dataclass(frozen=True)
class ReferenceState:
    """Zero of the enthalpy scale: every specific enthalpy is h0 at T0."""
    T0: Q_
    h0: Q_


DEFAULT_REFERENCE = ReferenceState(T0=T_ref, h0=h_ref)
