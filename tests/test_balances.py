import pytest
from common.units import Q_
from common.models import Component, Stream
from common.balances import stream_energy, stream_mass, mass_check, energy_check, relative_energy_check
from common.exceptions import MassBalanceError, EnergyBalanceError, BalanceError

def _stream(*pairs, T=300):
    return Stream([Component(Q_(m, "g"), Q_(h, "J/g"), sp, "g") for sp, m, h in pairs], Q_(T, "K"))

def test_sums_are_definitional():
    s = _stream(("Hg", 2.0, 10.0), ("N2", 3.0, -4.0))
    assert stream_energy(s) == sum((c.H for c in s), Q_(0, "J"))
    assert stream_energy(s).to("J").magnitude == pytest.approx(8.0)
    assert stream_mass(s).to("g").magnitude == pytest.approx(5.0)
    assert stream_energy([s, s]).magnitude == pytest.approx(16.0)
    assert stream_mass([]).magnitude == 0

def test_mass_check_tolerance():
    a = _stream(("Hg", 100.0, 0))
    mass_check([a], [_stream(("Hg", 99.5, 0))])
    with pytest.raises(MassBalanceError) as ei:
        mass_check([a], [_stream(("Hg", 95.0, 0))])
    assert ei.value.delta.to("g").magnitude == pytest.approx(5.0)
    assert "Δ" in str(ei.value)

def test_energy_check_with_duty():
    a = _stream(("N2", 10.0, 1.0))
    b = _stream(("N2", 10.0, 3.0))
    with pytest.raises(EnergyBalanceError):
        energy_check([a], [b])
    energy_check([a], [b], Q_(0.02, "kJ"))
    energy_check([a], [b], Q_(20.005, "J"))
    with pytest.raises(BalanceError):
        energy_check([a], [b], Q_(20.02, "J"))

def test_relative_check():
    relative_energy_check(Q_(1000, "J"), Q_(1.0004, "kJ"), rtol=5e-4)
    with pytest.raises(EnergyBalanceError):
        relative_energy_check(Q_(1000, "J"), Q_(1.001, "kJ"), rtol=5e-4)
