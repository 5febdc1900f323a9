import pytest
from common.units import Q_
from common.constants import dh_vap_Hg
from common.models import Species
from common.heat_capacity import condenser_recovery, absolute_h, cp_hg, vapour_pressure_hg
from common.balances import energy_check, stream_energy, stream_mass
from common.exceptions import RecoveryRangeError, StreamShapeError
from equipment.furnace import furnace
from equipment.condenser import condenser
from equipment.carbon_filter import carbon_filter

T_OUT = Q_(283.15, "K")
P = Q_(10, "kPa")

@pytest.fixture
def hot_vapour(powder_feed, sweep_gas):
    return furnace(powder_feed, sweep_gas, Q_(873.15, "K"), 0.5, 0.9).vapour

def test_condenser_split_and_duty(hot_vapour):
    vap, liq, Q = condenser(hot_vapour, T_OUT, 1.0, P)
    r = condenser_recovery(T_OUT, P)
    assert liq[Species.HG].m.to("g").magnitude == pytest.approx(9.0 * r)
    assert vap[Species.HG].m.to("g").magnitude == pytest.approx(9.0 * (1 - r))
    assert vap[Species.N2].m.to("g").magnitude == pytest.approx(50.0)
    assert liq.T == T_OUT and vap.T == T_OUT
    assert liq[Species.HG].h.to("J/g").magnitude == pytest.approx(
        (absolute_h(cp_hg, T_OUT) + dh_vap_Hg).to("J/g").magnitude)
    assert Q.magnitude < 0
    energy_check([hot_vapour], [vap, liq], Q)
    assert stream_mass([vap, liq]).magnitude == pytest.approx(stream_mass(hot_vapour).magnitude)

def test_condenser_efficiency(hot_vapour):
    q1 = condenser(hot_vapour, T_OUT, 1.0, P).Q
    q2 = condenser(hot_vapour, T_OUT, 0.8, P).Q
    assert q2.magnitude == pytest.approx(q1.magnitude / 0.8)

def test_condenser_rejects_unphysical_recovery(hot_vapour):
    with pytest.raises(RecoveryRangeError):
        condenser(hot_vapour, T_OUT, 1.0, Q_(0.02, "kPa"))
    with pytest.raises(RecoveryRangeError):
        condenser(hot_vapour, T_OUT, 1.0, Q_(0.01, "kPa"))

def test_condenser_shape(powder_feed):
    with pytest.raises(StreamShapeError):
        condenser(powder_feed, T_OUT, 1.0, P)

def test_carbon_filter_partitions(hot_vapour):
    vap, _, _ = condenser(hot_vapour, T_OUT, 1.0, P)
    gas, collected = carbon_filter(vap)
    assert gas.species == (Species.N2,)
    assert collected.species == (Species.HG,)
    assert collected[Species.HG] == vap[Species.HG]
    assert gas.T == vap.T == collected.T
    assert stream_energy([gas, collected]).magnitude == pytest.approx(stream_energy(vap).magnitude)

def test_carbon_filter_shape(sweep_gas):
    with pytest.raises(StreamShapeError):
        carbon_filter(sweep_gas)

def test_condenser_pressure_at_vapour_pressure(hot_vapour):
    Pv = vapour_pressure_hg(T_OUT)
    with pytest.raises(RecoveryRangeError):
        condenser_recovery(T_OUT, Pv)
    with pytest.raises(RecoveryRangeError):
        condenser(hot_vapour, T_OUT, 1.0, Pv.to("Pa"))
