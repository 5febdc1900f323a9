import logging
import pytest
from common.units import Q_
from common.constants import dh_vap_Hg, cp_N2
from common.models import Component, Stream, Species
from common.heat_capacity import absolute_h, cp_hg
from common.balances import stream_energy, energy_check
from common.exceptions import StreamShapeError
from equipment.furnace import furnace

TF = Q_(873.15, "K")

def test_powder_furnace_scenario(powder_feed, sweep_gas):
    vap, solids, Qf = furnace(powder_feed, sweep_gas, TF, 0.5, 0.9)
    assert vap[Species.HG].m.to("g").magnitude == pytest.approx(9.0)
    assert solids[Species.HG].m.to("g").magnitude == pytest.approx(1.0)
    assert vap.species == (Species.HG, Species.N2)
    assert solids.species == (Species.HG, Species.POWDER)
    assert vap.T == TF and solids.T == TF
    assert Qf.check("[energy]") and Qf.magnitude > 0
    # reversing the efficiency out closes the balance
    energy_check([powder_feed, sweep_gas], [vap, solids], Qf * 0.5)
    dH = stream_energy([vap, solids]) - stream_energy([powder_feed, sweep_gas])
    assert (Qf * 0.5).to("J").magnitude == pytest.approx(dH.to("J").magnitude, abs=0.01)

def test_exit_enthalpies(powder_feed, sweep_gas):
    vap, solids, _ = furnace(powder_feed, sweep_gas, TF, 0.5, 0.9)
    h_liq = absolute_h(cp_hg, TF)
    assert vap[Species.HG].h.to("J/g").magnitude == pytest.approx((dh_vap_Hg + h_liq).to("J/g").magnitude)
    assert solids[Species.HG].h.to("J/g").magnitude == pytest.approx(h_liq.to("J/g").magnitude)
    n2_h = (cp_N2 * (TF - Q_(300, "K"))).to("J/g").magnitude
    assert vap[Species.N2].h.to("J/g").magnitude == pytest.approx(n2_h)

def test_removal_limits(powder_feed, sweep_gas):
    vap, solids, _ = furnace(powder_feed, sweep_gas, TF, 0.5, 0.0)
    assert vap[Species.HG].m.magnitude == 0
    vap, solids, _ = furnace(powder_feed, sweep_gas, TF, 0.5, 1.0)
    assert solids[Species.HG].m.magnitude == 0

def test_efficiency_scales_duty(powder_feed, sweep_gas):
    q_half = furnace(powder_feed, sweep_gas, TF, 0.5, 0.9).Q
    q_full = furnace(powder_feed, sweep_gas, TF, 1.0, 0.9).Q
    assert q_half.magnitude == pytest.approx(2 * q_full.magnitude)

def test_three_component_glass_feed(sweep_gas):
    feed = Stream([Component(Q_(0.5, "g"), 0, "Hg", "s"),
                   Component(Q_(800, "g"), 0, "glass", "s"),
                   Component(Q_(40, "g"), 0, "Al", "s")], Q_(300, "K"))
    vap, solids, Qf = furnace(feed, sweep_gas, Q_(673.15, "K"), 0.5, 0.83)
    assert solids.species == (Species.HG, Species.GLASS, Species.AL)
    energy_check([feed, sweep_gas], [vap, solids], Qf * 0.5)

def test_rejects_bad_inputs(powder_feed, sweep_gas):
    with pytest.raises(StreamShapeError):
        furnace(sweep_gas, powder_feed, TF, 0.5, 0.9)
    with pytest.raises(ValueError):
        furnace(powder_feed, sweep_gas, TF, 0.0, 0.9)
    with pytest.raises(ValueError):
        furnace(powder_feed, sweep_gas, TF, 0.5, 1.2)

def test_duty_is_logged(powder_feed, sweep_gas, caplog):
    caplog.set_level(logging.DEBUG, logger="equipment.furnace.furnace")
    Qf = furnace(powder_feed, sweep_gas, TF, 0.5, 0.9).Q
    duty = [r for r in caplog.records if getattr(r, "step", None) == "duty"]
    assert len(duty) == 1
    assert duty[0].unit == "furnace"
    assert duty[0].getMessage() == f"Q={Qf.to('kJ'):.6g~P}"
