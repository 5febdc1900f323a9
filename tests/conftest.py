import logging
import pytest
from common.units import Q_
from common.models import Component, Stream

@pytest.fixture(autouse=True)
def _quiet_logs(caplog):
    caplog.set_level(logging.WARNING)

@pytest.fixture
def powder_feed():
    # 10 g Hg on 100 g powder at the reference temperature
    return Stream([Component(Q_(10, "g"), 0, "Hg", "s"),
                   Component(Q_(100, "g"), 0, "powder", "s")], Q_(300, "K"))

@pytest.fixture
def sweep_gas():
    return Stream([Component(Q_(50, "g"), 0, "N2", "g")], Q_(300, "K"))
