from common.models import Stream, Species, expect_shape
from common.balances import energy_check
from common.results import CarbonFilterResult
from common.logging_utils import trace_calls


@trace_calls(values=True)
def carbon_filter(stream: Stream) -> CarbonFilterResult:
    """Activated carbon bed with full mercury capture: [Hg, N2] -> ([N2], [Hg])."""
    expect_shape(stream, Species.HG, Species.N2, where="carbon filter inlet")
    gas = Stream((stream[Species.N2],), stream.T)
    collected = Stream((stream[Species.HG],), stream.T)
    energy_check([stream], [gas, collected])
    return CarbonFilterResult(gas, collected)
