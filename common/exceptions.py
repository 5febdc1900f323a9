from common.units import Q_, DimensionalityError


class BalanceError(ValueError):
    """A mass or energy balance did not close; `delta` is the residual."""
    kind = "Balance"

    def __init__(self, delta: Q_, detail: str = ""):
        self.delta = delta
        msg = f"{self.kind} balance does not close; Δ = {delta:~P}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class MassBalanceError(BalanceError):
    kind = "Mass"


class EnergyBalanceError(BalanceError):
    kind = "Energy"


class UnknownSpeciesError(ValueError):
    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Unknown species {tag!r}; no heat capacity is defined for it")


class StreamShapeError(ValueError):
    pass


class RecoveryRangeError(ValueError):
    pass


class ConvergenceError(RuntimeError):
    pass


__all__ = [
    "BalanceError", "MassBalanceError", "EnergyBalanceError",
    "UnknownSpeciesError", "StreamShapeError", "RecoveryRangeError",
    "ConvergenceError", "DimensionalityError",
]
