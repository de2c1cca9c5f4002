"""ehapto.core.errors

Таксономия ошибок. Всё наследуется от ValueError, как и проверки в
`ehapto.core.validation`, чтобы вызывающий код мог ловить одно исключение.
"""

from __future__ import annotations


class DomainError(ValueError):
    """Input outside the domain of the displacement solve (e.g. w == 0)."""


class InfeasibleDisplacementError(ValueError):
    """Solved fractional displacement lies outside [-1, 1].

    Raised only in strict mode; by default the sample is flagged and the run
    continues.
    """

    def __init__(self, frac_disp: float, time: float | None = None) -> None:
        self.frac_disp = float(frac_disp)
        self.time = time
        where = "" if time is None else f" at t={time}"
        super().__init__(f"fractional displacement {self.frac_disp:.6g} outside [-1, 1]{where}")


class ResidualMismatchError(ValueError):
    """Reconstructed flow does not reproduce the commanded flow."""

    def __init__(self, q_cmd: float, q_act_calc: float, time: float | None = None) -> None:
        self.q_cmd = float(q_cmd)
        self.q_act_calc = float(q_act_calc)
        self.time = time
        where = "" if time is None else f" at t={time}"
        super().__init__(
            f"reconstructed flow {self.q_act_calc:.9g} m^3/s does not match "
            f"commanded {self.q_cmd:.9g} m^3/s{where}"
        )
