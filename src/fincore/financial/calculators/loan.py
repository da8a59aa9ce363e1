"""Loan amortization engine.

Shared by the projection engine (stepping existing loans forward) and the
serviceability calculator (turning a repayment budget into a loan size):
- Periodic repayment on an amortizing loan
- Maximum principal a repayment budget can service (inverse annuity)
- Remaining balance after N periods and full schedules
- A year-at-a-time loan stepper

Rates are annual percentages (``6.0`` means 6% p.a.).

Pure math, no I/O.
"""

from ...core.exceptions import InvalidInputError
from ..models import AmortizationEntry, Frequency


def periods_per_year(frequency: Frequency | str) -> int:
    return Frequency(frequency).periods_per_year


def to_monthly(amount: float, frequency: Frequency | str) -> float:
    """Convert a per-period repayment into its monthly equivalent."""
    return amount * periods_per_year(frequency) / 12


def _validate(amount_name: str, amount: float, annual_rate_pct: float, term_years: float) -> None:
    if amount < 0:
        raise InvalidInputError(f"{amount_name} cannot be negative, got {amount}")
    if annual_rate_pct < 0:
        raise InvalidInputError(f"Interest rate cannot be negative, got {annual_rate_pct}")
    if term_years <= 0:
        raise InvalidInputError(f"Loan term must be positive, got {term_years}")


def _annuity_payment(principal: float, periodic_rate: float, periods: float) -> float:
    if principal == 0:
        return 0.0
    if periodic_rate == 0:
        return principal / periods
    growth = (1 + periodic_rate) ** periods
    return principal * periodic_rate * growth / (growth - 1)


def calculate_loan_payment(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    frequency: Frequency | str = Frequency.MONTHLY,
) -> float:
    """Calculate the periodic repayment for an amortizing loan.

    Formula: PMT = P * r(1+r)^n / ((1+r)^n - 1), with r the periodic rate
    and n the number of repayments. A zero rate repays principal evenly.

    Args:
        principal: Loan amount
        annual_rate_pct: Annual interest rate as a percentage (e.g., 6.5)
        term_years: Loan term in years
        frequency: Repayment frequency (weekly, fortnightly, monthly)

    Returns:
        Repayment per period
    """
    _validate("Principal", principal, annual_rate_pct, term_years)
    ppy = periods_per_year(frequency)
    return _annuity_payment(principal, annual_rate_pct / 100 / ppy, term_years * ppy)


def calculate_max_borrowing_capacity(
    max_periodic_payment: float,
    annual_rate_pct: float,
    term_years: float,
    frequency: Frequency | str = Frequency.MONTHLY,
) -> float:
    """Largest principal a repayment budget can service.

    Inverse of ``calculate_loan_payment``: P = PMT * ((1+r)^n - 1) / (r(1+r)^n).
    """
    _validate("Repayment", max_periodic_payment, annual_rate_pct, term_years)
    if max_periodic_payment == 0:
        return 0.0

    ppy = periods_per_year(frequency)
    periodic_rate = annual_rate_pct / 100 / ppy
    periods = term_years * ppy

    if periodic_rate == 0:
        return max_periodic_payment * periods

    growth = (1 + periodic_rate) ** periods
    return max_periodic_payment * (growth - 1) / (periodic_rate * growth)


def calculate_remaining_balance(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    periods_elapsed: int,
    frequency: Frequency | str = Frequency.MONTHLY,
) -> float:
    """Balance left after ``periods_elapsed`` scheduled repayments."""
    _validate("Principal", principal, annual_rate_pct, term_years)
    ppy = periods_per_year(frequency)
    total_periods = term_years * ppy

    if periods_elapsed <= 0:
        return principal
    if periods_elapsed >= total_periods:
        return 0.0

    periodic_rate = annual_rate_pct / 100 / ppy
    payment = _annuity_payment(principal, periodic_rate, total_periods)

    if periodic_rate == 0:
        return max(0.0, principal - payment * periods_elapsed)

    growth = (1 + periodic_rate) ** periods_elapsed
    balance = principal * growth - payment * (growth - 1) / periodic_rate
    return max(0.0, balance)


def generate_amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    frequency: Frequency | str = Frequency.MONTHLY,
) -> list[AmortizationEntry]:
    """Period-by-period repayment schedule. The final repayment clears any residual."""
    _validate("Principal", principal, annual_rate_pct, term_years)
    loan = AmortizingLoan(principal, annual_rate_pct, term_years, frequency)
    schedule = []
    period = 0
    while loan.balance > 0 and loan.periods_left > 0:
        period += 1
        payment, interest = loan.step_period()
        schedule.append(
            AmortizationEntry(
                period=period,
                payment=payment,
                principal=payment - interest,
                interest=interest,
                remaining_balance=loan.balance,
            )
        )
    return schedule


class AmortizingLoan:
    """Mutable loan balance stepped forward along its amortization schedule.

    Used inside a single projection run; never shared between calls.
    """

    def __init__(
        self,
        balance: float,
        annual_rate_pct: float,
        term_years: float,
        frequency: Frequency | str = Frequency.MONTHLY,
    ):
        if balance < 0:
            raise InvalidInputError(f"Loan balance cannot be negative, got {balance}")
        if annual_rate_pct < 0:
            raise InvalidInputError(f"Interest rate cannot be negative, got {annual_rate_pct}")
        if term_years < 0:
            raise InvalidInputError(f"Loan term cannot be negative, got {term_years}")

        self.frequency = Frequency(frequency)
        self.balance = float(balance)
        self.periods_left = round(term_years * self.frequency.periods_per_year)
        self.annual_rate = annual_rate_pct / 100
        self._periodic_rate = self.annual_rate / self.frequency.periods_per_year
        self.payment = (
            _annuity_payment(self.balance, self._periodic_rate, self.periods_left) if self.periods_left > 0 else 0.0
        )

    def step_period(self) -> tuple[float, float]:
        """Make one scheduled repayment. Returns (payment, interest)."""
        interest = self.balance * self._periodic_rate
        if self.periods_left <= 1:
            payment = self.balance + interest
        else:
            payment = min(self.payment, self.balance + interest)
        self.balance = max(0.0, self.balance + interest - payment)
        self.periods_left -= 1
        return payment, interest

    def step_year(self) -> tuple[float, float]:
        """Advance one year of repayments. Returns (total repaid, interest paid).

        A loan with a balance but no term left falls due in full.
        """
        if self.balance <= 0:
            return 0.0, 0.0
        if self.periods_left <= 0:
            repaid = self.balance
            self.balance = 0.0
            return repaid, 0.0

        repaid = interest_paid = 0.0
        for _ in range(min(self.frequency.periods_per_year, self.periods_left)):
            payment, interest = self.step_period()
            repaid += payment
            interest_paid += interest
            if self.balance <= 0:
                break
        return repaid, interest_paid
