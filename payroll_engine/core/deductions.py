"""Statutory contributions and withholding tax.

The withholding tax is a flat three-tier approximation: above the middle
ceiling the whole gross income is taxed at the top rate, not only the excess.
Bracket boundaries belong to the lower tier.
"""

from __future__ import annotations

from decimal import Decimal

from payroll_engine.core.rules import PayrollRules, default_rules
from payroll_engine.core.schema import ZERO, DeductionSet


def withholding_tax(gross_income: Decimal, rules: PayrollRules | None = None) -> Decimal:
    rules = rules or default_rules()
    if gross_income <= rules.tax_exempt_ceiling:
        return ZERO
    if gross_income <= rules.tax_middle_ceiling:
        return (gross_income - rules.tax_exempt_ceiling) * rules.tax_middle_rate
    return gross_income * rules.tax_top_rate


def compute_deductions(gross_income: Decimal, rules: PayrollRules | None = None) -> DeductionSet:
    rules = rules or default_rules()
    base = max(ZERO, Decimal(gross_income))
    return DeductionSet(
        sss=base * rules.sss_rate,
        philhealth=base * rules.philhealth_rate,
        pagibig=base * rules.pagibig_rate,
        withholding_tax=withholding_tax(base, rules),
    )
