from datetime import date

from docseq.core.modules.numbering.models import NumberingScheme, ResetPeriod

FINANCIAL_YEAR_START_MONTH = 4


def financial_year(on: date) -> str:
    """Financial year label for a date, e.g. 2025-05-10 -> '25-26', 2026-02-01 -> '25-26'."""
    start = on.year if on.month >= FINANCIAL_YEAR_START_MONTH else on.year - 1
    return f"{start % 100:02d}-{(start + 1) % 100:02d}"


def period_key(reset: ResetPeriod, on: date) -> str:
    """Key of the period a sequence restarts in, empty when it never restarts."""
    match reset:
        case ResetPeriod.YEARLY:
            return str(on.year)
        case ResetPeriod.FINANCIAL_YEAR:
            return financial_year(on)
        case _:
            return ""


def counter_scope(scheme: NumberingScheme, scope: str | None, on: date) -> str:
    """Combine the reset period and the caller scope into one counter scope."""
    return "/".join(part for part in (period_key(scheme.reset, on), scope) if part)


def format_number(scheme: NumberingScheme, sequence: int, on: date, scope: str | None = None) -> str:
    return scheme.template.format(
        seq=f"{sequence:0{scheme.padding}d}",
        year=on.year,
        fy=financial_year(on),
        scope=scope or "",
    )
