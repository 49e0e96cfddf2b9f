import re
from datetime import UTC, date, datetime

SCOPE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-/]{0,127}$")


def is_scope(value: str) -> bool:
    return bool(SCOPE_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)


def today() -> date:
    return now().date()
