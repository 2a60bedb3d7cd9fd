"""
Five-field cron expressions: minute, hour, day-of-month, month, day-of-week.

Each field is a comma separated list of items. An item is ``*``, a literal,
or a range ``a-b``, optionally followed by a step ``/n``. Months and weekdays
also accept three letter names. Weekday 0 and 7 are both Sunday. When both day
fields are restricted a day matches if either one matches, as in Vixie cron.
"""
from datetime import date, datetime, time, timedelta
from typing import Dict, FrozenSet, Optional

MONTH_NAMES = {
    name: number
    for number, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"],
        start=1,
    )
}
DAY_NAMES = {
    name: number
    for number, name in enumerate(["sun", "mon", "tue", "wed", "thu", "fri", "sat"])
}

ALIASES = {
    "@yearly": "0 0 1 1 *",
    "@annually": "0 0 1 1 *",
    "@monthly": "0 0 1 * *",
    "@weekly": "0 0 * * 0",
    "@daily": "0 0 * * *",
    "@midnight": "0 0 * * *",
    "@hourly": "0 * * * *",
}

# name, lowest, highest, accepted names
FIELDS = (
    ("minute", 0, 59, None),
    ("hour", 0, 23, None),
    ("day of month", 1, 31, None),
    ("month", 1, 12, MONTH_NAMES),
    ("day of week", 0, 7, DAY_NAMES),
)

# Long enough to reach a Feb 29 across a skipped leap year (e.g. 2096 -> 2104)
SEARCH_DAYS = 366 * 9


class CronSyntaxError(ValueError):
    pass


def _parse_value(token: str, field: str, low: int, high: int, names: Optional[Dict[str, int]]) -> int:
    lowered = token.lower()
    if names and lowered in names:
        return names[lowered]
    if not lowered.isdigit():
        raise CronSyntaxError(f"invalid {field} value {token!r}")
    value = int(lowered)
    if not low <= value <= high:
        raise CronSyntaxError(f"{field} value {value} out of range {low}-{high}")
    return value


def _parse_field(text: str, field: str, low: int, high: int, names: Optional[Dict[str, int]]) -> FrozenSet[int]:
    values = set()
    for item in text.split(","):
        if not item:
            raise CronSyntaxError(f"empty item in {field} field {text!r}")
        step = 1
        has_step = "/" in item
        if has_step:
            item, step_text = item.split("/", 1)
            if not step_text.isdigit() or int(step_text) == 0:
                raise CronSyntaxError(f"invalid step {step_text!r} in {field} field")
            step = int(step_text)

        if item == "*":
            start, end = low, high
        elif "-" in item:
            first, last = item.split("-", 1)
            start = _parse_value(first, field, low, high, names)
            end = _parse_value(last, field, low, high, names)
            if start > end:
                raise CronSyntaxError(f"descending range {item!r} in {field} field")
        else:
            start = _parse_value(item, field, low, high, names)
            # "5/15" runs from 5 to the top of the field
            end = high if has_step else start
        values.update(range(start, end + 1, step))
    return frozenset(values)


class CronExpression:
    """A parsed schedule; ``str()`` gives back the source text."""

    def __init__(self, expression: str):
        source = expression.strip()
        text = ALIASES.get(source.lower(), source)
        parts = text.split()
        if len(parts) != len(FIELDS):
            raise CronSyntaxError(f"expected 5 fields, got {len(parts)} in {expression!r}")

        parsed = [
            _parse_field(part, name, low, high, names)
            for part, (name, low, high, names) in zip(parts, FIELDS)
        ]
        self.source = source
        self.minutes, self.hours, self.days_of_month, self.months = parsed[:4]
        self.days_of_week = frozenset(day % 7 for day in parsed[4])
        self._dom_restricted = not parts[2].startswith("*")
        self._dow_restricted = not parts[4].startswith("*")

    @classmethod
    def parse(cls, expression: str) -> "CronExpression":
        return cls(expression)

    def __str__(self) -> str:
        return self.source

    def __repr__(self) -> str:
        return f"CronExpression({self.source!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, CronExpression):
            return NotImplemented
        return (
            self.minutes, self.hours, self.days_of_month, self.months, self.days_of_week,
            self._dom_restricted, self._dow_restricted,
        ) == (
            other.minutes, other.hours, other.days_of_month, other.months, other.days_of_week,
            other._dom_restricted, other._dow_restricted,
        )

    def __hash__(self) -> int:
        return hash((self.minutes, self.hours, self.days_of_month, self.months, self.days_of_week))

    def day_matches(self, day: date) -> bool:
        if day.month not in self.months:
            return False
        in_month = day.day in self.days_of_month
        # isoweekday: Monday=1 .. Sunday=7
        in_week = day.isoweekday() % 7 in self.days_of_week
        if self._dom_restricted and self._dow_restricted:
            return in_month or in_week
        return in_month and in_week

    def matches(self, moment: datetime) -> bool:
        """True if the schedule fires in moment's minute."""
        return (
            moment.minute in self.minutes
            and moment.hour in self.hours
            and self.day_matches(moment.date())
        )

    def next_after(self, moment: datetime) -> datetime:
        """First firing minute strictly after moment (keeps moment's tzinfo)."""
        start = moment.replace(second=0, microsecond=0) + timedelta(minutes=1)
        day = start.date()
        hours = sorted(self.hours)
        minutes = sorted(self.minutes)
        for _ in range(SEARCH_DAYS):
            if self.day_matches(day):
                for hour in hours:
                    for minute in minutes:
                        candidate = datetime.combine(day, time(hour, minute), tzinfo=moment.tzinfo)
                        if candidate >= start:
                            return candidate
            day += timedelta(days=1)
        raise CronSyntaxError(f"{self.source!r} never fires")
