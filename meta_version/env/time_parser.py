import re
from datetime import timedelta


_AMOUNT = re.compile(r"(?P<val>\d+(\.\d+)?)(?P<unit>[smhdw]?)", flags=re.I)
_DURATION = re.compile(r"(?:\d+(?:\.\d+)?[smhdw]?)+", flags=re.I)


class TimeParser:
    def __init__(self) -> None:
        self._units = {
            "s": "seconds",
            "m": "minutes",
            "h": "hours",
            "d": "days",
            "w": "weeks",
        }

    def parse(self, time_amount: str) -> float:
        """
        Parse a duration such as "5s", "1m30s" or "0.5" into seconds.

        A number without a unit is in seconds.

        Raises:
            ValueError: The string is not made up only of amounts.
        """
        time_amount = time_amount.strip()

        if _DURATION.fullmatch(time_amount) is None:
            raise ValueError(f"Invalid time amount: {time_amount!r}")

        amounts: dict[str, float] = {}
        for m in _AMOUNT.finditer(time_amount):
            unit = self._units.get(m.group("unit").lower(), "seconds")
            amounts[unit] = amounts.get(unit, 0.0) + float(m.group("val"))

        return timedelta(**amounts).total_seconds()
