from typing import Any, Dict

import msgspec

from .log_level import LogLevel


class Entry(msgspec.Struct, kw_only=True):
    """
    Base for every structured log entry.

    Subclasses add their own fields and fix `level`. Every field, together
    with the call-site context, is available to the output template.
    """

    message: str | None = None
    level: LogLevel

    def to_template(
        self,
        template: str,
        context: Dict[str, Any] | None = None,
    ) -> str:
        values = msgspec.structs.asdict(self)
        values["level"] = self.level.value

        if context:
            values.update(context)

        return template.format(**values)
