"""
Comparison operators accepted by cmp_rows.
"""

import operator
from enum import Enum
from typing import Callable

from datacheck.exceptions import ConfigurationError


class Comparator(str, Enum):
    """
    Closed set of count comparisons.

    Inherits from str so suite files can use the operator text directly.
    """

    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    @classmethod
    def parse(cls, value: "Comparator | str") -> "Comparator":
        """
        Validate an operator at the API boundary.

        Args:
            value: Comparator member or its operator text

        Returns:
            Comparator member

        Raises:
            ConfigurationError: If the operator is not supported
        """
        if isinstance(value, cls):
            return value

        try:
            return cls(str(value).strip())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"Unsupported comparison operator {value!r}; expected one of: {allowed}"
            ) from None

    @property
    def function(self) -> Callable[[object, object], bool]:
        return _FUNCTIONS[self]

    def evaluate(self, left, right) -> bool:
        return bool(self.function(left, right))


_FUNCTIONS = {
    Comparator.EQ: operator.eq,
    Comparator.NE: operator.ne,
    Comparator.LT: operator.lt,
    Comparator.LE: operator.le,
    Comparator.GT: operator.gt,
    Comparator.GE: operator.ge,
}
