"""Query kinds understood by cscope's line-oriented interface."""

from enum import Enum


class QueryKind(Enum):
    """Symbolic query kind, mapped to the cscope ``-<n>`` field option."""

    SYMBOL = "symbol"
    DEFINITION = "definition"
    CALLEE = "callee"
    CALLER = "caller"
    TEXT = "text"
    EGREP = "egrep"
    FILE = "file"
    INCLUDE = "include"
    SET = "set"

    @property
    def flag(self) -> str:
        """Command-line option selecting this query in cscope."""
        return _FLAGS[self]

    @property
    def is_regex(self) -> bool:
        """True when the search word is an extended regular expression."""
        return self is QueryKind.EGREP

    @classmethod
    def from_name(cls, name: "str | QueryKind") -> "QueryKind":
        """Resolve a kind from its name (case-insensitive).

        Raises:
            ValueError: If the name is not a known query kind
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown query kind: {name}. Must be one of: {valid}") from None


_FLAGS: dict[QueryKind, str] = {
    QueryKind.SYMBOL: "-0",
    QueryKind.DEFINITION: "-1",
    QueryKind.CALLEE: "-2",
    QueryKind.CALLER: "-3",
    QueryKind.TEXT: "-4",
    QueryKind.EGREP: "-5",
    QueryKind.FILE: "-6",
    QueryKind.INCLUDE: "-7",
    QueryKind.SET: "-8",
}
