from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

"""TabularData model.

Ordered mapping of column name -> column values. Every cell is a string, for
every source (CSV, Excel, database). Instances are immutable; deriving a new
column returns a new instance and keeps the original column order.
"""

if TYPE_CHECKING:
    import pandas as pd

__all__ = [
    "TabularData",
]


class TabularData(Mapping[str, tuple[str, ...]]):
    """Immutable column-oriented table.

    Columns keep insertion order. Equal column lengths are expected but not
    enforced here; the validator reports a mismatch before rendering.
    """

    __slots__ = ("_columns",)

    def __init__(self, columns: Mapping[str, Iterable[Any]] | None = None) -> None:
        self._columns: dict[str, tuple[str, ...]] = {}
        for name, values in (columns or {}).items():
            self._columns[str(name)] = tuple(str(v) for v in values)

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"TabularData({self.to_dict()!r})"

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def row_count(self) -> int:
        """Length of the first column (0 for a table without columns)."""
        for values in self._columns.values():
            return len(values)
        return 0

    def with_column(self, name: str, values: Iterable[str]) -> TabularData:
        """Return a copy with ``name`` appended (or replaced in place if present)."""
        derived = dict(self._columns)
        derived[name] = tuple(values)
        return TabularData(derived)

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self._columns.items()}

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> TabularData:
        """Build from a DataFrame; NaN/None cells become empty strings."""
        import pandas as pd

        columns: dict[str, list[str]] = {}
        for col in df.columns:
            columns[str(col).strip()] = ["" if pd.isna(v) else str(v) for v in df[col].tolist()]
        return cls(columns)

    def to_dataframe(self) -> pd.DataFrame:
        import pandas as pd

        return pd.DataFrame({name: list(values) for name, values in self._columns.items()}, dtype=str)
