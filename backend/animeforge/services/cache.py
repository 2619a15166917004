from collections import OrderedDict
from typing import Any, Callable, Iterable, List, Optional


class RowCache:
    """
    Local mirror of remote rows, keyed by row id.

    Editors only touch it after a write has committed: ``put`` the row the
    store returned, or ``invalidate`` it. Iteration keeps load/insert order.
    """

    def __init__(self, key: Callable[[Any], Any] = lambda row: row.id):
        self._key = key
        self._rows: "OrderedDict[Any, Any]" = OrderedDict()
        self.loaded = False

    def load(self, rows: Iterable[Any]) -> None:
        self._rows = OrderedDict((self._key(row), row) for row in rows)
        self.loaded = True

    def get(self, row_id) -> Optional[Any]:
        return self._rows.get(row_id)

    def put(self, row) -> None:
        self._rows[self._key(row)] = row

    def invalidate(self, row_id) -> None:
        self._rows.pop(row_id, None)

    def clear(self) -> None:
        self._rows.clear()
        self.loaded = False

    def values(self) -> List[Any]:
        return list(self._rows.values())

    def __contains__(self, row_id) -> bool:
        return row_id in self._rows

    def __len__(self) -> int:
        return len(self._rows)
