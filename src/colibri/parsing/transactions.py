"""Transaction wrapper for grammar rules.

Grammar rules share one cursor and signal failure by returning None.
Wrapping a rule in ``@transactional`` pairs every ``begin`` with exactly
one ``commit`` or ``rollback``, whatever path the rule takes:

    @transactional
    def _parse_emphasis(self, pos: int) -> tuple[int, Emphasis] | None:
        ...

Inside the rule, ``self._cursor.range_since_last_begin()`` spans exactly
what the rule has consumed so far.

"""

from collections.abc import Callable
from functools import wraps
from typing import Concatenate, Protocol

from colibri.cursor import Cursor


class CursorHost(Protocol):
    _cursor: Cursor


def transactional[H: CursorHost, **P, R](
    rule: Callable[Concatenate[H, P], R | None],
) -> Callable[Concatenate[H, P], R | None]:
    """Run ``rule`` inside a cursor transaction.

    Commits when the rule returns a result, rolls back when it returns
    None or raises.
    """

    @wraps(rule)
    def wrapper(self: H, *args: P.args, **kwargs: P.kwargs) -> R | None:
        cursor = self._cursor
        cursor.begin()
        try:
            result = rule(self, *args, **kwargs)
        except BaseException:
            cursor.rollback()
            raise
        if result is None:
            cursor.rollback()
        else:
            cursor.commit()
        return result

    return wrapper
