"""
db/builders.py
--------------
Small helpers that assemble WHERE and SET clauses from optional inputs. Values
always travel as `Param`s; only column names and placeholders end up in the
statement text.
"""

from typing import Any, List

from db.executor import Param, ParamType


class Filter:
    """
    AND-combined conditions, e.g.:

        f = Filter()
        f.add("t_u_user = :user_id", Param("user_id", ParamType.INT, 3))
        f.add_if(start, "t_ending >= :start", Param("start", ParamType.TIMESTAMP, start))
        sql = "SELECT * FROM t_todo" + f.where()
    """

    def __init__(self):
        self.conditions: List[str] = []
        self.params: List[Param] = []

    def add(self, condition: str, *params: Param) -> "Filter":
        self.conditions.append(condition)
        self.params.extend(params)
        return self

    def add_if(self, value: Any, condition: str, *params: Param) -> "Filter":
        if value is not None:
            self.add(condition, *params)
        return self

    def where(self) -> str:
        if not self.conditions:
            return ""
        return " WHERE " + " AND ".join(self.conditions)


class Assignments:
    """SET clause for partial updates: only fields that were supplied."""

    def __init__(self):
        self.columns: List[str] = []
        self.params: List[Param] = []

    def set(self, column: str, name: str, type_: ParamType, value: Any) -> "Assignments":
        self.columns.append(f"{column} = :{name}")
        self.params.append(Param(name, type_, value))
        return self

    def __bool__(self):
        return bool(self.columns)

    def clause(self) -> str:
        return "SET " + ", ".join(self.columns)


def like_pattern(term: str) -> str:
    """Wrap `term` for a `LIKE ... ESCAPE '\\'` substring match."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
