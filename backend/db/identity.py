"""
db/identity.py
--------------
Username to user id lookup used to scope project and todo statements.
"""

from typing import Optional

from db.executor import Param, ParamType, QueryExecutor


def resolve_user_id(executor: QueryExecutor, username: str) -> Optional[int]:
    """
    Return the id of `username`, or None when no such user exists.

    Raises:
        QueryError: if the lookup itself fails.
    """
    row = executor.run_one(
        "SELECT u_id FROM u_user WHERE u_username = :username",
        [Param("username", ParamType.TEXT, username)],
    )
    return row["u_id"] if row else None
