"""
db/ - Database Layer
====================
Statement execution (one connection per call), owner lookup, clause builders
and schema bootstrap. Route handlers talk to the database only through
`QueryExecutor`.
"""

from db.executor import Param, ParamType, QueryExecutor, build_engine

__all__ = ["Param", "ParamType", "QueryExecutor", "build_engine"]
