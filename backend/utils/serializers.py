from datetime import datetime

TODO_COLUMNS = (
    "t_id, t_title, t_description, t_pr_priority, t_done, "
    "t_beginning, t_ending, t_reminder, t_u_user, t_p_project"
)
PROJECT_COLUMNS = "p_id, p_title, p_color, p_u_user"


def _iso(value):
    if value is None:
        return None
    # SQLite hands timestamps back as text
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.isoformat()


def todo_doc(row: dict) -> dict:
    doc = dict(row)
    doc["t_done"] = bool(row["t_done"])
    for key in ("t_beginning", "t_ending", "t_reminder"):
        doc[key] = _iso(row.get(key))
    return doc


def todo_docs(rows) -> list:
    return [todo_doc(row) for row in rows]
