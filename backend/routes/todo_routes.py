from datetime import datetime, timedelta

from flask import Blueprint, g, jsonify, request

from db.builders import Assignments, Filter, like_pattern
from db.executor import Param, ParamType
from routes.auth_utils import owner_id, require_auth
from utils.errors import NotFoundError, QueryError, ValidationError
from utils.serializers import TODO_COLUMNS, todo_doc, todo_docs
from utils.validation import (
    json_body,
    parse_bool,
    parse_date,
    parse_int,
    parse_timestamp,
    require_fields,
    require_text,
    utcnow,
)

todo_bp = Blueprint("todos", __name__)

# body key -> (column, type)
_UPDATABLE = {
    "title": ("t_title", ParamType.TEXT),
    "description": ("t_description", ParamType.TEXT),
    "priority": ("t_pr_priority", ParamType.INT),
    "done": ("t_done", ParamType.BOOL),
    "reminder": ("t_reminder", ParamType.TIMESTAMP),
    "ending": ("t_ending", ParamType.TIMESTAMP),
    "projectId": ("t_p_project", ParamType.INT),
}


def _parse_field(key: str, type_: ParamType, value):
    if key == "title":
        return require_text({key: value}, key)
    if type_ is ParamType.INT:
        if value is None:
            raise ValidationError(f"{key} must not be null")
        return parse_int(value, key)
    if type_ is ParamType.BOOL:
        if value is None:
            raise ValidationError(f"{key} must not be null")
        return parse_bool(value, key)
    if type_ is ParamType.TIMESTAMP:
        return parse_timestamp(value, key)
    return value


def _query_user_id() -> int:
    require_fields(request.args, "user")
    return owner_id(request.args["user"])


def _owned(user_id: int) -> Filter:
    return Filter().add("t_u_user = :user_id", Param("user_id", ParamType.INT, user_id))


def _select(where: Filter) -> list:
    rows = g.db.run(f"SELECT {TODO_COLUMNS} FROM t_todo{where.where()} ORDER BY t_id", where.params)
    return todo_docs(rows)


@todo_bp.get("/todo")
def list_todos():
    return jsonify(_select(Filter()))


@todo_bp.get("/todo/<int:todo_id>")
def get_todo(todo_id: int):
    rows = _select(Filter().add("t_id = :todo_id", Param("todo_id", ParamType.INT, todo_id)))
    if not rows:
        raise NotFoundError("Todo not found")
    return jsonify(rows[0])


@todo_bp.get("/todo/<int:todo_id>/user/<username>")
@require_auth
def get_user_todo(todo_id: int, username: str):
    user_id = owner_id(username)
    rows = _select(_owned(user_id).add("t_id = :todo_id", Param("todo_id", ParamType.INT, todo_id)))
    if not rows:
        raise NotFoundError("Todo not found")
    return jsonify(rows[0])


@todo_bp.get("/todos/<username>")
@require_auth
def list_user_todos(username: str):
    return jsonify(_select(_owned(owner_id(username))))


@todo_bp.post("/todo/<username>")
@require_auth
def create_todo(username: str):
    body = json_body()
    title = require_text(body, "title")
    require_fields(body, "projectId", "priority")
    project_id = parse_int(body["projectId"], "projectId")
    priority = parse_int(body["priority"], "priority")
    description = body.get("description")
    reminder = parse_timestamp(body.get("reminder"), "reminder")
    ending = parse_timestamp(body.get("ending"), "ending")

    user_id = owner_id(username)
    # Selecting from the owner's project guards the project reference in the
    # same statement as the insert.
    try:
        row = g.db.run_one(
            "INSERT INTO t_todo (t_title, t_description, t_pr_priority, t_done, t_beginning, "
            "t_ending, t_reminder, t_u_user, t_p_project) "
            "SELECT :title, :description, :priority, :done, :beginning, :ending, :reminder, "
            ":user_id, p_id FROM p_project WHERE p_id = :project_id AND p_u_user = :user_id "
            f"RETURNING {TODO_COLUMNS}",
            [
                Param("title", ParamType.TEXT, title),
                Param("description", ParamType.TEXT, description),
                Param("priority", ParamType.INT, priority),
                Param("done", ParamType.BOOL, False),
                Param("beginning", ParamType.TIMESTAMP, utcnow()),
                Param("ending", ParamType.TIMESTAMP, ending),
                Param("reminder", ParamType.TIMESTAMP, reminder),
                Param("user_id", ParamType.INT, user_id),
                Param("project_id", ParamType.INT, project_id),
            ],
        )
    except QueryError as exc:
        raise ValidationError("Todo could not be created") from exc
    if not row:
        raise NotFoundError("Project not found")
    return jsonify(todo_doc(row)), 201


@todo_bp.put("/todo/<int:todo_id>/user/<username>")
@require_auth
def update_todo(todo_id: int, username: str):
    body = json_body()
    changes = Assignments()
    for key, (column, type_) in _UPDATABLE.items():
        if key in body:
            changes.set(column, key, type_, _parse_field(key, type_, body[key]))
    if not changes:
        raise ValidationError("No fields to update")

    user_id = owner_id(username)
    where = _owned(user_id).add("t_id = :todo_id", Param("todo_id", ParamType.INT, todo_id))
    if "projectId" in body:
        where.add("EXISTS (SELECT 1 FROM p_project WHERE p_id = :projectId AND p_u_user = :user_id)")

    try:
        row = g.db.run_one(
            f"UPDATE t_todo {changes.clause()}{where.where()} RETURNING {TODO_COLUMNS}",
            changes.params + where.params,
        )
    except QueryError as exc:
        raise ValidationError("Todo could not be updated") from exc
    if not row:
        raise NotFoundError("Todo or project not found")
    return jsonify(todo_doc(row))


@todo_bp.delete("/todo/<int:todo_id>/user/<username>")
@require_auth
def delete_todo(todo_id: int, username: str):
    user_id = owner_id(username)
    row = g.db.run_one(
        "DELETE FROM t_todo WHERE t_id = :todo_id AND t_u_user = :user_id RETURNING t_id",
        [Param("todo_id", ParamType.INT, todo_id), Param("user_id", ParamType.INT, user_id)],
    )
    if not row:
        raise NotFoundError("Todo not found")
    return jsonify({"message": "Todo deleted", "t_id": row["t_id"]})


@todo_bp.get("/todo/filter")
@require_auth
def filter_todos():
    start = parse_timestamp(request.args.get("start"), "start")
    end_arg = request.args.get("end")
    end = parse_timestamp(end_arg, "end")
    end_op = "<="
    if end is not None and len(end_arg.strip()) == 10:
        # a bare date covers the whole day
        end, end_op = end + timedelta(days=1), "<"
    priority = parse_int(request.args.get("priority"), "priority")

    where = (
        _owned(_query_user_id())
        .add_if(start, "t_ending >= :start", Param("start", ParamType.TIMESTAMP, start))
        .add_if(end, f"t_ending {end_op} :end", Param("end", ParamType.TIMESTAMP, end))
        .add_if(priority, "t_pr_priority = :priority", Param("priority", ParamType.INT, priority))
    )
    return jsonify(_select(where))


@todo_bp.get("/todo/date/<date_str>")
@require_auth
def todos_by_date(date_str: str):
    day = parse_date(date_str, "date")
    start = datetime(day.year, day.month, day.day)
    where = (
        _owned(_query_user_id())
        .add("t_ending >= :day_start", Param("day_start", ParamType.TIMESTAMP, start))
        .add("t_ending < :day_end", Param("day_end", ParamType.TIMESTAMP, start + timedelta(days=1)))
    )
    return jsonify(_select(where))


@todo_bp.get("/todo/filter/done")
@require_auth
def todos_by_done():
    done = parse_bool(request.args.get("done", "true"), "done")
    where = _owned(_query_user_id()).add("t_done = :done", Param("done", ParamType.BOOL, done))
    return jsonify(_select(where))


@todo_bp.get("/todo/search")
@require_auth
def search_todos():
    term = require_text(request.args, "term")
    in_description = parse_bool(request.args.get("searchDescription"), "searchDescription")

    pattern = Param("pattern", ParamType.TEXT, like_pattern(term.lower()))
    if in_description:
        condition = (
            "(LOWER(t_title) LIKE :pattern ESCAPE '\\' "
            "OR LOWER(COALESCE(t_description, '')) LIKE :pattern ESCAPE '\\')"
        )
    else:
        condition = "LOWER(t_title) LIKE :pattern ESCAPE '\\'"
    return jsonify(_select(_owned(_query_user_id()).add(condition, pattern)))
