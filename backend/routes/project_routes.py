from flask import Blueprint, g, jsonify, request

from db.builders import Assignments
from db.executor import Param, ParamType
from routes.auth_utils import owner_id, require_auth
from utils.errors import NotFoundError, QueryError, ValidationError
from utils.serializers import PROJECT_COLUMNS, TODO_COLUMNS, todo_doc, todo_docs
from utils.validation import json_body, parse_bool, require_text

project_bp = Blueprint("projects", __name__)


def _scoped(project_id: int, user_id: int):
    return [
        Param("project_id", ParamType.INT, project_id),
        Param("user_id", ParamType.INT, user_id),
    ]


@project_bp.get("/project")
def list_projects():
    rows = g.db.run(f"SELECT {PROJECT_COLUMNS} FROM p_project ORDER BY p_id")
    return jsonify(rows)


@project_bp.get("/project/<int:project_id>")
def get_project(project_id: int):
    row = g.db.run_one(
        f"SELECT {PROJECT_COLUMNS} FROM p_project WHERE p_id = :project_id",
        [Param("project_id", ParamType.INT, project_id)],
    )
    if not row:
        raise NotFoundError("Project not found")
    return jsonify(row)


@project_bp.get("/project/<int:project_id>/todo")
def list_project_todos(project_id: int):
    rows = g.db.run(
        f"SELECT {TODO_COLUMNS} FROM t_todo WHERE t_p_project = :project_id ORDER BY t_id",
        [Param("project_id", ParamType.INT, project_id)],
    )
    return jsonify(todo_docs(rows))


@project_bp.get("/project/<int:project_id>/todo/<int:todo_id>")
def get_project_todo(project_id: int, todo_id: int):
    row = g.db.run_one(
        f"SELECT {TODO_COLUMNS} FROM t_todo WHERE t_p_project = :project_id AND t_id = :todo_id",
        [Param("project_id", ParamType.INT, project_id), Param("todo_id", ParamType.INT, todo_id)],
    )
    if not row:
        raise NotFoundError("Todo not found")
    return jsonify(todo_doc(row))


@project_bp.get("/project/<int:project_id>/user/<username>")
@require_auth
def get_user_project(project_id: int, username: str):
    user_id = owner_id(username)
    row = g.db.run_one(
        f"SELECT {PROJECT_COLUMNS} FROM p_project WHERE p_id = :project_id AND p_u_user = :user_id",
        _scoped(project_id, user_id),
    )
    if not row:
        raise NotFoundError("Project not found")
    return jsonify(row)


@project_bp.get("/projects/<username>")
@require_auth
def list_user_projects(username: str):
    user_id = owner_id(username)
    rows = g.db.run(
        f"SELECT {PROJECT_COLUMNS} FROM p_project WHERE p_u_user = :user_id ORDER BY p_id",
        [Param("user_id", ParamType.INT, user_id)],
    )
    return jsonify(rows)


@project_bp.post("/project/<username>")
@require_auth
def create_project(username: str):
    body = json_body()
    title = require_text(body, "title")
    color = body.get("color")

    user_id = owner_id(username)
    try:
        row = g.db.run_one(
            "INSERT INTO p_project (p_title, p_color, p_u_user) "
            f"VALUES (:title, :color, :user_id) RETURNING {PROJECT_COLUMNS}",
            [
                Param("title", ParamType.TEXT, title),
                Param("color", ParamType.TEXT, color),
                Param("user_id", ParamType.INT, user_id),
            ],
        )
    except QueryError as exc:
        raise ValidationError("Project could not be created") from exc
    return jsonify(row), 201


@project_bp.put("/project/<int:project_id>/user/<username>")
@require_auth
def update_project(project_id: int, username: str):
    body = json_body()
    changes = Assignments()
    if "title" in body:
        changes.set("p_title", "title", ParamType.TEXT, require_text(body, "title"))
    if "color" in body:
        changes.set("p_color", "color", ParamType.TEXT, body["color"])
    if not changes:
        raise ValidationError("No fields to update")

    user_id = owner_id(username)
    try:
        row = g.db.run_one(
            f"UPDATE p_project {changes.clause()} "
            f"WHERE p_id = :project_id AND p_u_user = :user_id RETURNING {PROJECT_COLUMNS}",
            changes.params + _scoped(project_id, user_id),
        )
    except QueryError as exc:
        raise ValidationError("Project could not be updated") from exc
    if not row:
        raise NotFoundError("Project not found")
    return jsonify(row)


@project_bp.delete("/project/<int:project_id>/user/<username>")
@require_auth
def delete_project(project_id: int, username: str):
    cascade = parse_bool(request.args.get("cascade"), "cascade") or False
    user_id = owner_id(username)

    # Not a transaction: if the project delete fails the todos stay deleted.
    if cascade:
        g.db.run(
            "DELETE FROM t_todo WHERE t_p_project = :project_id AND t_u_user = :user_id",
            _scoped(project_id, user_id),
        )
    try:
        row = g.db.run_one(
            "DELETE FROM p_project WHERE p_id = :project_id AND p_u_user = :user_id RETURNING p_id",
            _scoped(project_id, user_id),
        )
    except QueryError as exc:
        raise ValidationError("Project could not be deleted; delete its todos or pass cascade=true") from exc
    if not row:
        raise NotFoundError("Project not found")
    return jsonify({"message": "Project deleted", "p_id": row["p_id"]})
