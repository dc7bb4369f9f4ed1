from flask import Blueprint, g, jsonify

from db.builders import Assignments
from db.executor import Param, ParamType
from routes.auth_utils import (
    check_password,
    generate_token,
    hash_password,
    owner_id,
    require_auth,
)
from utils.errors import AuthError, NotFoundError, QueryError, ValidationError
from utils.validation import json_body, require_text

user_bp = Blueprint("users", __name__)


@user_bp.post("/user")
def register():
    body = json_body()
    username = require_text(body, "username")
    password = require_text(body, "password", strip=False)

    try:
        g.db.run(
            "INSERT INTO u_user (u_username, u_password) VALUES (:username, :password)",
            [
                Param("username", ParamType.TEXT, username),
                Param("password", ParamType.TEXT, hash_password(password)),
            ],
        )
    except QueryError as exc:
        raise ValidationError("User could not be created") from exc

    return jsonify({"message": "User created", "username": username}), 201


@user_bp.post("/user/login")
def login():
    body = json_body()
    username = require_text(body, "username")
    password = require_text(body, "password", strip=False)

    user = g.db.run_one(
        "SELECT u_id, u_username, u_password FROM u_user WHERE u_username = :username",
        [Param("username", ParamType.TEXT, username)],
    )
    if not user or not check_password(password, user["u_password"]):
        raise AuthError("Invalid credentials")

    token = generate_token(user["u_id"])
    return jsonify({"token": token, "user": {"u_id": user["u_id"], "u_username": user["u_username"]}})


@user_bp.get("/users")
def list_users():
    rows = g.db.run("SELECT u_id, u_username FROM u_user ORDER BY u_id")
    return jsonify(rows)


@user_bp.put("/user/<username>")
@require_auth
def update_user(username: str):
    body = json_body()
    changes = Assignments()
    if "username" in body:
        changes.set("u_username", "new_username", ParamType.TEXT, require_text(body, "username"))
    if "password" in body:
        password = require_text(body, "password", strip=False)
        changes.set("u_password", "password", ParamType.TEXT, hash_password(password))
    if not changes:
        raise ValidationError("No fields to update")

    user_id = owner_id(username)
    try:
        rows = g.db.run(
            f"UPDATE u_user {changes.clause()} WHERE u_id = :user_id RETURNING u_id, u_username",
            changes.params + [Param("user_id", ParamType.INT, user_id)],
        )
    except QueryError as exc:
        raise ValidationError("User could not be updated") from exc
    if not rows:
        raise NotFoundError("User not found")

    return jsonify({"message": "User updated", "user": rows[0]})
