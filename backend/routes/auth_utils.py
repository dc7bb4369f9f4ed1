import datetime
from functools import wraps

import bcrypt
import jwt
from flask import current_app, g, jsonify, request

from db.identity import resolve_user_id
from utils.errors import ForbiddenError, NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode()


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def generate_token(user_id: int):
    payload = {
        "sub": str(user_id),
        "exp": datetime.datetime.now(datetime.timezone.utc)
        + datetime.timedelta(minutes=current_app.config["JWT_EXPIRES_MINUTES"]),
    }
    return jwt.encode(payload, current_app.config["SECRET_KEY"], algorithm="HS256")


def require_auth(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return jsonify({"error": "Missing token"}), 401
        token = header.split(" ", 1)[1]
        try:
            payload = jwt.decode(token, current_app.config["SECRET_KEY"], algorithms=["HS256"])
            user_id = int(payload.get("sub"))
        except jwt.ExpiredSignatureError:
            return jsonify({"error": "Token expired"}), 401
        except (jwt.InvalidTokenError, TypeError, ValueError):
            logger.warning(f"Rejected token on {request.path}")
            return jsonify({"error": "Invalid token"}), 401

        request.user_id = user_id
        return fn(*args, **kwargs)

    return wrapper


def owner_id(username: str) -> int:
    """
    Resolve `username` and check it is the caller. Only valid inside a
    `require_auth` view.
    """
    user_id = resolve_user_id(g.db, username)
    if user_id is None:
        raise NotFoundError("User not found")
    if user_id != request.user_id:
        logger.warning(f"User {request.user_id} tried to act as {username!r}")
        raise ForbiddenError("Token does not belong to this user")
    return user_id
