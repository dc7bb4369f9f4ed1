from flask import Blueprint, g, jsonify

priority_bp = Blueprint("priorities", __name__)


@priority_bp.get("/priorities")
def list_priorities():
    rows = g.db.run("SELECT pr_id, pr_name FROM pr_priority ORDER BY pr_id")
    return jsonify(rows)
