from routes.priority_routes import priority_bp
from routes.project_routes import project_bp
from routes.todo_routes import todo_bp
from routes.user_routes import user_bp

BLUEPRINTS = (user_bp, priority_bp, project_bp, todo_bp)
