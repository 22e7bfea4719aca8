# backend/warebnb/__init__.py
from flask import Flask, jsonify, request, g, session

from .config import Config
from .extensions import db, migrate


def create_app(config_class=Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.users import users_bp
    from .routes.navigation import navigation_bp
    from .routes.companies import companies_bp
    from .routes.warehouses import warehouses_bp
    from .routes.bookings import bookings_bp
    from .routes.invoices import invoices_bp
    from .routes.claims import claims_bp
    from .routes.orders import orders_bp
    from .routes.access_logs import access_logs_bp
    from .routes.inventory import inventory_bp
    from .routes.dashboard import dashboard_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(navigation_bp)
    app.register_blueprint(companies_bp)
    app.register_blueprint(warehouses_bp)
    app.register_blueprint(bookings_bp)
    app.register_blueprint(invoices_bp)
    app.register_blueprint(claims_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(access_logs_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(dashboard_bp)

    from .services.role_service import stored_test_role

    @app.before_request
    def load_test_role():
        # Preview role for root; only menus and themes read it
        g.test_role = stored_test_role(session, request.cookies)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config["CORS_ALLOWED_ORIGINS"]:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,PATCH,OPTIONS"
        return response

    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
