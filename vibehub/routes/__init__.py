"""Routes package for the marketplace application."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .apps import apps_bp
    from .catalog import catalog_bp
    from .admin import admin_bp

    app.register_blueprint(apps_bp, url_prefix='/api/apps')
    app.register_blueprint(catalog_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
