"""Service layer shared by the route blueprints."""
