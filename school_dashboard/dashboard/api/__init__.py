# Dashboard API Module
#
# Contains Flask Blueprints for the dashboard, goals and admin routes

from .dashboard_routes import dashboard_bp
from .goals_routes import goals_bp
from .admin_routes import admin_bp

__all__ = ['dashboard_bp', 'goals_bp', 'admin_bp']
