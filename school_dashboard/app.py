import logging

import click
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.security import generate_password_hash

# Import configuration
from .config import config

# Import database initialization
from .database_init import initialize_database, check_database_health, seed_admin_account
from .utils.database_utils import DatabaseManager
from .utils.timezone_utils import now_in_timezone

from .dashboard.services.record_repository import RecordRepository
from .dashboard.services.metrics_service import MetricsEngine
from .dashboard.services.dashboard_service import DashboardService

# Import blueprints
from .dashboard.api import dashboard_bp, goals_bp, admin_bp

# Set up logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(database_path=None, testing=False):
    """
    Build the Flask application.

    Args:
        database_path: Optional sqlite file; defaults to config.DATABASE_PATH
        testing: Enable Flask testing mode
    """
    app = Flask(__name__)
    app.config['SECRET_KEY'] = config.SECRET_KEY
    app.config['TESTING'] = testing

    db_manager = DatabaseManager(database_path)

    # Initialize database on startup
    logger.info("🚀 Initializing database on startup...")
    if initialize_database(db_manager):
        if check_database_health(db_manager):
            logger.info("✅ Database initialization completed successfully")
            seed_admin_account(db_manager)
        else:
            logger.warning("⚠️ Database initialization completed but health check failed")
    else:
        logger.error("❌ Database initialization failed - app may not function properly")

    repository = RecordRepository(db_manager)
    app.extensions['record_repository'] = repository
    app.extensions['dashboard_service'] = DashboardService(
        repository=repository,
        metrics_engine=MetricsEngine(config.funnel_targets)
    )

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(goals_bp)
    app.register_blueprint(admin_bp)

    CORS(app, origins=config.ALLOWED_ORIGINS,
         allow_headers=['Content-Type', 'Authorization'],
         methods=['GET', 'PUT', 'DELETE', 'OPTIONS'])

    @app.route('/health')
    def health():
        healthy = check_database_health(db_manager)
        return jsonify({
            'status': 'healthy' if healthy else 'degraded',
            'timestamp': now_in_timezone().isoformat()
        }), 200 if healthy else 503

    @app.cli.command('init-db')
    def init_db_command():
        """Create the database tables and the configured admin account."""
        if not initialize_database(db_manager):
            raise click.ClickException('Database initialization failed')
        seed_admin_account(db_manager)
        click.echo(f"Database ready at {db_manager.database_path}")

    @app.cli.command('create-school')
    @click.argument('username')
    @click.password_option()
    @click.option('--school-name', default=None, help='Display name of the school')
    @click.option('--email', default=None, help='Contact email')
    def create_school_command(username, password, school_name, email):
        """Create a school account."""
        if repository.get_account_by_username(username):
            raise click.ClickException(f"Account '{username}' already exists")
        repository.create_account(
            username=username,
            password_hash=generate_password_hash(password),
            email=email,
            school_name=school_name or username
        )
        click.echo(f"Created school account '{username}'")

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(
        debug=config.FLASK_DEBUG and not config.is_production,
        host=config.HOST,
        port=config.PORT
    )
