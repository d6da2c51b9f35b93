"""Tutor Hub - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"]
)

def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'Tutor Hub',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from tutorhub.api.auth import auth_bp
    from tutorhub.api.sessions import sessions_bp
    from tutorhub.api.timetable import timetable_bp
    from tutorhub.api.dashboard import dashboard_bp
    from tutorhub.api.classes import classes_bp
    from tutorhub.api.payslips import payslips_bp
    from tutorhub.api.admin import admin_bp

    # Auth
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # Teacher features
    app.register_blueprint(sessions_bp, url_prefix='/api/sessions')
    app.register_blueprint(timetable_bp, url_prefix='/api/timetable')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')
    app.register_blueprint(classes_bp, url_prefix='/api/classes')
    app.register_blueprint(payslips_bp, url_prefix='/api/payslips')

    # Admin Management
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    # Swagger UI
    from tutorhub.utils.swagger import SWAGGER_URL, API_URL, get_swagger_blueprint, generate_swagger_spec

    @app.route(API_URL)
    def swagger_spec():
        """Serve Swagger/OpenAPI specification."""
        return jsonify(generate_swagger_spec())

    app.register_blueprint(get_swagger_blueprint(), url_prefix=SWAGGER_URL)

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from tutorhub.utils.helpers import handle_error, error_response
    from tutorhub.utils.errors import ServiceError
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(ServiceError)
    def service_error(error):
        db.session.rollback()
        app.logger.info(f"{error.__class__.__name__}: {error.message}")
        return error_response(error.message, error.status_code)

    @app.errorhandler(400)
    def bad_request(error):
        return handle_error(error, 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return handle_error(error, 401)

    @app.errorhandler(403)
    def forbidden(error):
        return handle_error(error, 403)

    @app.errorhandler(404)
    def not_found(error):
        return handle_error(error, 404)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f"Internal error: {error}")
        return handle_error(error, 500)

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e.description, e.code)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({
            'error': True,
            'message': 'Token has expired',
            'status_code': 401
        }), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Invalid token',
            'status_code': 401
        }), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Authorization token required',
            'status_code': 401
        }), 401

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.info('Tutor Hub startup')

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models
        from tutorhub.models import (
            User, UserRole, Teacher, Student, Course,
            ClassModel, ClassStudent, ClassTimetable,
            ClassSession, AttendanceRecord, Payslip
        )

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command('seed-db')
    def seed_db():
        """Seed database with demo data."""
        from tutorhub.services.seed_service import SeedService

        try:
            SeedService.seed_all()
            click.echo('Database seeded successfully!')
        except Exception as e:
            db.session.rollback()
            click.echo(f'Error seeding database: {str(e)}')

    @app.cli.command('create-admin')
    def create_admin():
        """Create admin user."""
        email = click.prompt('Admin email')
        name = click.prompt('Admin name')
        password = click.prompt('Password', hide_input=True)

        from tutorhub.models.user import User, UserRole

        admin = User(
            email=email.lower().strip(),
            name=name,
            role=UserRole.ADMIN
        )
        admin.set_password(password)

        try:
            db.session.add(admin)
            db.session.commit()
            click.echo(f'Admin user created: {email}')
        except Exception as e:
            db.session.rollback()
            click.echo(f'Error creating admin: {str(e)}')
