"""
Main application initialization module.
Sets up the Flask app with configuration, extensions and blueprints.
"""
from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv
import logging

from coursehub.config import CONFIGS
from coursehub.services.metrics_provider import MockMetricsProvider
from coursehub.utils.auth_context import current_session, load_auth_session
from coursehub.utils.services import (
    BACKEND_FACTORY_KEY,
    METRICS_PROVIDER_KEY,
    release_backend,
)
from coursehub.utils.supabase_client import SupabaseBackend

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def _plain_number(value):
    value = float(value)
    return str(int(value)) if value.is_integer() else f"{value:.2f}"


def _default_backend_factory(config):
    def factory(access_token=None):
        return SupabaseBackend.from_config(config['SUPABASE_URL'], config['SUPABASE_KEY'], access_token)
    return factory


def create_app(config_name=None, backend_factory=None, metrics_provider=None):
    """
    Create and configure the Flask application
    @param config_name: str - Name of the configuration to use ('default' or 'testing')
    @param backend_factory: callable(access_token) returning a backend; defaults to Supabase
    @param metrics_provider: MetricsProvider for course ratings and student counts
    @returns: Flask - Configured Flask application instance
    """
    app = Flask(__name__)

    config_class = CONFIGS[config_name or 'default']
    config_class.validate()
    app.config.from_object(config_class)

    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS']
        }
    })

    app.extensions[BACKEND_FACTORY_KEY] = backend_factory or _default_backend_factory(app.config)
    app.extensions[METRICS_PROVIDER_KEY] = metrics_provider or MockMetricsProvider(
        rating_min=app.config['MOCK_RATING_MIN'],
        rating_span=app.config['MOCK_RATING_SPAN'],
        students_min=app.config['MOCK_STUDENTS_MIN'],
        students_span=app.config['MOCK_STUDENTS_SPAN'],
    )

    app.before_request(load_auth_session)
    app.teardown_appcontext(release_backend)

    @app.context_processor
    def inject_auth_session():
        return {'auth_session': current_session()}

    @app.template_filter('hours')
    def format_hours(value):
        return _plain_number(value or 0)

    @app.template_filter('price')
    def format_price(value):
        if not value or value <= 0:
            return 'Free'
        return f"${_plain_number(value)}"

    # Register blueprints with error handling
    try:
        from .controllers.home_controller import home_bp
        app.register_blueprint(home_bp)
        logger.info("Successfully registered home blueprint")

        from .controllers.course_controller import course_bp
        app.register_blueprint(course_bp)
        logger.info("Successfully registered course blueprint")

        from .controllers.dashboard_controller import dashboard_bp
        app.register_blueprint(dashboard_bp)
        logger.info("Successfully registered dashboard blueprint")

        from .controllers.auth_controller import auth_bp
        app.register_blueprint(auth_bp)
        logger.info("Successfully registered auth blueprint")

        from .controllers.admin_controller import admin_bp
        app.register_blueprint(admin_bp)
        logger.info("Successfully registered admin blueprint")

        from .controllers.api_controller import api_bp
        app.register_blueprint(api_bp, url_prefix='/api')
        logger.info("Successfully registered api blueprint")

        # Add a simple health check route
        @app.route('/health', methods=['GET'])
        def health_check():
            return {'status': 'healthy', 'environment': app.config['ENVIRONMENT']}, 200

    except Exception as e:
        logger.error(f"Error registering blueprints: {str(e)}")
        raise

    return app
