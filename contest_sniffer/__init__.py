import logging
import os

from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv
from flask import Flask, redirect, url_for

from contest_sniffer.config import SnifferConfig, config_map, resolve_config

__version__ = '0.1.0'

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def load_env(env=None):
    """Load ``.env.<env>`` then ``.env`` (the latter overrides).

    Returns the configuration name: *env* if given, otherwise FLASK_ENV as
    it stands after the files are loaded.
    """
    file_env = env or os.environ.get('FLASK_ENV', 'development')
    env_file = os.path.join(_PROJECT_ROOT, f'.env.{file_env}')
    if os.path.exists(env_file):
        load_dotenv(env_file)

    dotenv_path = os.path.join(_PROJECT_ROOT, '.env')
    if os.path.exists(dotenv_path):
        load_dotenv(dotenv_path, override=True)

    return env or os.environ.get('FLASK_ENV', 'development')


def create_app(config_name=None):
    """Application factory for creating the Flask app instance.

    Args:
        config_name: Configuration name ('development', 'production' or
                     'testing'). Defaults to FLASK_ENV or 'development'.

    Returns:
        Configured Flask application instance.
    """
    from contest_sniffer.services.pipeline import ContestPipeline

    config_name = load_env(config_name)

    app = Flask(__name__)

    config_class = config_map.get(config_name, config_map['development'])
    app.config.from_mapping(resolve_config(config_class))

    _configure_logging(app)

    # Immutable view of the query settings, validated once at startup
    sniffer_config = SnifferConfig.from_mapping(app.config)
    app.extensions['sniffer_config'] = sniffer_config
    # One pipeline (and one HTTP session per source) for the app lifetime
    app.extensions['contest_pipeline'] = ContestPipeline.from_config(sniffer_config)

    _register_blueprints(app)

    @app.route('/')
    def index():
        return redirect(url_for('command.oi'))

    return app


def _configure_logging(app):
    """Set up RotatingFileHandler on the root logger."""
    max_bytes = app.config.get('LOG_FILE_MAX_BYTES', 0)
    if not max_bytes:
        return

    log_dir = os.path.join(app.instance_path, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, 'app.log')
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=app.config.get('LOG_FILE_BACKUP_COUNT', 3),
    )
    handler.setFormatter(logging.Formatter(
        app.config.get('LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    ))
    handler.setLevel(logging.DEBUG)

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.WARNING:
        root.setLevel(logging.INFO)


def _register_blueprints(app):
    """Register all application blueprints."""
    from contest_sniffer.views.api import api_bp
    from contest_sniffer.views.command import command_bp

    app.register_blueprint(api_bp)
    app.register_blueprint(command_bp)
