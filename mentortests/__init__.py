"""
Application Factory
Creates and configures the Flask application
"""
from flask import Flask
from mentortests.config import get_config
from mentortests.extensions import db, socketio


def create_app(config_name=None):
    """
    Application factory pattern
    Creates and configures Flask app
    """
    app = Flask(__name__)

    # Load configuration
    if config_name:
        from mentortests.config import config
        app.config.from_object(config[config_name])
    else:
        app.config.from_object(get_config())

    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    socketio.init_app(
        app,
        cors_allowed_origins=app.config['SOCKETIO_CORS_ALLOWED_ORIGINS'],
        async_mode=app.config['SOCKETIO_ASYNC_MODE']
    )

    from mentortests.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from mentortests.routes import auth_bp, mentor_bp, student_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(mentor_bp, url_prefix='/mentor')
    app.register_blueprint(student_bp, url_prefix='/student')

    # Register Socket.IO events
    from mentortests.sockets import register_socket_events
    with app.app_context():
        register_socket_events()

    # Create database tables
    with app.app_context():
        db.create_all()
        app.logger.info('Database tables created/verified')

    return app
