import logging

from flask import Flask
from flask_migrate import Migrate

from config import get_config
from models import db
from routes import register_routes

migrate = Migrate()


def configure_logging(app):
    """Set the root and app log level from LOG_LEVEL."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)


def create_app(env=None):
    """Build the costing app for an environment name ('development', 'testing', ...)."""
    app = Flask(__name__)
    app.config.from_object(get_config(env))

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    register_routes(app)

    app.logger.debug('App created with %s', app.config['SQLALCHEMY_DATABASE_URI'])
    return app


app = create_app()


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(flask_app=None):
    """Create any missing tables (fresh SQLite databases)."""
    flask_app = flask_app or app
    with flask_app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()
        flask_app.logger.info('Database tables ready')


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
