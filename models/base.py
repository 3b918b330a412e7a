"""
Database Base Module

The shared SQLAlchemy instance. Kept apart from the models so routes,
models and app.py can all import it without circular imports.
"""

from flask_sqlalchemy import SQLAlchemy

# Bound to the app in create_app()
db = SQLAlchemy()
