from flask import Flask, jsonify

from boardroom.commands import register_commands
from boardroom.config import Config
from boardroom.extensions import db, login_manager, migrate
from boardroom.models import User
from boardroom.routes import register_routes


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Unauthorized"}), 401

    register_routes(app)
    register_commands(app)
    return app


app = create_app()

__all__ = ["app", "db", "migrate", "create_app"]
