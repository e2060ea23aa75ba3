import logging
import os

import click
from flask import Flask

import gate
import storage
from applications import applications_bp
from auth import auth_bp, create_user
from config import Config
from errors import ValidationFailed, register_error_handlers
from jobs import jobs_bp
from models import ROLE_ADMIN, db
from pages import pages_bp
from sessions import EncryptedCookieSessionInterface

logger = logging.getLogger(__name__)


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ================= APP =================
def create_app(overrides=None, resume_store=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"])

    # Relative upload folders live next to the app, where send_from_directory looks
    if not os.path.isabs(app.config["UPLOAD_FOLDER"]):
        app.config["UPLOAD_FOLDER"] = os.path.join(app.root_path, app.config["UPLOAD_FOLDER"])

    app.session_interface = EncryptedCookieSessionInterface()

    db.init_app(app)
    with app.app_context():
        db.create_all()

    storage.init_app(app, resume_store)
    gate.init_app(app)
    register_error_handlers(app)

    app.register_blueprint(pages_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(applications_bp)

    register_commands(app)

    logger.info("Job board ready (database: %s)", app.config["SQLALCHEMY_DATABASE_URI"].split("://", 1)[0])
    return app


# ================= CLI =================
def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create database tables."""
        db.create_all()
        click.echo("Database ready")

    @app.cli.command("create-admin")
    @click.option("--name", prompt=True)
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(name, email, password):
        """Create an administrator account."""
        if len(password) < 6:
            raise click.ClickException("Password must be at least 6 characters")
        try:
            user = create_user(name, email, password, role=ROLE_ADMIN)
        except ValidationFailed as e:
            raise click.ClickException(e.message)
        click.echo(f"Admin {user.email} created (id={user.id})")


# ================= RUN =================
if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port)
