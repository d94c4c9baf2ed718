from pathlib import Path
import sys
import os

import pytest
from flask import g

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from boardroom import create_app
from boardroom.extensions import db
from boardroom.models import Resolution, User


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
            "MAIL_USERNAME": "",
            "MAIL_PASSWORD": "",
            "CRON_SECRET": "cron-secret",
            "DEFAULT_MINIMUM_QUORUM": 50,
            "DEFAULT_REQUIRES_MAJORITY": True,
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


def make_user(db_session, username, role="board_member", active=True):
    user = User(
        username=username,
        email=f"{username}@example.com",
        full_name=username.title(),
        password_hash="hashed-password",
        role=role,
        active=active,
    )
    db_session.add(user)
    db_session.commit()
    return user


def login_as(client, user):
    # Requests reuse the test app context, so drop the user Flask-Login cached there.
    g.pop("_login_user", None)
    with client.session_transaction() as session:
        session["_user_id"] = str(user.id)
        session["_fresh"] = True
    return client


@pytest.fixture()
def admin_user(db_session):
    return make_user(db_session, "admin1", role="admin")


@pytest.fixture()
def board_members(db_session):
    return [make_user(db_session, f"member{index}") for index in range(1, 4)]


@pytest.fixture()
def auth_client(client, admin_user):
    return login_as(client, admin_user)


@pytest.fixture()
def voting_resolution(db_session, admin_user, board_members):
    resolution = Resolution(
        resolution_number="RES-2026-001",
        title="Approve annual budget",
        content="The board approves the annual budget.",
        status="voting",
        minimum_quorum=50,
        requires_majority=True,
        total_eligible_voters=4,
        created_by=admin_user.id,
    )
    db_session.add(resolution)
    db_session.commit()
    return resolution


@pytest.fixture()
def user_factory(db_session):
    def factory(username, role="board_member", active=True):
        return make_user(db_session, username, role=role, active=active)

    return factory


@pytest.fixture()
def login(client):
    def do_login(user):
        return login_as(client, user)

    return do_login
