"""
Shared fixtures for the job board tests.

Every test gets its own app with an in-memory SQLite database and a
temporary upload folder.
"""

import io

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from models import ROLE_ADMIN, ROLE_USER, Job, User, db

ADMIN_EMAIL = "admin@acme.io"
USER_EMAIL = "alice@acme.io"
PASSWORD = "secret123"


@pytest.fixture
def app_config(tmp_path):
    return {
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "UPLOAD_FOLDER": str(tmp_path / "upload"),
    }


@pytest.fixture
def app(app_config):
    app = create_app(app_config)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def add_user(app, name, email, role, password=PASSWORD):
    with app.app_context():
        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def admin_id(app):
    return add_user(app, "Admin", ADMIN_EMAIL, ROLE_ADMIN)


@pytest.fixture
def user_id(app):
    return add_user(app, "Alice", USER_EMAIL, ROLE_USER)


@pytest.fixture
def job_id(app, admin_id):
    with app.app_context():
        job = Job(
            title="Backend Engineer",
            description="Build APIs",
            category="Engineering",
            location="Remote",
            salary=90000,
            posted_by=admin_id,
        )
        db.session.add(job)
        db.session.commit()
        return job.id


def login(client, email, password=PASSWORD):
    return client.post("/login", json={"email": email, "password": password})


@pytest.fixture
def admin_client(client, admin_id):
    assert login(client, ADMIN_EMAIL).status_code == 200
    return client


@pytest.fixture
def user_client(client, user_id):
    assert login(client, USER_EMAIL).status_code == 200
    return client


def application_form(resume=True, filename="cv.pdf", **overrides):
    data = {
        "fullName": "Alice Applicant",
        "email": USER_EMAIL,
        "coverLetter": "I would love to work on your APIs.",
    }
    if resume:
        data["resume"] = (io.BytesIO(b"%PDF-1.4 resume"), filename)
    data.update(overrides)
    return data


def submit_application(client, job_id, **kwargs):
    return client.post(
        f"/applications/{job_id}",
        data=application_form(**kwargs),
        content_type="multipart/form-data",
    )
