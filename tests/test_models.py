"""Tests for model-level invariants."""

import pytest
from sqlalchemy.exc import IntegrityError

from models import Application, Job, User, db


class TestInvariants:

    def test_role_must_be_admin_or_user(self):
        with pytest.raises(ValueError):
            User(name="X", email="x@acme.io", password_hash="h", role="recruiter")

    @pytest.mark.parametrize("salary", [0, -1, None, float("nan"), float("inf")])
    def test_salary_must_be_positive(self, salary):
        with pytest.raises(ValueError):
            Job(title="T", description="D", category="C", location="L", salary=salary)

    def test_status_has_three_values(self):
        for status in ("pending", "accepted", "rejected"):
            assert Application(status=status).status == status
        with pytest.raises(ValueError):
            Application(status="withdrawn")

    def test_email_is_unique(self, app, admin_id):
        with app.app_context():
            db.session.add(User(name="Dup", email="admin@acme.io", password_hash="h", role="user"))
            with pytest.raises(IntegrityError):
                db.session.commit()
            db.session.rollback()


class TestSerialization:

    def test_user_json_has_no_password_hash(self, app, admin_id):
        with app.app_context():
            data = db.session.get(User, admin_id).to_dict()
        assert set(data) == {"id", "name", "email", "role"}

    def test_job_json_uses_wire_names(self, app, job_id, admin_id):
        with app.app_context():
            data = db.session.get(Job, job_id).to_dict()
        assert data["postedById"] == admin_id
        assert "posted_by" not in data
