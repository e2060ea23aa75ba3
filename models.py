import math

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import validates

db = SQLAlchemy()

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
APPLICATION_STATUSES = (STATUS_PENDING, STATUS_ACCEPTED, STATUS_REJECTED)


class User(db.Model):
    __tablename__ = "user"
    __table_args__ = (
        db.CheckConstraint("role IN ('admin', 'user')", name="ck_user_role"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)

    # Relationship: a user can have many applications
    applications = db.relationship("Application", backref="user", lazy=True)
    # Relationship: an admin can post many jobs
    jobs_posted = db.relationship("Job", backref="poster", lazy=True)

    @validates("role")
    def validate_role(self, key, value):
        if value not in ROLES:
            raise ValueError(f"Invalid role: {value!r}")
        return value

    def session_payload(self):
        """Snapshot stored in the session cookie at login time."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }

    def to_dict(self):
        return self.session_payload()


class Job(db.Model):
    __tablename__ = "job"
    __table_args__ = (
        db.CheckConstraint("salary > 0", name="ck_job_salary_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100), nullable=False)
    location = db.Column(db.String(100), nullable=False)
    salary = db.Column(db.Float, nullable=False)
    posted_by = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)

    # Deleting a job removes its applications
    applications = db.relationship(
        "Application", backref="job", lazy=True, cascade="all, delete-orphan"
    )

    @validates("salary")
    def validate_salary(self, key, value):
        if value is None or not math.isfinite(value) or value <= 0:
            raise ValueError("Salary must be positive")
        return value

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "location": self.location,
            "salary": self.salary,
            "postedById": self.posted_by,
        }


class Application(db.Model):
    __tablename__ = "application"
    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_application_status",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    cover_letter = db.Column(db.Text, nullable=False)
    resume = db.Column(db.String(500), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    job_id = db.Column(db.Integer, db.ForeignKey("job.id"), nullable=False)

    @validates("status")
    def validate_status(self, key, value):
        if value not in APPLICATION_STATUSES:
            raise ValueError(f"Invalid application status: {value!r}")
        return value

    def to_dict(self, include_job=False):
        data = {
            "id": self.id,
            "userName": self.user_name,
            "email": self.email,
            "coverLetter": self.cover_letter,
            "resume": self.resume,
            "status": self.status,
            "jobId": self.job_id,
            "userId": self.user_id,
        }
        if include_job:
            data["job"] = self.job.to_dict() if self.job else None
        return data
