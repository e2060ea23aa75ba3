"""
Application submission and review.

A user submits a multipart form against a job; the resume goes to the
resume store first and the row is only written once the upload succeeded.
Admins list, accept/reject and delete applications.
"""

import logging

from flask import Blueprint, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from errors import EntityNotFound, ValidationFailed
from forms import ApplicationForm, StatusForm
from gate import require_role
from jobs import get_job_or_404
from models import ROLE_ADMIN, ROLE_USER, STATUS_PENDING, Application, db
from storage import get_resume_store

logger = logging.getLogger(__name__)

applications_bp = Blueprint("applications", __name__, url_prefix="/applications")


def _application_id(required=True):
    """The ``?id=`` query parameter as an int, or None when absent and optional."""
    raw = request.args.get("id")
    if not raw:
        if required:
            raise ValidationFailed("Application id is required")
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationFailed("Invalid application id")


def _get_application(application_id):
    application = db.session.get(Application, application_id)
    if application is None:
        raise EntityNotFound("Application not found")
    return application


# ================= APPLY JOB =================
@applications_bp.route("/<int:job_id>", methods=["POST"])
@require_role(ROLE_USER)
def apply_job(job_id, user):
    job = get_job_or_404(job_id)

    form = ApplicationForm()
    if not form.validate_on_submit():
        raise ValidationFailed.from_form(form, "All fields are required")

    store = get_resume_store()
    resume_url = store.upload(form.resume.data)

    application = Application(
        user_name=form.fullName.data,
        email=form.email.data,
        cover_letter=form.coverLetter.data,
        resume=resume_url,
        status=STATUS_PENDING,
        job_id=job.id,
        user_id=user["id"],
    )
    try:
        db.session.add(application)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Could not record application for job %s, discarding %s", job.id, resume_url)
        try:
            store.discard(resume_url)
        except OSError:
            logger.exception("Failed to discard orphaned resume %s", resume_url)
        raise

    logger.info("User %s applied to job %s (application %s)", user["id"], job.id, application.id)
    return jsonify({"success": True, "application": application.to_dict()}), 201


@applications_bp.route("/user", methods=["GET"])
@require_role()
def user_applications(user):
    applications = (
        Application.query
        .filter_by(user_id=user["id"])
        .order_by(Application.id.desc())
        .all()
    )
    return jsonify([a.to_dict(include_job=True) for a in applications])


# ================= REVIEW =================
@applications_bp.route("", methods=["GET"])
@require_role(ROLE_ADMIN)
def list_applications(user):
    application_id = _application_id(required=False)
    if application_id is not None:
        return jsonify(_get_application(application_id).to_dict(include_job=True))

    applications = Application.query.order_by(Application.id).all()
    return jsonify([a.to_dict(include_job=True) for a in applications])


@applications_bp.route("", methods=["PATCH"])
@require_role(ROLE_ADMIN)
def update_status(user):
    application = _get_application(_application_id())

    form = StatusForm()
    if not form.validate_on_submit():
        raise ValidationFailed.from_form(form)

    previous = application.status
    application.status = form.status.data
    db.session.commit()

    logger.info(
        "Admin %s moved application %s from %s to %s",
        user["id"], application.id, previous, application.status,
    )
    return jsonify(application.to_dict())


@applications_bp.route("", methods=["DELETE"])
@require_role(ROLE_ADMIN)
def delete_application(user):
    application = _get_application(_application_id())
    data = application.to_dict()

    db.session.delete(application)
    db.session.commit()

    logger.info("Admin %s deleted application %s", user["id"], data["id"])
    return jsonify(data)
