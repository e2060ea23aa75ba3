import logging

from flask import Blueprint, jsonify

from errors import ValidationFailed
from forms import JobForm
from gate import require_role
from models import ROLE_ADMIN, Job, db

logger = logging.getLogger(__name__)

jobs_bp = Blueprint("jobs", __name__, url_prefix="/jobs")


def _validated_job_form():
    form = JobForm()
    if not form.validate_on_submit():
        raise ValidationFailed.from_form(form)
    return form


def _apply_form(job, form):
    job.title = form.title.data
    job.description = form.description.data
    job.category = form.category.data
    job.location = form.location.data
    job.salary = form.salary.data


def get_job_or_404(job_id):
    return db.get_or_404(Job, job_id, description="Job not found")


@jobs_bp.route("", methods=["GET"])
def list_jobs():
    jobs = Job.query.order_by(Job.id).all()
    return jsonify([job.to_dict() for job in jobs])


@jobs_bp.route("", methods=["POST"])
@require_role(ROLE_ADMIN)
def create_job(user):
    form = _validated_job_form()

    job = Job(posted_by=user["id"])
    _apply_form(job, form)
    db.session.add(job)
    db.session.commit()

    logger.info("Admin %s posted job %s", user["id"], job.id)
    return jsonify(job.to_dict()), 201


@jobs_bp.route("/<int:job_id>", methods=["GET"])
@require_role(ROLE_ADMIN)
def get_job(job_id, user):
    return jsonify(get_job_or_404(job_id).to_dict())


@jobs_bp.route("/<int:job_id>", methods=["PATCH"])
@require_role(ROLE_ADMIN)
def update_job(job_id, user):
    job = get_job_or_404(job_id)
    form = _validated_job_form()

    _apply_form(job, form)
    db.session.commit()

    logger.info("Admin %s updated job %s", user["id"], job.id)
    return jsonify(job.to_dict())


@jobs_bp.route("/<int:job_id>", methods=["DELETE"])
@require_role(ROLE_ADMIN)
def delete_job(job_id, user):
    job = get_job_or_404(job_id)
    data = job.to_dict()

    db.session.delete(job)
    db.session.commit()

    logger.info("Admin %s deleted job %s", user["id"], job_id)
    return jsonify(data)
