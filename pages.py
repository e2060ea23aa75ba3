from flask import Blueprint, current_app, redirect, render_template, send_from_directory

from gate import current_user
from jobs import get_job_or_404
from models import Application, Job

pages_bp = Blueprint("pages", __name__)


# ================= HOME =================
@pages_bp.route("/")
def home():
    return redirect("/login")


@pages_bp.route("/upload/<filename>")
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)


# ================= ADMIN =================
# Role checks for these pages happen in gate.guard_pages

@pages_bp.route("/dashboard")
def dashboard():
    user = current_user()
    jobs = Job.query.filter_by(posted_by=user["id"]).order_by(Job.id.desc()).all()
    return render_template("dashboard.html", user=user, jobs=jobs)


@pages_bp.route("/addjobs")
def add_job():
    return render_template("job_form.html", user=current_user(), job=None)


@pages_bp.route("/editjobs/<int:job_id>")
def edit_job(job_id):
    job = get_job_or_404(job_id)
    return render_template("job_form.html", user=current_user(), job=job)


@pages_bp.route("/seeapplication")
def see_applications():
    applications = Application.query.order_by(Application.id.desc()).all()
    return render_template("applications.html", user=current_user(), applications=applications)


# ================= USER =================
@pages_bp.route("/user-dashboard")
def user_dashboard():
    user = current_user()
    applications = (
        Application.query
        .filter_by(user_id=user["id"])
        .order_by(Application.id.desc())
        .all()
    )
    return render_template("user_dashboard.html", user=user, applications=applications)


@pages_bp.route("/alljobs")
def all_jobs():
    jobs = Job.query.order_by(Job.id.desc()).all()
    return render_template("jobs.html", user=current_user(), jobs=jobs)


@pages_bp.route("/alljobs/<int:job_id>")
def job_detail(job_id):
    job = get_job_or_404(job_id)
    return render_template("job_detail.html", user=current_user(), job=job)
