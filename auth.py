import logging

from flask import Blueprint, jsonify, redirect, render_template, request
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from errors import AuthRequired, ValidationFailed
from forms import LoginForm, RegisterForm
from gate import current_user, login_user, logout_user
from models import ROLE_USER, User, db

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def normalize_email(email):
    return email.strip().lower()


def email_taken(email):
    return User.query.filter_by(email=email).first() is not None


def create_user(name, email, password, role=ROLE_USER):
    """Insert a new account. Raises ValidationFailed when the email is taken."""
    email = normalize_email(email)
    if email_taken(email):
        raise ValidationFailed("User already exists")

    user = User(
        name=name.strip(),
        email=email,
        password_hash=generate_password_hash(password),
        role=role,
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.session.rollback()
        raise ValidationFailed("User already exists")
    return user


def authenticate(email, password):
    """Return the matching user, or None. Unknown email and wrong password look the same."""
    user = User.query.filter_by(email=normalize_email(email)).first()
    if user and check_password_hash(user.password_hash, password):
        return user
    return None


# ================= SIGNUP =================
@auth_bp.route("/signup")
def signup():
    return render_template("signup.html")


@auth_bp.route("/register", methods=["POST"])
def register():
    form = RegisterForm()
    if not form.validate_on_submit():
        raise ValidationFailed.from_form(form)

    user = create_user(form.name.data, form.email.data, form.password.data)
    logger.info("Registered user %s (id=%s)", user.email, user.id)

    return jsonify({
        "success": True,
        "message": "User registered successfully",
        "user": user.to_dict(),
    }), 201


# ================= LOGIN =================
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return render_template("login.html")

    form = LoginForm()
    if not form.validate_on_submit():
        raise ValidationFailed.from_form(form)

    user = authenticate(form.email.data, form.password.data)
    if user is None:
        logger.info("Failed login for %s", form.email.data)
        raise AuthRequired("Invalid email or password")

    login_user(user)
    logger.info("User %s logged in as %s", user.id, user.role)

    return jsonify({
        "success": True,
        "message": "Login successful",
        "user": user.session_payload(),
    })


# ================= LOGOUT =================
@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    logout_user()
    if request.method == "GET":
        return redirect("/login")
    return jsonify({"success": True})


@auth_bp.route("/session")
def current_session():
    user = current_user()
    if user is None:
        raise AuthRequired()
    return jsonify({"user": user})
