import math

from flask import request
from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField, FileRequired
from werkzeug.datastructures import ImmutableMultiDict
from wtforms import FloatField, PasswordField, StringField, TextAreaField
from wtforms.validators import (
    AnyOf, DataRequired, Email, InputRequired, Length, StopValidation, ValidationError
)

from errors import ValidationFailed
from models import STATUS_ACCEPTED, STATUS_REJECTED

ALLOWED_EXTENSIONS = ("pdf", "doc", "docx")


def text(form, field):
    if field.data is not None and not isinstance(field.data, str):
        raise StopValidation(f"{field.label.text} must be a string")


def positive(form, field):
    if field.data is None:
        raise ValidationError("Salary must be a number")
    if not math.isfinite(field.data) or field.data <= 0:
        raise ValidationError("Salary must be positive")


class NumberField(FloatField):
    """FloatField that treats null, booleans and containers from JSON as bad input."""

    def process_formdata(self, valuelist):
        if valuelist and (valuelist[0] is None or isinstance(valuelist[0], (bool, dict, list))):
            self.data = None
            raise ValueError(self.gettext("Not a valid float value."))
        super().process_formdata(valuelist)


class ApiForm(FlaskForm):
    """Base form for the JSON API.

    A JSON body must be an object. Its values are handed to the fields
    as-is, so a list stays one (invalid) value instead of being spread
    over several form entries.
    """

    def __init__(self, *args, **kwargs):
        if request.is_json and "formdata" not in kwargs:
            body = request.get_json()
            if not isinstance(body, dict):
                raise ValidationFailed("Request body must be a JSON object")
            kwargs["formdata"] = ImmutableMultiDict(list(body.items()))
        super().__init__(*args, **kwargs)


class RegisterForm(ApiForm):
    name = StringField("Name", validators=[text, DataRequired("Name is required"), Length(max=100)])
    email = StringField("Email", validators=[
        text, DataRequired(), Email("Invalid email address"), Length(max=120)
    ])
    password = PasswordField("Password", validators=[
        text, DataRequired(), Length(min=6, message="Password must be at least 6 characters")
    ])


class LoginForm(ApiForm):
    email = StringField("Email", validators=[text, DataRequired("Email and password are required"), Email()])
    password = PasswordField("Password", validators=[text, DataRequired("Email and password are required")])


class JobForm(ApiForm):
    title = StringField("Job Title", validators=[text, DataRequired("Title is required"), Length(max=200)])
    description = TextAreaField("Job Description", validators=[text, DataRequired("Description is required")])
    category = StringField("Category", validators=[text, DataRequired("Category is required"), Length(max=100)])
    location = StringField("Location", validators=[text, DataRequired("Location is required"), Length(max=100)])
    salary = NumberField("Salary", validators=[positive])


class ApplicationForm(ApiForm):
    fullName = StringField("Full Name", validators=[text, DataRequired(), Length(max=100)])
    email = StringField("Email", validators=[text, DataRequired(), Email(), Length(max=120)])
    coverLetter = TextAreaField("Cover Letter", validators=[text, DataRequired()])
    resume = FileField("Resume", validators=[
        FileRequired("Resume file is required"),
        FileAllowed(ALLOWED_EXTENSIONS, "Resume must be a PDF or Word document"),
    ])


class StatusForm(ApiForm):
    status = StringField("Status", validators=[
        text, InputRequired(), AnyOf([STATUS_ACCEPTED, STATUS_REJECTED])
    ])
