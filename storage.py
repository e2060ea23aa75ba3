"""
Resume storage.

The application workflow only needs two calls: ``upload`` a file and get
back the URL to record, and ``discard`` that URL again when the record
could not be written. ``LocalResumeStore`` keeps files in the upload folder
and serves them through the ``pages.uploaded_file`` route.
"""

import abc
import logging
import os
import uuid

from flask import current_app, url_for
from werkzeug.utils import secure_filename

from errors import UploadFailed

logger = logging.getLogger(__name__)


class ResumeStore(abc.ABC):
    @abc.abstractmethod
    def upload(self, file):
        """Store ``file`` and return the URL to record."""

    @abc.abstractmethod
    def discard(self, url):
        """Remove a previously uploaded file."""


class LocalResumeStore(ResumeStore):
    def __init__(self, folder):
        self.folder = folder
        os.makedirs(folder, exist_ok=True)

    def upload(self, file):
        filename = f"{uuid.uuid4().hex}_{secure_filename(file.filename)}"
        try:
            file.save(os.path.join(self.folder, filename))
        except OSError as e:
            raise UploadFailed(f"Resume upload failed: {e}") from e

        logger.info("Stored resume %s", filename)
        return url_for("pages.uploaded_file", filename=filename, _external=True)

    def discard(self, url):
        filename = secure_filename(url.rsplit("/", 1)[-1])
        path = os.path.join(self.folder, filename)
        if os.path.exists(path):
            os.remove(path)
            logger.info("Discarded resume %s", filename)


def init_app(app, store=None):
    if store is None:
        store = LocalResumeStore(app.config["UPLOAD_FOLDER"])
    app.extensions["resume_store"] = store


def get_resume_store():
    return current_app.extensions["resume_store"]
