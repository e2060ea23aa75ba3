"""
Encrypted cookie sessions.

Drop-in replacement for Flask's signed cookie session: the payload is
serialized the same way, then sealed with Fernet so the browser can neither
read nor alter it. Anything that fails to unseal (tampered, expired, sealed
with another key, not a token at all) opens as an empty session.
"""

import base64
import logging

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SecureCookieSession, SessionInterface

logger = logging.getLogger(__name__)


def derive_key(secret_key, salt):
    """Fernet key for the app secret, via HKDF-SHA256."""
    hkdf = HKDF(algorithm=hashes.SHA256(), length=32, salt=salt, info=b"session-cookie")
    return base64.urlsafe_b64encode(hkdf.derive(secret_key.encode("utf-8")))


class SessionCodec:
    """Seals and unseals a session payload with a key derived from the app secret."""

    serializer = TaggedJSONSerializer()

    def __init__(self, secret_key, salt=b"job-board-session"):
        self.fernet = Fernet(derive_key(secret_key, salt))

    def seal(self, payload):
        data = self.serializer.dumps(dict(payload))
        return self.fernet.encrypt(data.encode("utf-8")).decode("ascii")

    def unseal(self, token, max_age=None):
        """Return the payload dict, or None when the token is not valid."""
        try:
            data = self.fernet.decrypt(token.encode("ascii"), ttl=max_age)
            payload = self.serializer.loads(data.decode("utf-8"))
        except (InvalidToken, UnicodeError, ValueError):
            return None
        if not isinstance(payload, dict):
            return None
        return payload


class EncryptedCookieSessionInterface(SessionInterface):
    session_class = SecureCookieSession

    def get_codec(self, app):
        if not app.secret_key:
            return None
        return SessionCodec(app.secret_key)

    def open_session(self, app, request):
        codec = self.get_codec(app)
        if codec is None:
            return None

        token = request.cookies.get(self.get_cookie_name(app))
        if not token:
            return self.session_class()

        max_age = int(app.permanent_session_lifetime.total_seconds())
        payload = codec.unseal(token, max_age=max_age)
        if payload is None:
            logger.debug("Discarding unreadable session cookie")
            return self.session_class()
        return self.session_class(payload)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        secure = self.get_cookie_secure(app)
        samesite = self.get_cookie_samesite(app)
        httponly = self.get_cookie_httponly(app)

        if session.accessed:
            response.vary.add("Cookie")

        # Emptied session: drop the cookie
        if not session:
            if session.modified:
                response.delete_cookie(
                    name,
                    domain=domain,
                    path=path,
                    secure=secure,
                    samesite=samesite,
                    httponly=httponly,
                )
                response.vary.add("Cookie")
            return

        if not self.should_set_cookie(app, session):
            return

        token = self.get_codec(app).seal(session)
        response.set_cookie(
            name,
            token,
            expires=self.get_expiration_time(app, session),
            httponly=httponly,
            domain=domain,
            path=path,
            secure=secure,
            samesite=samesite,
        )
        response.vary.add("Cookie")
