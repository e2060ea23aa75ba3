"""Tests for the JSON error responses."""

from errors import ErrorKind


class TestErrorKind:

    def test_status_codes(self):
        assert ErrorKind.VALIDATION.status_code == 400
        assert ErrorKind.UNAUTHORIZED.status_code == 401
        assert ErrorKind.NOT_FOUND.status_code == 404
        assert ErrorKind.INTERNAL.status_code == 500

    def test_from_status(self):
        assert ErrorKind.from_status(404) is ErrorKind.NOT_FOUND
        assert ErrorKind.from_status(405) is ErrorKind.VALIDATION
        assert ErrorKind.from_status(503) is ErrorKind.INTERNAL


class TestErrorResponses:

    def test_unknown_route_is_json_not_found(self, client):
        response = client.get("/no-such-page")

        assert response.status_code == 404
        assert response.get_json()["kind"] == "not_found"

    def test_malformed_json_is_validation_error(self, admin_client):
        response = admin_client.post("/jobs", data="{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.get_json()["kind"] == "validation"

    def test_unexpected_error_surfaces_message(self, app, client):
        @app.route("/boom")
        def boom():
            raise RuntimeError("database on fire")

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.get_json() == {"error": "database on fire", "kind": "internal"}
