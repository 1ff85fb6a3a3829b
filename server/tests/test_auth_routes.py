"""Tests for the browser login and logout routes"""

from event_portal.routers.auth import _safe_return_path


class TestSafeReturnPath:
    def test_local_paths_are_kept(self):
        assert _safe_return_path("/events/abc") == "/events/abc"
        assert _safe_return_path("/admin/events?tab=all") == "/admin/events?tab=all"

    def test_off_site_values_fall_back_to_home(self):
        for value in (None, "", "//evil.example.com", "https://evil.example.com/", "events"):
            assert _safe_return_path(value) == "/"


class TestLogout:
    def test_logout_signs_out_and_ends_auth0_session(self, user_client, auth_session):
        client, _ = user_client
        received = []
        auth_session.subscribe(lambda event, session: received.append(event))

        response = client.get("/auth/logout", follow_redirects=False)

        assert response.status_code == 303
        assert "/v2/logout?client_id=" in response.headers["location"]
        assert auth_session.user is None
        assert len(received) == 1
