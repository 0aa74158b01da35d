# ABOUTME: Tests for the Starlette entry point serving the weather screen.
# ABOUTME: Drives the JSON routes with TestClient over a mocked weather API client.

import pytest
from conftest import make_timeline, mock_client
from starlette.testclient import TestClient

from city_weather.deps import ForecastDeps
from city_weather.web import BadRequestBody, create_app, extract_text


@pytest.fixture
def http_client():
    return mock_client(make_timeline())


@pytest.fixture
def client(http_client):
    with TestClient(create_app(ForecastDeps(http_client=http_client, api_key="test-key"))) as test_client:
        yield test_client


class TestExtractText:
    def test_reads_string_field(self):
        assert extract_text(b'{"city": "Paris"}', "city") == "Paris"

    def test_empty_body_is_none(self):
        assert extract_text(b"", "city") is None
        assert extract_text(b'{"other": 1}', "city") is None

    @pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'{"city": 42}', b'{"city": "Par\\ud800is"}'])
    def test_bad_bodies_raise(self, body):
        """Bodies that are not JSON objects with a string field are rejected.

        Implementation: Feeds invalid JSON, a JSON list, a non-string field, and a lone surrogate.
        Passing implies: The routes can answer 400 instead of crashing.
        """
        with pytest.raises(BadRequestBody):
            extract_text(body, "city")


class TestRoutes:
    def test_initial_screen(self, client):
        resp = client.get("/api/screen")

        assert resp.status_code == 200
        body = resp.json()
        assert body["background"] == "homePage.jpg"
        assert body["phase"] == "idle"
        assert body["current"] is None

    def test_search_renders_loaded_screen(self, client, http_client):
        """POST /api/search queries the API and returns the rendered screen.

        Implementation: Searches for Paris through the app with a mocked timeline.
        Passing implies: The route runs the query cycle and serializes the screen model.
        """
        resp = client.post("/api/search", json={"city": "Paris"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["phase"] == "loaded"
        assert body["current"]["temperature"] == "22°C"
        assert body["current"]["icon"] == "clear-day.webp"
        assert len(body["forecast"]["cards"]) == 3
        http_client.get.assert_awaited_once()

    def test_search_uses_place_name_when_body_is_empty(self, client, http_client):
        client.put("/api/place-name", json={"text": "Paris"})
        resp = client.post("/api/search")

        assert resp.json()["current"]["city"] == "Paris"
        assert http_client.get.call_args.args[0].endswith("/Paris")

    def test_blank_search_shows_validation_message(self, client, http_client):
        resp = client.post("/api/search", json={"city": "  "})

        assert resp.json()["error"] == "Please enter the city name."
        http_client.get.assert_not_called()

    def test_failed_search_shows_city_not_found(self, http_client):
        http_client.get.return_value = mock_client({}, status_code=404).get.return_value
        app = create_app(ForecastDeps(http_client=http_client, api_key="test-key"))
        with TestClient(app) as test_client:
            body = test_client.post("/api/search", json={"city": "Xyzzyville"}).json()

        assert body["error"] == "City not found"
        assert body["current"] is None

    def test_toggle_and_clear(self, client):
        """Toggle expands the forecast; clear returns to the home screen.

        Implementation: Searches, toggles, then clears through the routes.
        Passing implies: Every controller operation is reachable over HTTP.
        """
        client.post("/api/search", json={"city": "Paris"})
        expanded = client.post("/api/forecast/toggle").json()
        assert len(expanded["forecast"]["cards"]) == 7
        assert expanded["forecast"]["toggle_label"] == "Show Less"

        cleared = client.post("/api/clear").json()
        assert cleared["place_name"] == ""
        assert cleared["current"] is None
        assert cleared["forecast"] is None
        assert cleared["background"] == "homePage.jpg"

    def test_emptying_place_name_clears(self, client):
        client.post("/api/search", json={"city": "Paris"})
        body = client.put("/api/place-name", json={"text": ""}).json()

        assert body["phase"] == "idle"
        assert body["current"] is None

    def test_place_name_without_text_is_400(self, client):
        """PUT /api/place-name without a "text" field is rejected rather than clearing.

        Implementation: Loads Paris, then sends an empty JSON object to the place-name route.
        Passing implies: Only an explicit empty string resets the screen.
        """
        client.post("/api/search", json={"city": "Paris"})
        resp = client.put("/api/place-name", json={})

        assert resp.status_code == 400
        screen = client.get("/api/screen").json()
        assert screen["phase"] == "loaded"
        assert screen["place_name"] == "Paris"

    def test_lone_surrogate_city_is_400(self, client, http_client):
        """A city containing a lone surrogate is rejected and the screen stays usable.

        Implementation: Posts the raw JSON escape "Par\\ud800is" to the search route.
        Passing implies: The request never reaches the API and the screen is not left loading.
        """
        resp = client.post(
            "/api/search", content=b'{"city": "Par\\ud800is"}', headers={"content-type": "application/json"}
        )

        assert resp.status_code == 400
        http_client.get.assert_not_called()
        assert client.get("/api/screen").json()["phase"] == "idle"

    def test_malformed_body_is_400(self, client):
        resp = client.post("/api/search", content=b"{not json", headers={"content-type": "application/json"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_lifespan_closes_http_client(self, http_client):
        with TestClient(create_app(ForecastDeps(http_client=http_client))):
            pass
        http_client.aclose.assert_awaited_once()
