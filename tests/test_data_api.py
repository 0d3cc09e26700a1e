import inspect

from app import config
from app.routers.data import update_data


class TestUpdateData:

    def test_endpoint_is_sync(self):
        """FastAPI runs plain functions in its threadpool, off the event loop."""
        assert not inspect.iscoroutinefunction(update_data)

    def test_update_without_key(self, client, monkeypatch):
        monkeypatch.setattr(config, "SPORTRADAR_API_KEY", "")
        response = client.post("/api/update-data")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Data update triggered"
        assert data["teams"]["error"] == "api_key_missing"
        assert data["games"]["error"] == "api_key_missing"

    def test_status(self, client, monkeypatch):
        monkeypatch.setattr(config, "SPORTRADAR_API_KEY", "")
        data = client.get("/api/update-data/status").json()
        assert data["api_enabled"] is False
        assert data["base_url"] == config.SPORTRADAR_BASE_URL
