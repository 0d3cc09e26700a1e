import pytest


@pytest.fixture
def slate(client, team_factory):
    """Two teams and one game on 2024-01-15."""
    home = client.post("/api/teams", json=team_factory("Boston Bruins", wins=14).model_dump()).json()
    away = client.post("/api/teams", json=team_factory("Toronto Maple Leafs", wins=6).model_dump()).json()
    game = client.post("/api/games", json={
        "home_team_id": home["id"], "away_team_id": away["id"], "game_date": "2024-01-15"
    }).json()
    return home, away, game


class TestPredictForDate:

    def test_predicts_stored_games(self, client, slate):
        _, _, game = slate
        response = client.get("/api/predict/2024-01-15")
        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2024-01-15"
        assert data["count"] == 1
        prediction = data["predictions"][0]
        assert prediction["game_id"] == game["id"]
        assert prediction["predicted_winner"] == "Boston Bruins"
        assert prediction["american_odds"].startswith("-")
        assert 0.5 <= prediction["probability"] <= 1.0

    def test_writes_daily_report(self, client, slate, report_folder):
        data = client.get("/api/predict/2024-01-15").json()

        path = report_folder / "01-15-2024.txt"
        assert data["report_path"] == str(path)
        content = path.read_text(encoding="utf-8")
        assert content.startswith("Boston Bruins Vs. Toronto Maple Leafs\nWinner: Boston Bruins (")

    def test_no_games_writes_empty_report(self, client, report_folder):
        data = client.get("/api/predict/2024-02-01").json()

        assert data["count"] == 0
        assert (report_folder / "02-01-2024.txt").read_text(encoding="utf-8") == ""

    def test_game_with_deleted_team_is_skipped(self, client, slate):
        _, away, _ = slate
        client.delete(f"/api/teams/{away['id']}")

        data = client.get("/api/predict/2024-01-15").json()
        assert data["count"] == 0
        assert data["skipped"] == 1

    def test_invalid_date(self, client):
        response = client.get("/api/predict/01-15-2024")
        assert response.status_code == 400

    def test_rerun_is_stable(self, client, slate):
        first = client.get("/api/predict/2024-01-15").json()["predictions"]
        second = client.get("/api/predict/2024-01-15").json()["predictions"]
        assert first == second


class TestEvaluate:

    def test_inline_matchups(self, client, team_factory, report_folder):
        response = client.post("/api/predict/evaluate", json={
            "report_date": "2024-03-01",
            "matchups": [
                {"game_id": 7, "home": team_factory("A").model_dump(), "away": team_factory("B").model_dump()},
                {"game_id": 8, "home": team_factory("C").model_dump()},
            ],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["skipped"] == 1
        assert data["predictions"][0]["american_odds"] == "-113"
        assert data["report_path"] is None
        assert not (report_folder / "03-01-2024.txt").exists()

    def test_inline_matchups_with_report(self, client, team_factory, report_folder):
        response = client.post("/api/predict/evaluate", json={
            "report_date": "2024-03-01",
            "write_report": True,
            "matchups": [{"home": team_factory("A").model_dump(), "away": team_factory("B").model_dump()}],
        })
        assert response.json()["report_path"] == str(report_folder / "03-01-2024.txt")

    def test_empty_matchups_rejected(self, client):
        response = client.post("/api/predict/evaluate", json={"matchups": []})
        assert response.status_code == 422
