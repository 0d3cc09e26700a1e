import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import config
from app.db import Base, get_db
from app.main import app
from app.schemas.teams import TeamStats


def build_team(name: str, wins: int = 10, losses: int = 8, overtime_losses: int = 2, **overrides) -> TeamStats:
    """League-average per-game production scaled to the team's games played."""
    gp = max(1, wins + losses + overtime_losses)
    stats = dict(
        name=name,
        wins=wins,
        losses=losses,
        overtime_losses=overtime_losses,
        goals_for=3 * gp,
        goals_against=3 * gp,
        shots_for=30 * gp,
        shots_against=30 * gp,
        hits=20 * gp,
        powerplays=3 * gp,
        penalties=4 * gp,
        powerplay_percentage=0.20,
        penalty_kill_percentage=0.80,
        save_percentage=0.905,
        giveaways=8 * gp,
        takeaways=7 * gp,
        corsi_for=55 * gp,
        corsi_against=55 * gp,
        fenwick_for=42 * gp,
        fenwick_against=42 * gp,
        opponents_corsi_for=55 * gp,
        opponents_fenwick_for=42 * gp,
    )
    stats.update(overrides)
    return TeamStats(**stats)


@pytest.fixture
def team_factory():
    return build_team


@pytest.fixture
def report_folder(tmp_path, monkeypatch):
    folder = tmp_path / "GamePredictions"
    monkeypatch.setattr(config, "REPORT_FOLDER", str(folder))
    return folder


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session, report_folder):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
