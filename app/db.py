from sqlalchemy import create_engine, Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import sessionmaker, relationship, declarative_base
from datetime import datetime
from app.config import DATABASE_URL

is_sqlite = DATABASE_URL.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine_options = {
    "pool_pre_ping": True,
}
if not is_sqlite:
    engine_options["pool_recycle"] = 300

engine = create_engine(DATABASE_URL, connect_args=connect_args, **engine_options)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(100), nullable=True, index=True)
    name = Column(String(200), nullable=False, index=True)

    wins = Column(Integer, default=0)
    losses = Column(Integer, default=0)
    overtime_losses = Column(Integer, default=0)
    goals_for = Column(Integer, default=0)
    goals_against = Column(Integer, default=0)
    shots_for = Column(Integer, default=0)
    shots_against = Column(Integer, default=0)
    hits = Column(Integer, default=0)
    powerplays = Column(Integer, default=0)
    penalties = Column(Integer, default=0)

    # Fractions, 0-1
    powerplay_percentage = Column(Float, default=0.0)
    penalty_kill_percentage = Column(Float, default=0.0)
    save_percentage = Column(Float, default=0.0)

    giveaways = Column(Integer, default=0)
    takeaways = Column(Integer, default=0)
    corsi_for = Column(Integer, default=0)
    corsi_against = Column(Integer, default=0)
    fenwick_for = Column(Integer, default=0)
    fenwick_against = Column(Integer, default=0)
    opponents_corsi_for = Column(Integer, default=0)
    opponents_fenwick_for = Column(Integer, default=0)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    home_games = relationship("Game", foreign_keys="Game.home_team_id", back_populates="home_team")
    away_games = relationship("Game", foreign_keys="Game.away_team_id", back_populates="away_team")


class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(100), nullable=True, index=True)
    home_team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)
    away_team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)
    game_date = Column(Date, nullable=False, index=True)

    home_team = relationship("Team", foreign_keys=[home_team_id], back_populates="home_games")
    away_team = relationship("Team", foreign_keys=[away_team_id], back_populates="away_games")


def init_db():
    Base.metadata.create_all(bind=engine)
