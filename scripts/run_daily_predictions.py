import sys
import os
from datetime import date, datetime

# Add app to path
sys.path.append(os.getcwd())

from app.db import SessionLocal, Game, init_db
from app.services.predictions import PredictionService, get_model_config


def main():
    target_date = date.today()
    if len(sys.argv) > 1:
        target_date = datetime.strptime(sys.argv[1], "%Y-%m-%d").date()

    print(f"Predicting games for {target_date}...")
    init_db()
    db = SessionLocal()
    try:
        games = db.query(Game).filter(Game.game_date == target_date).order_by(Game.id).all()
        run = PredictionService(model_config=get_model_config()).predict_games(games, report_date=target_date)
        for result in run.results:
            print(f"{result.home_team} Vs. {result.away_team}: {result.predicted_winner} ({result.american_odds})")
        print(f"Predicted {len(run.results)} games, skipped {run.skipped}. Report: {run.report_path}")
    finally:
        db.close()
        print("Done.")

if __name__ == "__main__":
    main()
