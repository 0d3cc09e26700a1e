"""
Sportradar NHL Integration Service

Refreshes the stored teams and the daily schedule from the Sportradar NHL API:
- League teams with season statistics and analytics (Corsi/Fenwick)
- Scheduled games for a date, matched to stored teams by name

Rate-limited requests (HTTP 429) are retried a few times after a pause.
Failures for one team are logged and skipped so one bad payload does not
stop the refresh.
"""

import asyncio
import httpx
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session

from app import config
from app.db import Team, Game
from app.schemas.teams import to_fraction
from app.utils.logging import get_logger

logger = get_logger(__name__)

ENDPOINTS = {
    "teams": "/league/teams.json",
    "analytics": "/seasons/{year}/REG/teams/{team_id}/analytics.json",
    "statistics": "/seasons/{year}/REG/teams/{team_id}/statistics.json",
    "daily_schedule": "/games/{year}/{month}/{day}/schedule.json",
}


class SportradarError(Exception):
    pass


def is_api_enabled() -> bool:
    """Check if Sportradar API is enabled."""
    return bool(config.SPORTRADAR_API_KEY)


def get_season_year(today: Optional[date] = None) -> int:
    """Seasons run July through June and are named after the earlier year."""
    today = today or date.today()
    return today.year if today.month >= 7 else today.year - 1


def _build_url(endpoint_key: str, **kwargs) -> str:
    return f"{config.SPORTRADAR_BASE_URL}{ENDPOINTS[endpoint_key].format(**kwargs)}"


@asynccontextmanager
async def _client_scope(client: Optional[httpx.AsyncClient]):
    if client is not None:
        yield client
    else:
        async with httpx.AsyncClient(timeout=30.0) as owned:
            yield owned


async def _get_json(client: httpx.AsyncClient, url: str) -> Dict[str, Any]:
    """GET a Sportradar resource, pausing and retrying on rate limits."""
    retries = 0

    while True:
        try:
            response = await client.get(url, params={"api_key": config.SPORTRADAR_API_KEY})
        except httpx.HTTPError as e:
            raise SportradarError(f"GET {url} failed: {e}") from e

        if response.status_code == 429:
            retries += 1
            if retries >= config.SPORTRADAR_MAX_RATE_LIMIT_RETRIES:
                logger.error(f"Hit rate limit {retries} times consecutively for {url}")
                raise SportradarError(f"Rate limited on {url}")
            logger.warning(
                f"Rate limited on {url}; retry {retries}/{config.SPORTRADAR_MAX_RATE_LIMIT_RETRIES}"
            )
            await asyncio.sleep(config.SPORTRADAR_RATE_LIMIT_WAIT_SECONDS)
            continue

        if response.status_code == 403:
            raise SportradarError("Sportradar API access denied - check API key")
        if response.status_code != 200:
            raise SportradarError(f"GET {url} -> {response.status_code}")

        return response.json()


def _int(node: Dict[str, Any], key: str, fallback: int) -> int:
    value = node.get(key)
    return int(value) if value is not None else fallback


def _pct(node: Dict[str, Any], key: str, fallback: float) -> float:
    value = node.get(key)
    return to_fraction(float(value)) if value is not None else fallback


def parse_team_stats(
    analytics: Dict[str, Any],
    statistics: Dict[str, Any],
    current: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Map Sportradar analytics + statistics payloads onto Team columns.

    Values missing from the payloads keep their ``current`` value.
    """
    current = dict(current or {})

    def cur(key, default=0):
        value = current.get(key)
        return default if value is None else value

    stats = {key: cur(key) for key in current}

    own_analytics = analytics.get("own_record", {}).get("statistics", {}).get("total")
    opp_analytics = analytics.get("opponents", {}).get("statistics", {}).get("total", {})
    if own_analytics is None:
        logger.warning("No analytics own_record.statistics.total in payload")
    else:
        stats["corsi_for"] = _int(own_analytics, "corsi_for", cur("corsi_for"))
        stats["corsi_against"] = _int(own_analytics, "corsi_against", cur("corsi_against"))
        stats["fenwick_for"] = _int(own_analytics, "fenwick_for", cur("fenwick_for"))
        stats["fenwick_against"] = _int(own_analytics, "fenwick_against", cur("fenwick_against"))
        stats["opponents_corsi_for"] = _int(opp_analytics, "corsi_for", cur("opponents_corsi_for"))
        stats["opponents_fenwick_for"] = _int(opp_analytics, "fenwick_for", cur("opponents_fenwick_for"))

    own_record = statistics.get("own_record", {})
    own_total = own_record.get("statistics", {}).get("total")
    if own_total is None:
        logger.warning("No statistics own_record.statistics.total in payload")
        return stats

    powerplay = own_record.get("statistics", {}).get("powerplay", {})
    shorthanded = own_record.get("statistics", {}).get("shorthanded", {})
    goaltending = own_record.get("goaltending", {}).get("total", {})

    stats["goals_for"] = _int(own_total, "goals", cur("goals_for"))
    stats["penalties"] = _int(own_total, "penalties", cur("penalties"))
    stats["powerplays"] = _int(own_total, "powerplays", cur("powerplays"))
    stats["hits"] = _int(own_total, "hits", cur("hits"))
    stats["giveaways"] = _int(own_total, "giveaways", cur("giveaways"))
    stats["takeaways"] = _int(own_total, "takeaways", cur("takeaways"))
    stats["shots_for"] = _int(own_total, "shots", cur("shots_for"))
    stats["powerplay_percentage"] = _pct(powerplay, "percentage", cur("powerplay_percentage", 0.0))
    stats["penalty_kill_percentage"] = _pct(shorthanded, "kill_pct", cur("penalty_kill_percentage", 0.0))
    stats["wins"] = _int(goaltending, "wins", cur("wins"))
    stats["losses"] = _int(goaltending, "losses", cur("losses"))
    stats["overtime_losses"] = _int(goaltending, "overtime_losses", cur("overtime_losses"))
    stats["goals_against"] = _int(goaltending, "goals_against", cur("goals_against"))
    stats["shots_against"] = _int(goaltending, "shots_against", cur("shots_against"))
    stats["save_percentage"] = _pct(goaltending, "saves_pct", cur("save_percentage", 0.0))

    return stats


STAT_COLUMNS = (
    "wins", "losses", "overtime_losses", "goals_for", "goals_against",
    "shots_for", "shots_against", "hits", "powerplays", "penalties",
    "powerplay_percentage", "penalty_kill_percentage", "save_percentage",
    "giveaways", "takeaways", "corsi_for", "corsi_against",
    "fenwick_for", "fenwick_against", "opponents_corsi_for", "opponents_fenwick_for",
)


def find_team(db: Session, name: Optional[str]) -> Optional[Team]:
    """Exact name match first, then a case-insensitive substring match."""
    if not name:
        return None
    team = db.query(Team).filter(Team.name == name).first()
    if team:
        return team
    return db.query(Team).filter(Team.name.ilike(f"%{name}%")).first()


async def refresh_teams(
    db: Session,
    client: Optional[httpx.AsyncClient] = None,
    season_year: Optional[int] = None
) -> Dict[str, Any]:
    """
    Create or update every league team with its season statistics.

    Returns:
        Summary with updated/failed counts
    """
    summary = {"teams_updated": 0, "teams_failed": 0}

    if not is_api_enabled():
        logger.error("SPORTRADAR_API_KEY not set; skipping team refresh")
        return {**summary, "error": "api_key_missing"}

    season_year = season_year or get_season_year()

    async with _client_scope(client) as http:
        try:
            teams_payload = await _get_json(http, _build_url("teams"))
        except SportradarError as e:
            logger.error(f"Error fetching teams from Sportradar: {e}")
            return {**summary, "error": str(e)}

        teams = teams_payload.get("teams")
        if not isinstance(teams, list):
            logger.warning("teams array not found in teams response")
            return summary

        for node in teams:
            team_id = node.get("id")
            market = node.get("market") or ""
            name = node.get("name") or ""
            full_name = f"{market} {name}".strip()

            team = db.query(Team).filter(Team.external_id == team_id).first() if team_id else None
            team = team or find_team(db, full_name) or find_team(db, name)
            if team is None:
                team = Team(name=full_name)
                db.add(team)

            team.name = full_name
            team.external_id = team_id

            try:
                analytics = await _get_json(
                    http, _build_url("analytics", year=season_year, team_id=team_id)
                )
                statistics = await _get_json(
                    http, _build_url("statistics", year=season_year, team_id=team_id)
                )
            except SportradarError as e:
                logger.warning(f"Failed to fetch analytics for team {full_name} (id={team_id}): {e}")
                summary["teams_failed"] += 1
                db.commit()
                continue

            current = {col: getattr(team, col) for col in STAT_COLUMNS}
            for key, value in parse_team_stats(analytics, statistics, current).items():
                setattr(team, key, value)
            team.updated_at = datetime.utcnow()

            db.commit()
            summary["teams_updated"] += 1

    logger.info(f"Teams updated from Sportradar: {summary}")
    return summary


async def refresh_games(
    db: Session,
    target_date: Optional[date] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """Store the scheduled games for a date, skipping games whose teams are unknown."""
    target_date = target_date or date.today()
    summary = {"date": target_date.isoformat(), "games_created": 0, "games_skipped": 0}

    if not is_api_enabled():
        logger.error("SPORTRADAR_API_KEY not set; skipping schedule refresh")
        return {**summary, "error": "api_key_missing"}

    url = _build_url(
        "daily_schedule",
        year=target_date.year,
        month=str(target_date.month).zfill(2),
        day=str(target_date.day).zfill(2),
    )

    async with _client_scope(client) as http:
        try:
            schedule = await _get_json(http, url)
        except SportradarError as e:
            logger.error(f"Error fetching schedule: {e}")
            return {**summary, "error": str(e)}

    games = schedule.get("games") or []
    if not games:
        logger.info(f"No scheduled games found for {target_date}")
        return summary

    for node in games:
        external_id = node.get("id")
        if external_id and db.query(Game).filter(Game.external_id == external_id).first():
            continue

        home_name = (node.get("home") or {}).get("name")
        away_name = (node.get("away") or {}).get("name")
        home = find_team(db, home_name)
        away = find_team(db, away_name)

        if home is None or away is None:
            logger.warning(
                f"Could not match teams for game (home='{home_name}', away='{away_name}'). Skipping."
            )
            summary["games_skipped"] += 1
            continue

        db.add(Game(
            external_id=external_id,
            home_team_id=home.id,
            away_team_id=away.id,
            game_date=target_date,
        ))
        summary["games_created"] += 1
        logger.debug(f"Saved game: {home.name} vs {away.name}")

    db.commit()
    logger.info(f"Games scheduled for {target_date} processed: {summary}")
    return summary


async def update_all(db: Session, client: Optional[httpx.AsyncClient] = None) -> Dict[str, Any]:
    """Refresh teams, then today's schedule."""
    teams = await refresh_teams(db, client=client)
    games = await refresh_games(db, client=client)
    return {"teams": teams, "games": games}


def get_api_status() -> Dict[str, Any]:
    return {
        "api_enabled": is_api_enabled(),
        "base_url": config.SPORTRADAR_BASE_URL,
        "season_year": get_season_year(),
        "note": "Set SPORTRADAR_API_KEY environment variable to enable data refresh",
    }
