"""Read-only access to players and recorded matches in the tracker database."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, select
from sqlalchemy.orm import Session

from domain.common import MatchResult, Player, PlayerRatingSnapshot
from domain.protocol import MatchFormat

history_metadata = MetaData()

players_table = Table(
    "players",
    history_metadata,
    Column("id", String, primary_key=True),
    Column("group_id", String),
    Column("name", String),
    Column("ranking", Integer),
    Column("matches_played", Integer),
    Column("wins", Integer),
    Column("losses", Integer),
    Column("avatar", String),
    Column("department", String),
)

matches_table = Table(
    "matches",
    history_metadata,
    Column("id", String, primary_key=True),
    Column("group_id", String),
    Column("season_id", String),
    Column("match_type", String),
    Column("team1_player1_id", String),
    Column("team1_player2_id", String),
    Column("team2_player1_id", String),
    Column("team2_player2_id", String),
    Column("team1_score", Integer),
    Column("team2_score", Integer),
    Column("created_at", DateTime(timezone=False)),
    Column("team1_player1_pre_ranking", Integer),
    Column("team1_player1_post_ranking", Integer),
    Column("team1_player2_pre_ranking", Integer),
    Column("team1_player2_post_ranking", Integer),
    Column("team2_player1_pre_ranking", Integer),
    Column("team2_player1_post_ranking", Integer),
    Column("team2_player2_pre_ranking", Integer),
    Column("team2_player2_post_ranking", Integer),
)

_PLAYER_SLOTS = ("team1_player1", "team1_player2", "team2_player1", "team2_player2")


def fetch_players(
    session: Session,
    *,
    group_id: str,
    player_ids: list[str] | None = None,
) -> list[Player]:
    """Fetch players of one group ordered by name."""
    statement = select(players_table).where(players_table.c.group_id == group_id)
    if player_ids is not None:
        statement = statement.where(players_table.c.id.in_(player_ids))
    statement = statement.order_by(players_table.c.name, players_table.c.id)

    rows = session.execute(statement).mappings().all()
    return [
        Player(
            id=str(row["id"]),
            name=str(row["name"] or ""),
            rating=int(row["ranking"] if row["ranking"] is not None else 1200),
            matches_played=int(row["matches_played"] or 0),
            wins=int(row["wins"] or 0),
            losses=int(row["losses"] or 0),
            avatar=row["avatar"],
            department=row["department"],
        )
        for row in rows
    ]


def fetch_matches(
    session: Session,
    *,
    group_id: str,
    season_id: str | None = None,
    match_format: MatchFormat | None = None,
) -> list[MatchResult]:
    """Fetch decisive matches in deterministic chronological order.

    Drawn matches cannot be rated and are left out.
    """
    conditions: list[Any] = [
        matches_table.c.group_id == group_id,
        matches_table.c.team1_score != matches_table.c.team2_score,
    ]
    if season_id is not None:
        conditions.append(matches_table.c.season_id == season_id)
    if match_format is not None:
        conditions.append(matches_table.c.match_type == match_format.value)

    statement = (
        select(matches_table)
        .where(*conditions)
        .order_by(matches_table.c.created_at, matches_table.c.id)
    )
    rows = session.execute(statement).mappings().all()
    return [_row_to_match(row) for row in rows]


def _row_to_match(row: Any) -> MatchResult:
    event_time = row["created_at"]
    if not isinstance(event_time, datetime):
        raise ValueError(f"match_id={row['id']} has invalid created_at={event_time!r}")

    match_format = MatchFormat(row["match_type"] or MatchFormat.TWO_VS_TWO.value)

    team1_ids = _team_ids(row, "team1", match_format)
    team2_ids = _team_ids(row, "team2", match_format)

    snapshots: list[PlayerRatingSnapshot] = []
    for slot in _PLAYER_SLOTS:
        player_id = row[f"{slot}_id"]
        pre_rating = row[f"{slot}_pre_ranking"]
        post_rating = row[f"{slot}_post_ranking"]
        if player_id is None or pre_rating is None or post_rating is None:
            continue
        snapshots.append(
            PlayerRatingSnapshot(
                player_id=str(player_id),
                pre_match_rating=int(pre_rating),
                post_match_rating=int(post_rating),
            )
        )

    return MatchResult(
        match_id=str(row["id"]),
        event_time=event_time,
        match_format=match_format,
        team1_player_ids=team1_ids,
        team2_player_ids=team2_ids,
        team1_score=int(row["team1_score"]),
        team2_score=int(row["team2_score"]),
        season_id=None if row["season_id"] is None else str(row["season_id"]),
        snapshots=tuple(snapshots),
    )


def _team_ids(row: Any, team: str, match_format: MatchFormat) -> tuple[str, ...]:
    first = row[f"{team}_player1_id"]
    second = row[f"{team}_player2_id"]
    if first is None:
        raise ValueError(f"match_id={row['id']} is missing {team}_player1_id")
    if match_format is MatchFormat.ONE_VS_ONE:
        return (str(first),)
    if second is None:
        raise ValueError(f"match_id={row['id']} is 2v2 but has no {team}_player2_id")
    return (str(first), str(second))


__all__ = [
    "fetch_matches",
    "fetch_players",
    "history_metadata",
    "matches_table",
    "players_table",
]
