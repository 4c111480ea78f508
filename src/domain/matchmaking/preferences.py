"""Per-player role statistics and position preference estimation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from math import floor

from domain.common import MatchResult, Player
from domain.matchmaking.common import MatchmakingParameters, PositionPreference
from domain.protocol import MatchFormat, Role

NEUTRAL_WIN_RATE = 50.0


@dataclass(frozen=True)
class PositionStats:
    games_as_attacker: int = 0
    games_as_defender: int = 0
    wins_as_attacker: int = 0
    wins_as_defender: int = 0
    losses_as_attacker: int = 0
    losses_as_defender: int = 0
    win_rate_as_attacker: float = 0.0
    win_rate_as_defender: float = 0.0

    @property
    def total_games(self) -> int:
        return self.games_as_attacker + self.games_as_defender


def _win_rate_percent(wins: int, games: int) -> float:
    if games <= 0:
        return 0.0
    return float(floor((wins / games) * 100.0 + 0.5))


def derive_position_stats(player_id: str, matches: Iterable[MatchResult]) -> PositionStats:
    """Count games and wins per role from 2v2 history (slot 0 attacks, slot 1 defends)."""
    games = {Role.ATTACKER: 0, Role.DEFENDER: 0}
    wins = {Role.ATTACKER: 0, Role.DEFENDER: 0}

    for match in matches:
        if match.match_format is not MatchFormat.TWO_VS_TWO:
            continue
        team = match.team_of(player_id)
        if team is None:
            continue
        team_ids = match.team1_player_ids if team == 1 else match.team2_player_ids
        role = Role.ATTACKER if team_ids[0] == player_id else Role.DEFENDER
        games[role] += 1
        if match.player_won(player_id):
            wins[role] += 1

    return PositionStats(
        games_as_attacker=games[Role.ATTACKER],
        games_as_defender=games[Role.DEFENDER],
        wins_as_attacker=wins[Role.ATTACKER],
        wins_as_defender=wins[Role.DEFENDER],
        losses_as_attacker=games[Role.ATTACKER] - wins[Role.ATTACKER],
        losses_as_defender=games[Role.DEFENDER] - wins[Role.DEFENDER],
        win_rate_as_attacker=_win_rate_percent(wins[Role.ATTACKER], games[Role.ATTACKER]),
        win_rate_as_defender=_win_rate_percent(wins[Role.DEFENDER], games[Role.DEFENDER]),
    )


def calculate_position_preference(
    player: Player,
    stats: PositionStats | None = None,
    params: MatchmakingParameters = MatchmakingParameters(),
) -> PositionPreference:
    """Estimate a player's role profile.

    Without role history the profile is neutral (50/50, no preferred role) with
    ``neutral_confidence``: the player is unmeasured rather than known-average.
    Otherwise confidence ramps linearly to 1 at ``confidence_games`` games and a
    preferred role needs a win-rate lead above ``preference_threshold`` points.
    """
    if stats is None or stats.total_games == 0:
        return PositionPreference(
            player_id=player.id,
            attacker_win_rate=NEUTRAL_WIN_RATE,
            defender_win_rate=NEUTRAL_WIN_RATE,
            preferred_role=None,
            confidence=params.neutral_confidence,
        )

    confidence = min(stats.total_games / float(params.confidence_games), 1.0)

    preferred_role: Role | None = None
    if stats.win_rate_as_attacker > stats.win_rate_as_defender + params.preference_threshold:
        preferred_role = Role.ATTACKER
    elif stats.win_rate_as_defender > stats.win_rate_as_attacker + params.preference_threshold:
        preferred_role = Role.DEFENDER

    return PositionPreference(
        player_id=player.id,
        attacker_win_rate=stats.win_rate_as_attacker,
        defender_win_rate=stats.win_rate_as_defender,
        preferred_role=preferred_role,
        confidence=confidence,
    )


def estimate_position_preferences(
    players: Sequence[Player],
    matches: Sequence[MatchResult],
    params: MatchmakingParameters = MatchmakingParameters(),
) -> dict[str, PositionPreference]:
    """Derive a preference for every player from shared match history."""
    return {
        player.id: calculate_position_preference(
            player,
            derive_position_stats(player.id, matches),
            params,
        )
        for player in players
    }
