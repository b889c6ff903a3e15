"""Combo Processor - Slippi replay decoder adapter.

Wraps py-slippi's ``Game`` parser and flattens its per-port frame data into
the ``GameReplay`` structure the detectors consume.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from slippi import Game
from slippi.parse import ParseError

from ..exceptions import DecodeError
from .replay_models import GameReplay, PlayerFrame, PlayerInfo, ReplayMetadata

logger = logging.getLogger(__name__)


def _enum_name(value: Any, default: str = "Unknown") -> str:
    name = getattr(value, "name", None)
    if isinstance(name, str) and name:
        return name
    if value is None:
        return default
    return str(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _player_infos(game: Game) -> Tuple[PlayerInfo, ...]:
    start = getattr(game, "start", None)
    start_players = getattr(start, "players", None) or ()
    meta_players = getattr(getattr(game, "metadata", None), "players", None) or ()

    infos: List[PlayerInfo] = []
    for port, player in enumerate(start_players):
        if player is None:
            continue
        netplay = None
        if port < len(meta_players) and meta_players[port] is not None:
            netplay = getattr(meta_players[port], "netplay", None)
        team = getattr(player, "team", None)
        infos.append(
            PlayerInfo(
                port=port,
                character=_enum_name(getattr(player, "character", None)),
                tag=getattr(player, "tag", None) or None,
                netplay_name=getattr(netplay, "name", None) if netplay else None,
                team=_optional_int(team) if team is not None else None,
                is_cpu=_enum_name(getattr(player, "type", None)) == "CPU",
            )
        )
    return tuple(infos)


def _metadata(game: Game, path: Path) -> ReplayMetadata:
    meta = getattr(game, "metadata", None)
    start = getattr(game, "start", None)
    duration = getattr(meta, "duration", None) if meta is not None else None
    if duration is None:
        duration = len(getattr(game, "frames", []) or [])
    return ReplayMetadata(
        source_path=str(path),
        stage=_enum_name(getattr(start, "stage", None)),
        players=_player_infos(game),
        date=getattr(meta, "date", None) if meta is not None else None,
        duration_frames=duration,
    )


def _player_frames(game: Game) -> Tuple[PlayerFrame, ...]:
    result: List[PlayerFrame] = []
    for frame in game.frames:
        for port, port_data in enumerate(frame.ports):
            if port_data is None:
                continue
            post = port_data.leader.post
            if post is None:
                result.append(PlayerFrame(frame.index, port, None, None, None))
                continue
            result.append(
                PlayerFrame(
                    frame=frame.index,
                    port=port,
                    state=_optional_int(post.state),
                    percent=float(post.damage) if post.damage is not None else None,
                    stocks=_optional_int(post.stocks),
                    last_attack_landed=_optional_int(post.last_attack_landed),
                    last_hit_by=_optional_int(post.last_hit_by),
                )
            )
    return tuple(result)


def decode_replay(path: Union[str, Path]) -> GameReplay:
    """Parse a ``.slp`` file into a GameReplay.

    Raises:
        DecodeError: the file cannot be read or parsed.
    """
    replay_path = Path(path)
    try:
        game = Game(str(replay_path))
    except ParseError as exc:
        raise DecodeError(str(exc), replay_path=str(replay_path)) from exc
    except Exception as exc:  # noqa: BLE001 - py-slippi raises bare Exception on gaps
        raise DecodeError(f"Failed to parse replay: {exc}", replay_path=str(replay_path)) from exc

    frames = _player_frames(game)
    logger.debug("Decoded %s: %d player frames", replay_path.name, len(frames))
    return GameReplay(metadata=_metadata(game, replay_path), frames=frames)
