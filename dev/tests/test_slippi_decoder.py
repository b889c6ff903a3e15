from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest
from slippi.parse import ParseError

from combo_processor.core import slippi_decoder
from combo_processor.exceptions import DecodeError


def _post(state, damage, stocks=4, last_hit_by=None):
    return SimpleNamespace(state=state, damage=damage, stocks=stocks,
                           last_attack_landed=None, last_hit_by=last_hit_by)


def _port(post):
    return SimpleNamespace(leader=SimpleNamespace(post=post))


class _FakeGame:
    def __init__(self, path):
        self.path = path
        self.start = SimpleNamespace(
            stage=SimpleNamespace(name="BATTLEFIELD"),
            players=(
                SimpleNamespace(character=SimpleNamespace(name="FOX"), type=SimpleNamespace(name="HUMAN"),
                                tag="", team=None),
                None,
                SimpleNamespace(character=SimpleNamespace(name="MARTH"), type=SimpleNamespace(name="CPU"),
                                tag="CPU", team=None),
                None,
            ),
        )
        self.metadata = SimpleNamespace(
            date=datetime(2021, 1, 2, 3, 4, 5),
            duration=2,
            players=(SimpleNamespace(netplay=SimpleNamespace(name="Mango", code="MANG#0")), None, None, None),
        )
        self.frames = [
            SimpleNamespace(index=-123, ports=(_port(_post(14, 0.0)), None, _port(_post(14, 0.0)), None)),
            SimpleNamespace(index=-122, ports=(_port(_post(75, 12.0, last_hit_by=2)), None,
                                               _port(_post(44, 0.0)), None)),
        ]


def test_decode_flattens_frames_and_metadata(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(slippi_decoder, "Game", _FakeGame)

    replay = slippi_decoder.decode_replay(tmp_path / "game.slp")

    assert replay.ports == (0, 2)
    assert len(replay.frames) == 4
    hit = replay.frames[2]
    assert (hit.frame, hit.port, hit.state, hit.percent, hit.last_hit_by) == (-122, 0, 75, 12.0, 2)

    meta = replay.metadata
    assert meta.stage == "BATTLEFIELD"
    assert meta.duration_frames == 2
    assert meta.source_path == str(tmp_path / "game.slp")
    assert [p.display_name for p in meta.players] == ["Mango", "CPU"]
    assert meta.player(2).is_cpu is True
    assert meta.player(0).character == "FOX"


def test_missing_post_frame_is_kept_as_empty(monkeypatch, tmp_path: Path) -> None:
    class _Gappy(_FakeGame):
        def __init__(self, path):
            super().__init__(path)
            self.frames[1].ports = (_port(None), None, _port(_post(44, 0.0)), None)

    monkeypatch.setattr(slippi_decoder, "Game", _Gappy)

    replay = slippi_decoder.decode_replay(tmp_path / "game.slp")

    assert replay.frames[2].state is None
    assert replay.frames[2].percent is None


def test_parse_error_becomes_decode_error(monkeypatch, tmp_path: Path) -> None:
    def _raise(path):
        raise ParseError("bad ubjson", filename=path, pos=16)

    monkeypatch.setattr(slippi_decoder, "Game", _raise)

    with pytest.raises(DecodeError) as excinfo:
        slippi_decoder.decode_replay(tmp_path / "broken.slp")
    assert excinfo.value.details["replay_path"] == str(tmp_path / "broken.slp")


def test_unreadable_file_becomes_decode_error(tmp_path: Path) -> None:
    path = tmp_path / "garbage.slp"
    path.write_bytes(b"\x00\x01 definitely not a replay")

    with pytest.raises(DecodeError):
        slippi_decoder.decode_replay(path)


@pytest.mark.integration
def test_decoder_errors_surface_through_detection(monkeypatch, tmp_path: Path) -> None:
    from combo_processor.config.models import DetectionMode
    from combo_processor.detectors import detect

    class _Gappy(_FakeGame):
        def __init__(self, path):
            super().__init__(path)
            self.frames[1].ports = (_port(None), None, _port(_post(44, 0.0)), None)

    monkeypatch.setattr(slippi_decoder, "Game", _Gappy)
    replay = slippi_decoder.decode_replay(tmp_path / "game.slp")

    with pytest.raises(DecodeError):
        detect(replay, DetectionMode.ONLY_CONVERSIONS)
