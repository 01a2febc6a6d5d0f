"""Tests for decoding the PC agent status line."""

from __future__ import annotations

import pytest

from pymiair.exceptions import MiAirDecodeError
from pymiair.models.status import FanMode, PowerState, decode_status


class TestDecodeOnline:
    def test_seven_tokens_auto_mode(self) -> None:
        snapshot = decode_status("12 45 23 100 80 on auto")
        assert snapshot.dust_level == 12
        assert snapshot.humidity == 45
        assert snapshot.temperature_c == 23
        assert snapshot.illuminance == 100
        assert snapshot.filter_life_remaining == 80
        assert snapshot.power_state is PowerState.ON
        assert snapshot.fan_mode is FanMode.AUTO
        assert snapshot.favorite_level is None
        assert not snapshot.is_offline

    def test_favorite_mode_keeps_level_as_string(self) -> None:
        snapshot = decode_status("5 40 21.5 3 60 off favorite 12\n")
        assert snapshot.power_state is PowerState.OFF
        assert snapshot.fan_mode is FanMode.FAVORITE
        assert snapshot.favorite_level == "12"
        assert snapshot.temperature_c == 21.5

    def test_integral_numbers_stay_int(self) -> None:
        snapshot = decode_status("12.0 45 23 100 80 on silent")
        assert snapshot.dust_level == 12
        assert isinstance(snapshot.dust_level, int)

    def test_raw_is_kept(self) -> None:
        assert decode_status("1 2 3 4 5 on auto").raw == "1 2 3 4 5 on auto"

    def test_extra_whitespace_is_ignored(self) -> None:
        snapshot = decode_status("  1   2 3\t4 5 on   silent ")
        assert snapshot.fan_mode is FanMode.SILENT


class TestDecodeOffline:
    def test_offline_skips_other_fields(self) -> None:
        snapshot = decode_status("0 0 0 0 0 offline")
        assert snapshot.is_offline
        assert snapshot.dust_level is None
        assert snapshot.fan_mode is None

    def test_offline_ignores_garbage_in_other_tokens(self) -> None:
        assert decode_status("x y z w v offline junk").is_offline


class TestDecodeErrors:
    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_empty(self, text: str | None) -> None:
        with pytest.raises(MiAirDecodeError):
            decode_status(text)

    def test_too_few_tokens(self) -> None:
        with pytest.raises(MiAirDecodeError, match="tokens"):
            decode_status("12 45 23 100 80 on")

    def test_too_many_tokens(self) -> None:
        with pytest.raises(MiAirDecodeError, match="tokens"):
            decode_status("12 45 23 100 80 on favorite 8 extra")

    def test_non_numeric_sensor(self) -> None:
        with pytest.raises(MiAirDecodeError, match="humidity") as excinfo:
            decode_status("12 wet 23 100 80 on auto")
        assert excinfo.value.raw == "12 wet 23 100 80 on auto"

    def test_nan_sensor_rejected(self) -> None:
        with pytest.raises(MiAirDecodeError):
            decode_status("nan 45 23 100 80 on auto")

    def test_unknown_power_state(self) -> None:
        with pytest.raises(MiAirDecodeError, match="power"):
            decode_status("12 45 23 100 80 standby auto")

    def test_unknown_fan_mode(self) -> None:
        with pytest.raises(MiAirDecodeError, match="fan mode"):
            decode_status("12 45 23 100 80 on turbo")

    def test_favorite_without_level(self) -> None:
        with pytest.raises(MiAirDecodeError, match="favorite"):
            decode_status("12 45 23 100 80 on favorite")
