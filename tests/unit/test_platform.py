"""Tests for lq_dc.toolkit.platform."""

from __future__ import annotations

import pytest

from lq_dc.toolkit import platform
from lq_dc.toolkit.platform import EnvType, get_env_type, get_runtime_info


class TestEnvType:
    @pytest.mark.parametrize(
        ("sys_platform", "expected"),
        [("emscripten", EnvType.BROWSER), ("wasi", EnvType.WASI), ("linux", EnvType.NATIVE), ("", EnvType.UNKNOWN)],
    )
    def test_classification(self, monkeypatch: pytest.MonkeyPatch, sys_platform: str, expected: EnvType) -> None:
        monkeypatch.setattr(platform.sys, "platform", sys_platform)
        assert get_env_type() is expected

    def test_predicates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(platform.sys, "platform", "emscripten")
        assert platform.is_browser() is True
        assert platform.is_native() is False
        assert platform.is_wasi() is False

    def test_test_host_is_native(self) -> None:
        assert platform.is_native() is True


class TestRuntimeInfo:
    def test_keys(self) -> None:
        info = get_runtime_info()
        assert set(info) == {
            "env",
            "system",
            "release",
            "machine",
            "implementation",
            "python_version",
            "is_64bit",
        }
        assert info["env"] == "native"
        assert isinstance(info["is_64bit"], bool)
