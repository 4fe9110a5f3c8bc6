"""Shared fixtures.

Importing :mod:`lq_dc` builds the default license gate, which reads the
persisted license from ``LQDC_STORAGE_PATH``.  Point it at a throwaway
location before anything imports the package, and give every test its own
store and a fresh default gate.
"""

from __future__ import annotations

import os
import tempfile

os.environ.setdefault(
    "LQDC_STORAGE_PATH",
    os.path.join(tempfile.mkdtemp(prefix="lqdc-tests-"), "license.json"),
)

import pytest  # noqa: E402

from lq_dc.license import reset_license_gate  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_default_gate(tmp_path, monkeypatch):
    monkeypatch.setenv("LQDC_STORAGE_PATH", str(tmp_path / "license.json"))
    reset_license_gate()
    yield
    reset_license_gate()
