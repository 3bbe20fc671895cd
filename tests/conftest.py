"""Shared fixtures for the inisplice test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from inisplice import IniDocument

SAMPLE_INI = """\
; global key, before any section
GlobalKey=GlobalValue
; comment
[Section1]
Key1=Value1
Key2=Value2

[Section2]
KeyA=ValueA
KeyB=ValueB
"""


@pytest.fixture()
def sample_doc() -> IniDocument:
    return IniDocument(SAMPLE_INI)


@pytest.fixture()
def sample_file(tmp_path: Path) -> Path:
    p = tmp_path / "sample.ini"
    p.write_bytes(SAMPLE_INI.encode("utf-8"))
    return p


@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_INI
