"""Tests for inisplice/ini/parser.py and storage.py (files and streams)."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from inisplice import (
    IniDocument,
    IniParser,
    InvalidIniPath,
    load,
    load_or_create,
    loads
)
from inisplice.ini import detect_encoding


class TestLoadPath:
    def test_loads_file(self, sample_file: Path, sample_text: str) -> None:
        doc = load(sample_file)
        assert doc.content == sample_text
        assert doc["Section1", "Key1"] == "Value1"
        assert doc.filename == str(sample_file)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load(tmp_path / "nonexistent.ini")

    @pytest.mark.parametrize("name", ["", "   ", "bad\0name.ini"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(InvalidIniPath):
            load(name)

    def test_none_source(self) -> None:
        with pytest.raises(TypeError):
            load(None)  # type: ignore[arg-type]

    def test_unreadable_source(self) -> None:
        with pytest.raises(TypeError):
            load(42)  # type: ignore[arg-type]

    def test_line_breaks_kept(self, tmp_path: Path) -> None:
        p = tmp_path / "crlf.ini"
        p.write_bytes(b"[S]\r\nK=V\r\n")
        doc = load(p)
        assert doc.content == "[S]\r\nK=V\r\n"
        assert doc.line_break == "\r\n"

    def test_options_forwarded(self, tmp_path: Path) -> None:
        p = tmp_path / "opts.ini"
        p.write_bytes(b"[S]\nK=a\\tb\n")
        doc = load(p, allow_escapes=True)
        assert doc["s", "k"] == "a\tb"


class TestEncodings:
    @pytest.mark.parametrize(("codec", "expected"), [
        ("utf-8-sig", "utf-8-sig"),
        ("utf-16", "utf-16"),
        ("utf-16-be", None),
        ("utf-32", "utf-32"),
    ])
    def test_bom_detection(
        self, tmp_path: Path, codec: str, expected: str | None
    ) -> None:
        p = tmp_path / "bom.ini"
        p.write_bytes("[Секция]\nKey=Ж\n".encode(codec))
        assert detect_encoding(str(p)) == expected

    @pytest.mark.parametrize("codec", ["utf-8-sig", "utf-16", "utf-32"])
    def test_bom_files_load(self, tmp_path: Path, codec: str) -> None:
        p = tmp_path / "bom.ini"
        p.write_bytes("[Секция]\nKey=Ж\n".encode(codec))
        doc = load(p)
        assert doc.content == "[Секция]\nKey=Ж\n"
        assert doc["секция", "key"] == "Ж"

    def test_big_endian_bom(self, tmp_path: Path) -> None:
        p = tmp_path / "be.ini"
        p.write_bytes(b"\xfe\xff" + "K=V".encode("utf-16-be"))
        assert detect_encoding(str(p)) == "utf-16"
        assert load(p)["", "K"] == "V"

    def test_utf7_bom(self, tmp_path: Path) -> None:
        p = tmp_path / "u7.ini"
        p.write_bytes(b"+/v8-" + "K=V".encode("utf-7"))
        assert detect_encoding(str(p)) == "utf-7"
        doc = load(p)
        assert doc.content == "K=V"
        assert "\ufeff" not in doc.content

    def test_utf32_big_endian_bom(self, tmp_path: Path) -> None:
        p = tmp_path / "u32be.ini"
        p.write_bytes(b"\x00\x00\xfe\xff" + "K=V".encode("utf-32-be"))
        assert detect_encoding(str(p)) == "utf-32"
        assert load(p)["", "K"] == "V"

    def test_default_without_bom(self, tmp_path: Path) -> None:
        p = tmp_path / "plain.ini"
        p.write_bytes(b"K=V\n")
        assert detect_encoding(str(p)) is None
        assert detect_encoding(str(p), "cp1251") == "cp1251"

    def test_explicit_encoding(self, tmp_path: Path) -> None:
        p = tmp_path / "cp.ini"
        p.write_bytes("[S]\nK=Значение\n".encode("cp1251"))
        assert load(p, "cp1251")["S", "K"] == "Значение"

    def test_chardet_fallback(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        p = tmp_path / "guess.ini"
        p.write_bytes("[S]\nK=Значение по умолчанию\n".encode("cp1251"))
        with caplog.at_level(logging.WARNING):
            doc = load(p, "utf-8")
        assert "chardet" in caplog.text
        assert doc.get_sections() == ["S"]
        assert doc["S", "K"]


class TestLoadStreams:
    def test_text_stream(self, sample_text: str) -> None:
        doc = load(io.StringIO(sample_text))
        assert doc.content == sample_text

    def test_binary_stream_utf8(self, sample_text: str) -> None:
        doc = load(io.BytesIO(sample_text.encode("utf-8")))
        assert doc["Section2", "KeyA"] == "ValueA"

    def test_binary_stream_encoding(self) -> None:
        raw = "[S]\nK=Ключ\n".encode("cp1251")
        assert load(io.BytesIO(raw), "cp1251")["S", "K"] == "Ключ"

    def test_binary_stream_bom(self) -> None:
        raw = "[S]\nK=Ключ\n".encode("utf-16")
        doc = load(io.BytesIO(raw))
        assert doc.content == "[S]\nK=Ключ\n"

    def test_loads(self) -> None:
        doc = loads("[S]\nK=V\n")
        assert isinstance(doc, IniDocument)
        assert doc["S", "K"] == "V"


class TestLoadOrCreate:
    def test_creates_missing_file(self, tmp_path: Path) -> None:
        p = tmp_path / "newfile.ini"
        doc = load_or_create(p)
        assert p.exists()
        assert doc.content == ""
        assert doc.get_sections() == []

    def test_loads_existing(self, sample_file: Path) -> None:
        doc = load_or_create(sample_file)
        assert "Key1=Value1" in doc.content

    def test_rejects_blank_name(self) -> None:
        with pytest.raises(InvalidIniPath):
            load_or_create(" ")


class TestSave:
    def test_save_to_bound_file(self, sample_file: Path) -> None:
        doc = load(sample_file)
        doc["Section1", "Key1"] = "Modified"
        doc.save()
        assert "Key1=Modified" in sample_file.read_text(encoding="utf-8")
        assert load(sample_file).content == doc.content

    def test_save_default_filename(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        IniDocument("K=V\n").save()
        assert (tmp_path / "inisplice.ini").read_bytes() == b"K=V\n"

    def test_save_as_path_verbatim(self, tmp_path: Path) -> None:
        doc = IniDocument("[S]\r\nK=V\r\n")
        target = tmp_path / "out.ini"
        doc.save_as(target)
        assert target.read_bytes() == b"[S]\r\nK=V\r\n"

    def test_save_as_encoding(self, tmp_path: Path) -> None:
        doc = IniDocument("[S]\nK=Ж\n")
        target = tmp_path / "out16.ini"
        doc.save_as(target, "utf-16")
        assert load(target).content == "[S]\nK=Ж\n"

    def test_save_as_binary_stream(self) -> None:
        buf = io.BytesIO()
        IniDocument("K=Ж\n").save_as(buf)
        assert buf.getvalue() == "K=Ж\n".encode("utf-8")
        assert not buf.closed

    def test_save_as_text_stream(self) -> None:
        buf = io.StringIO()
        IniDocument("K=V\n").save_as(buf)
        assert buf.getvalue() == "K=V\n"

    def test_save_as_none(self) -> None:
        with pytest.raises(TypeError):
            IniDocument("").save_as(None)  # type: ignore[arg-type]


class TestIniParser:
    def test_read_write(self, tmp_path: Path) -> None:
        parser = IniParser(tmp_path / "p.ini", "utf-8")
        parser.touch()
        doc = parser.read()
        doc["Main", "Answer"] = "42"
        parser.write(doc)
        assert parser.read()["main", "answer"] == "42"

    def test_str(self, tmp_path: Path) -> None:
        parser = IniParser(tmp_path / "p.ini")
        assert str(parser).startswith("INI file: ")
        assert parser.filename.endswith("p.ini")

    def test_touch_keeps_existing(self, sample_file: Path) -> None:
        IniParser(sample_file).touch()
        assert "Key1=Value1" in sample_file.read_text(encoding="utf-8")
