"""Tests for the typer CLI."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from resume_builder.cli import app

runner = CliRunner()


@pytest.fixture
def document_file(tmp_path, sample_document):
    path = tmp_path / "resume.json"
    path.write_text(sample_document.to_json(), encoding="utf-8")
    return path


class TestRender:
    def test_writes_pdf(self, tmp_path, document_file):
        output = tmp_path / "out" / "resume.pdf"
        with patch("resume_builder.export.exporter.render_pdf", return_value=b"%PDF-fake"):
            result = runner.invoke(app, ["render", str(document_file), "-o", str(output), "--html"])
        assert result.exit_code == 0, result.output
        assert output.read_bytes() == b"%PDF-fake"
        assert "Jordan Lee" in output.with_suffix(".html").read_text(encoding="utf-8")

    def test_missing_document(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1


class TestGenerate:
    def test_unknown_operation(self, document_file):
        result = runner.invoke(app, ["generate", "poem", str(document_file)])
        assert result.exit_code == 1
        assert "Unknown operation" in result.output


class TestCheckPassword:
    def test_weak_password(self):
        result = runner.invoke(app, ["check-password", "--password", "password"])
        assert result.exit_code == 1
        assert "Contains numbers" in result.output

    def test_strong_password(self, strong_password):
        result = runner.invoke(app, ["check-password", "--password", strong_password])
        assert result.exit_code == 0
