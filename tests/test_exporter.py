import os

import pytest

from invoicegen import exporter
from invoicegen.errors import TemplateValidationError, UnknownTemplateError
from invoicegen.exporter import (
    ExportArtifact,
    disk_filename,
    export_filename,
    export_markup,
    export_paginated,
    save_artifact,
)


def test_export_filename(record):
    assert export_filename(record, "classic", "html") == "Invoice_INV-2526-035_classic.html"


def test_export_markup(record):
    artifact = export_markup(record, "elegant")
    assert artifact.filename == "Invoice_INV-2526-035_elegant.html"
    assert artifact.mimetype == "text/html"
    assert artifact.content.startswith(b"<!DOCTYPE html>")
    assert "26650.30 INR".encode() in artifact.content


def test_export_paginated(record):
    artifact = export_paginated(record, "bold", compress=False)
    assert artifact.filename == "Invoice_INV-2526-035_bold.pdf"
    assert artifact.mimetype == "application/pdf"
    assert artifact.content.startswith(b"%PDF")
    assert b"26650.30 INR" in artifact.content


@pytest.mark.parametrize("export", [export_markup, export_paginated])
def test_unknown_template_raises(record, export):
    with pytest.raises(UnknownTemplateError):
        export(record, "missing")


def test_export_leaves_record_alone(record):
    before = record.model_dump()
    export_markup(record, "classic")
    export_paginated(record, "premium")
    assert record.model_dump() == before


def test_markup_that_fails_check_is_rejected(record, monkeypatch):
    monkeypatch.setattr(exporter, "check_self_contained", lambda html: ["External scripts are not allowed."])
    with pytest.raises(TemplateValidationError) as exc:
        export_markup(record, "classic")
    assert exc.value.errors == ["External scripts are not allowed."]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Invoice_A_classic.html", "Invoice_A_classic.html"),
        ("Invoice_A/B_classic.pdf", "Invoice_A_B_classic.pdf"),
        ("../secret", "_secret"),
        ("a\\b\x00c", "a_bc"),
        ("...", "invoice"),
    ],
)
def test_disk_filename(name, expected):
    assert disk_filename(name) == expected


def test_save_artifact_defaults_to_export_dir(_isolate_export_dir):
    artifact = ExportArtifact("Invoice_1_classic.html", b"<html></html>", "text/html")
    path = save_artifact(artifact)
    assert path == _isolate_export_dir / "Invoice_1_classic.html"
    assert path.read_bytes() == b"<html></html>"


def test_save_artifact_overwrites(tmp_path):
    save_artifact(ExportArtifact("x.pdf", b"old", "application/pdf"), tmp_path)
    path = save_artifact(ExportArtifact("x.pdf", b"new", "application/pdf"), tmp_path)
    assert path.read_bytes() == b"new"
    assert os.listdir(tmp_path) == ["x.pdf"]


def test_failed_save_leaves_nothing_behind(tmp_path, monkeypatch):
    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(exporter.os, "replace", boom)
    with pytest.raises(OSError):
        save_artifact(ExportArtifact("x.pdf", b"data", "application/pdf"), tmp_path)
    assert os.listdir(tmp_path) == []
