import json

from PIL import Image

from app.errors import AuthenticationError
from app.models import ExportResult
from scripts import export_images


def _write_png(path, size=(8, 6)):
    Image.new("RGB", size).save(path, format="PNG")


def test_collect_image_paths_expands_directories(tmp_path):
    _write_png(tmp_path / "b.png")
    _write_png(tmp_path / "a.PNG")
    (tmp_path / "readme.md").write_text("not an image")
    extra = tmp_path / "extra.gif"
    extra.write_bytes(b"GIF89a")

    paths = export_images.collect_image_paths([tmp_path])

    assert [p.name for p in paths] == ["a.PNG", "b.png", "extra.gif"]


def test_probe_images_skips_unreadable_files(tmp_path):
    _write_png(tmp_path / "ok.png", size=(12, 9))
    (tmp_path / "bad.png").write_bytes(b"nope")

    images = export_images.probe_images([tmp_path / "ok.png", tmp_path / "bad.png"])

    assert [(i.name, i.width, i.height) for i in images] == [("ok.png", 12, 9)]


def test_main_without_images_fails(tmp_path, capsys):
    assert export_images.main([str(tmp_path)]) == 1
    assert "No images provided" in capsys.readouterr().err


def test_main_prints_result(tmp_path, capsys, monkeypatch):
    _write_png(tmp_path / "cat.png")
    calls = []

    async def fake_run(images, spreadsheet_id):
        calls.append((images, spreadsheet_id))
        return ExportResult(spreadsheetId="sheet-abc", url="https://docs.google.com/spreadsheets/d/sheet-abc", imageCount=len(images))

    monkeypatch.setattr(export_images, "run", fake_run)

    assert export_images.main([str(tmp_path), "--spreadsheet-id", "sheet-abc"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {
        "success": True,
        "spreadsheetId": "sheet-abc",
        "url": "https://docs.google.com/spreadsheets/d/sheet-abc",
        "imageCount": 1,
    }
    ((images, spreadsheet_id),) = calls
    assert spreadsheet_id == "sheet-abc"
    assert images[0].name == "cat.png"


def test_main_reports_public_message_on_failure(tmp_path, capsys, monkeypatch):
    _write_png(tmp_path / "cat.png")

    async def failing_run(images, spreadsheet_id):
        raise AuthenticationError('{"error": "invalid_grant"}')

    monkeypatch.setattr(export_images, "run", failing_run)

    assert export_images.main([str(tmp_path)]) == 1
    assert "Failed to authenticate with Google" in capsys.readouterr().err


def test_probe_images_skips_missing_files(tmp_path):
    _write_png(tmp_path / "ok.png")

    images = export_images.probe_images([tmp_path / "nope.png", tmp_path / "ok.png"])

    assert [i.name for i in images] == ["ok.png"]


def test_main_with_only_missing_files_fails(tmp_path, capsys):
    assert export_images.main([str(tmp_path / "nope.png")]) == 1
    assert "No images provided" in capsys.readouterr().err
