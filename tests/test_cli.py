"""
Tests for the timeline publisher command-line front end.
"""

import json
import os
import sys

import pytest

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SCRIPTS_DIR = os.path.join(REPO_ROOT, "scripts")
MASKED_STAGE = os.path.join(SCRIPTS_DIR, "masked_stage.yaml")


def _ensure_scripts_on_path():
    if SCRIPTS_DIR not in sys.path:
        sys.path.insert(0, SCRIPTS_DIR)


_ensure_scripts_on_path()

import timeline_cli  # noqa: E402


class TestCliUtilities:
    def test_version(self, capsys):
        from timeline_core import __version__

        assert timeline_cli.main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == __version__

    def test_list_scenes(self, capsys):
        assert timeline_cli.main(["--list-scenes"]) == 0
        scenes = json.loads(capsys.readouterr().out)
        assert MASKED_STAGE in scenes

    def test_missing_yaml(self, capsys):
        assert timeline_cli.main([]) == 2
        assert "missing YAML path" in capsys.readouterr().err


class TestCliPublish:
    def test_prints_rendered_code(self, capsys):
        assert timeline_cli.main([MASKED_STAGE]) == 0
        out = capsys.readouterr().out
        assert "lib.Stage = class extends animate.Container" in out
        assert "this.addChild(instance3, instance4, instance2, instance1);" in out

    def test_compress_and_stage_name(self, capsys):
        assert timeline_cli.main([MASKED_STAGE, "--compress", "--stage-name", "Other"]) == 0
        out = capsys.readouterr().out
        assert "lib.Other = class extends animate.Container" in out
        assert "lib.Stage = class" not in out
        assert "this.ac(" in out

    def test_stage_name_written_to_out_file(self, tmp_path):
        out_path = tmp_path / "stage.js"
        assert timeline_cli.main([MASKED_STAGE, "--stage-name", "Custom", "--out", str(out_path)]) == 0
        text = out_path.read_text(encoding="utf-8")
        assert "lib.Custom = class extends animate.Container" in text
        # Nested timelines keep their own names
        assert "lib.Eyes = class" in text

    def test_writes_out_and_shapes(self, tmp_path):
        out_path = tmp_path / "stage.js"
        shapes_path = tmp_path / "shapes.json"
        code = timeline_cli.main([MASKED_STAGE, "--out", str(out_path), "--shapes-out", str(shapes_path)])
        assert code == 0
        assert "lib.Shape2 = new animate.GraphicsData" in out_path.read_text(encoding="utf-8")
        shapes = json.loads(shapes_path.read_text(encoding="utf-8"))
        assert set(shapes) == {"Shape1", "Shape2"}
        assert shapes["Shape2"].count("cp") == 1
        assert shapes["Shape2"][4:7] == ["m", 10.26, 10.0]

    def test_dry_run_summary(self, capsys):
        assert timeline_cli.main([MASKED_STAGE, "--dry-run"]) == 0
        assert json.loads(capsys.readouterr().out) == {"instances": 5, "children": 3, "masks": 1}

    def test_stats(self, capsys):
        assert timeline_cli.main([MASKED_STAGE, "--stats", "--dry-run"]) == 0
        stats = json.loads(capsys.readouterr().out)
        assert stats["sounds"] == 1
        assert stats["masks_timeline"][0]["duration"] == 12

    def test_export_graphml(self, tmp_path, capsys):
        pytest.importorskip("networkx")
        path = tmp_path / "stage.graphml"
        assert timeline_cli.main([MASKED_STAGE, "--dry-run", "--export-graphml", str(path)]) == 0
        assert path.exists()


class TestCliValidate:
    def test_clean_timeline(self, capsys):
        assert timeline_cli.main([MASKED_STAGE, "--validate"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["summary"]["errors"] == 0

    def test_errors_exit_non_zero(self, tmp_path, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text(
            "assets: [{id: 1, type: bitmap}]\n"
            "frames:\n"
            "  - {frame: 2, commands: [{instance_id: 1, asset_id: 1}]}\n"
            "  - {frame: 1, commands: [{instance_id: 1, asset_id: 5}]}\n",
            encoding="utf-8",
        )
        assert timeline_cli.main([str(bad), "--validate"]) == 1
        report = json.loads(capsys.readouterr().out)
        assert report["summary"]["errors"] == 3
