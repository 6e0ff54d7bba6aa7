"""
Unit tests for the YAML timeline compiler.

These tests validate publication construction from dictionary documents, YAML
text, and files, including publish settings, strict validation, nested
timelines, and the rendered output order.
"""

import os
import tempfile

import pytest

from timeline_core.compiler import Publication, compile_from_dict, compile_from_file, compile_from_yaml
from timeline_core.config import RenderConfig
from timeline_core.exceptions import AssetNotFoundError, TimelineValidationError
from timeline_core.renderer import Renderer

SCRIPTS_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "scripts"))


def basic_doc():
    return {
        "name": "Main",
        "assets": [
            {"id": 1, "type": "shape", "paths": [{"color": "#000", "alpha": 1, "d": ["m", 0, 0]}]},
            {"id": 2, "type": "bitmap", "name": "Hero"},
        ],
        "frames": [
            {"frame": 0, "commands": [
                {"instance_id": 1, "asset_id": 2},
                {"instance_id": 2, "asset_id": 1, "type": "mask", "mask_instance_id": 1},
            ]},
            {"frame": 5, "commands": [{"instance_id": 2, "asset_id": 1, "type": "remove"}]},
        ],
    }


class TestCompileFromDict:
    def test_builds_library_and_stage(self):
        pub = compile_from_dict(basic_doc())

        assert isinstance(pub, Publication)
        assert set(pub.library.assets) == {1, 2}
        assert pub.stage.name == "Main"
        assert [c.local_name for c in pub.stage.children] == ["instance1"]
        assert len(pub.stage.masks) == 1
        assert pub.stage.masks[0].duration == 5

    def test_stage_name_falls_back_to_config(self):
        doc = basic_doc()
        del doc["name"]
        assert compile_from_dict(doc).stage.name == "Stage"
        assert compile_from_dict(doc, RenderConfig(stage_name="Root")).stage.name == "Root"

    def test_configured_stage_name_overrides_document_name(self):
        pub = compile_from_dict(basic_doc(), RenderConfig(stage_name="Root"))
        assert pub.stage.name == "Root"
        assert "lib.Root = class" in pub.render()
        assert "lib.Main" not in pub.render()

    def test_publish_section_read_into_config(self):
        doc = basic_doc()
        doc["publish"] = {"compress": True}
        pub = compile_from_dict(doc)
        assert pub.config.compress is True
        assert pub.render().rstrip().endswith("};")
        assert "this.ac(instance2, instance1);" in pub.render()

    def test_empty_document(self):
        pub = compile_from_dict({})
        assert pub.stage.children == []
        assert pub.render() == Renderer().template("container", {"id": "Stage", "contents": ""})

    def test_unknown_asset_propagates(self):
        doc = basic_doc()
        doc["frames"][0]["commands"].append({"instance_id": 9, "asset_id": 77})
        with pytest.raises(AssetNotFoundError):
            compile_from_dict(doc)

    def test_strict_validation_rejects_errors(self):
        doc = basic_doc()
        doc["frames"].append({"frame": 2, "commands": []})
        with pytest.raises(TimelineValidationError) as excinfo:
            compile_from_dict(doc, RenderConfig(strict_validation=True))
        assert "frame_order" in excinfo.value.results

    def test_strict_validation_reports_missing_assets_before_building(self):
        doc = basic_doc()
        doc["frames"][0]["commands"].append({"instance_id": 9, "asset_id": 77})
        with pytest.raises(TimelineValidationError):
            compile_from_dict(doc, RenderConfig(strict_validation=True))

    def test_non_strict_ignores_warnings_and_order(self):
        doc = basic_doc()
        doc["frames"].append({"frame": 2, "commands": [{"instance_id": 1, "asset_id": 2, "type": "move"}]})
        pub = compile_from_dict(doc)
        assert sorted(pub.stage.instances_map[1].frames) == [0, 2]


class TestPublicationRender:
    def test_shapes_then_nested_then_stage(self):
        doc = basic_doc()
        doc["assets"].append({"id": 3, "type": "container", "name": "Loop", "frames": [
            {"frame": 0, "commands": [{"instance_id": 1, "asset_id": 1}]},
        ]})
        out = compile_from_dict(doc).render()

        shape_at = out.index("lib.Shape1 = new animate.GraphicsData")
        loop_at = out.index("lib.Loop = class")
        stage_at = out.index("lib.Main = class")
        assert shape_at < loop_at < stage_at

    def test_stage_contents(self):
        out = compile_from_dict(basic_doc()).render(Renderer())
        assert (
            "const instance2 = new lib.Shape1();"
            "const instance1 = new lib.Hero().setMask(instance2);"
            "this.addChild(instance2, instance1);"
        ) in out


class TestCompileFromYamlAndFile:
    def test_compile_from_yaml_text(self):
        yaml_text = """
name: Yaml
assets:
  - {id: a, type: bitmap}
frames:
  - frame: 0
    commands:
      - {instance_id: 1, asset_id: a}
      - {instance_id: 2, asset_id: a}
"""
        pub = compile_from_yaml(yaml_text)
        assert pub.stage.name == "Yaml"
        assert [c.local_name for c in pub.stage.children] == ["instance2", "instance1"]

    def test_compile_from_empty_yaml(self):
        assert compile_from_yaml("").stage.instances_map == {}

    def test_compile_from_file_roundtrip(self):
        yaml_text = """
assets:
  - {id: 1, type: sound}
frames:
  - frame: 0
    commands:
      - {instance_id: 4, asset_id: 1}
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_text)
            temp_path = f.name
        try:
            pub = compile_from_file(temp_path)
            assert 4 in pub.stage.instances_map
            assert pub.stage.children == []
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)

    def test_bundled_masked_stage(self):
        pub = compile_from_file(os.path.join(SCRIPTS_DIR, "masked_stage.yaml"))
        stage = pub.stage

        assert [c.local_name for c in stage.children] == ["instance4", "instance2", "instance1"]
        assert [(m.mask.local_name, m.instance.local_name, m.frame, m.duration) for m in stage.masks] == [
            ("instance3", "instance1", 0, 12),
        ]
        assert "this.addChild(instance3, instance4, instance2, instance1);" in pub.render()
