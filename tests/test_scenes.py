import xml.etree.ElementTree as ET

import numpy as np
import pytest

from lowpo.scenes import (
    InstanceController,
    load_physics_data,
    parse_animations,
    parse_skeleton_node,
    parse_visual_scenes_animated,
    parse_visual_scenes_skeletons,
    parse_visual_scenes_static,
)

IDENTITY = "1 0 0 0 0 1 0 0 0 0 1 0 0 0 0 1"
ARMATURE = "0.09427643 0 0 0 0 0.09427643 4.12095e-9 0 0 -4.12095e-9 0.09427643 0 0 0 0 1"
TORSO = "1 0 0 0 0 -0.06466545 -0.997907 0 0 0.997907 -0.06466532 3.210999 0 0 0 1"
CHEST = (
    "1 7.10543e-15 4.76837e-7 0 -7.13595e-8 0.9887388 0.1496516 1.482405 "
    "-4.71468e-7 -0.1496516 0.9887387 -2.98023e-8 0 0 0 1"
)

SCENE = f"""
<library_visual_scenes>
  <visual_scene id="Scene" name="Scene">
    <node id="Armature" name="Armature" type="NODE">
      <matrix sid="transform">{ARMATURE}</matrix>
      <node id="Armature_Torso" name="Torso" sid="Torso" type="JOINT">
        <matrix sid="transform">{TORSO}</matrix>
        <node id="Armature_Chest" name="Chest" sid="Chest" type="JOINT">
          <matrix sid="transform">{CHEST}</matrix>
        </node>
        <node id="Armature_Upper_Leg_L" name="Upper_Leg.L" sid="Upper_Leg_L" type="JOINT">
          <matrix sid="transform">{IDENTITY}</matrix>
        </node>
      </node>
    </node>
    <node id="Cube" name="Cube" type="NODE">
      <matrix sid="transform">{IDENTITY}</matrix>
      <instance_controller url="#Armature_Cube-skin"/>
    </node>
    <node id="Book" name="Book" type="NODE">
      <matrix sid="transform">1 0 0 5 0 1 0 6 0 0 1 7 0 0 0 1</matrix>
      <instance_geometry url="#Book_001-mesh" name="Book"/>
    </node>
    <node id="Table" name="Table" type="NODE">
      <matrix sid="transform">{IDENTITY}</matrix>
      <instance_geometry url="#Table-mesh" name="Table"/>
    </node>
  </visual_scene>
</library_visual_scenes>
"""

ANIMATIONS = f"""
<library_animations>
  <animation id="Armature_Torso_pose_matrix">
    <source id="Armature_Torso_pose_matrix-input">
      <float_array id="a" count="2">0 0.5</float_array>
    </source>
    <source id="Armature_Torso_pose_matrix-output">
      <float_array id="b" count="32">{IDENTITY} {TORSO}</float_array>
    </source>
    <sampler id="Armature_Torso_pose_matrix-sampler">
      <input semantic="INPUT" source="#Armature_Torso_pose_matrix-input"/>
      <input semantic="OUTPUT" source="#Armature_Torso_pose_matrix-output"/>
    </sampler>
  </animation>
  <animation id="Armature_Chest_pose_matrix">
    <source id="c-input"><float_array id="c" count="1">0</float_array></source>
    <source id="c-output"><float_array id="d" count="16">{CHEST}</float_array></source>
    <sampler id="c-sampler">
      <input semantic="INPUT" source="#c-input"/>
      <input semantic="OUTPUT" source="#c-output"/>
    </sampler>
  </animation>
</library_animations>
"""


@pytest.fixture
def scene():
    return ET.fromstring(SCENE)


def test_parse_animations_counts_and_ids():
    result = parse_animations(ET.fromstring(ANIMATIONS))
    assert set(result) == {"Armature_Torso_pose_matrix", "Armature_Chest_pose_matrix"}
    torso = result["Armature_Torso_pose_matrix"]
    assert torso.id == "Armature_Torso_pose_matrix"
    assert torso.time_stamps == [0.0, 0.5]
    assert len(torso.matrices) == 2
    assert len(result["Armature_Chest_pose_matrix"].matrices) == 1


def test_parse_animations_matrices_are_row_major():
    torso = parse_animations(ET.fromstring(ANIMATIONS))["Armature_Torso_pose_matrix"]
    assert np.array_equal(torso.matrices[0], np.eye(4))
    assert torso.matrices[1][2, 3] == pytest.approx(3.210999)
    assert torso.matrices[1][1, 2] == pytest.approx(-0.997907)


def test_parse_animations_rejects_partial_matrix():
    xml = """
    <library_animations>
      <animation id="x">
        <source id="i"><float_array>0</float_array></source>
        <source id="o"><float_array>1 2 3</float_array></source>
        <sampler><input semantic="INPUT" source="#i"/><input semantic="OUTPUT" source="#o"/></sampler>
      </animation>
    </library_animations>
    """
    with pytest.raises(ValueError):
        parse_animations(ET.fromstring(xml))


def test_parse_visual_scenes_static(scene):
    result = parse_visual_scenes_static(scene)
    assert set(result) == {"Book_001", "Table"}
    book = result["Book_001"]
    assert book.id == "Book_001"
    assert book.name == "Book"
    assert list(book.matrix[:3, 3]) == [5.0, 6.0, 7.0]
    for instance in result.values():
        assert len(instance.id) > 0
        assert len(instance.name) > 0


def test_parse_visual_scenes_animated(scene):
    result = parse_visual_scenes_animated(scene)
    assert len(result) == 1
    assert result["Cube"] == InstanceController("Cube", "Cube", "Armature_Cube-skin")


def test_parse_visual_scenes_skeletons(scene):
    result = parse_visual_scenes_skeletons(scene)
    assert list(result) == ["Armature"]
    skeleton = result["Armature"]
    assert skeleton.id == "Armature"
    assert skeleton.name == "Armature"
    assert skeleton.sid == ""
    assert skeleton.matrix[0, 0] == pytest.approx(0.09427643)
    assert skeleton.matrix[1, 2] == pytest.approx(4.12095e-9)
    assert skeleton.matrix[2, 1] == pytest.approx(-4.12095e-9)
    assert len(skeleton.children) == 1

    torso = skeleton.children[0]
    assert (torso.id, torso.name, torso.sid) == ("Armature_Torso", "Torso", "Torso")
    assert torso.matrix[2, 3] == pytest.approx(3.210999)
    assert len(torso.children) == 2

    chest = torso.children[0]
    assert (chest.id, chest.name, chest.sid) == ("Armature_Chest", "Chest", "Chest")
    assert chest.matrix[1, 3] == pytest.approx(1.482405)
    assert chest.children == []

    leg = torso.children[1]
    assert (leg.id, leg.name, leg.sid) == (
        "Armature_Upper_Leg_L",
        "Upper_Leg.L",
        "Upper_Leg_L",
    )


def test_parse_skeleton_node_requires_sid():
    node = ET.fromstring(f'<node id="a" name="a"><matrix>{IDENTITY}</matrix></node>')
    with pytest.raises(ValueError):
        parse_skeleton_node(node)


def test_parse_skeleton_node_recurses():
    node = ET.fromstring(
        f'<node id="a" name="A" sid="sa"><matrix>{IDENTITY}</matrix>'
        f'<node id="b" name="B" sid="sb"><matrix>{IDENTITY}</matrix></node></node>'
    )
    result = parse_skeleton_node(node)
    assert result.sid == "sa"
    assert [child.id for child in result.children] == ["b"]


def test_load_physics_data(tmp_path):
    path = tmp_path / "physics_data.xml"
    path.write_text(
        '<physics version="1.0.0">\n'
        '    <object name="Player">\n'
        '        <attribute name="mass">\n'
        "            10\n"
        "        </attribute>\n"
        "    </object>\n"
        "</physics>\n"
    )
    result = load_physics_data(path)
    assert result.names == ["Player"]
    assert result.masses == [10.0]
    assert result.inertia_tensors == []


def test_load_physics_data_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_physics_data(tmp_path / "missing.xml")


def test_load_physics_data_wrong_root(tmp_path):
    path = tmp_path / "other.xml"
    path.write_text("<COLLADA/>")
    with pytest.raises(ValueError):
        load_physics_data(path)