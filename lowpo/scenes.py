"""Reading animations, scene instances, skeletons and physics data."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .collada import split_floats

ANIMATION_INPUT = "INPUT"
ANIMATION_OUTPUT = "OUTPUT"
MASS = "mass"

_MATRIX_SIZE = 16


@dataclass(eq=False)
class AnimationNode:
    """Keyframes of one animated bone: time stamps and their 4x4 matrices."""

    id: str
    time_stamps: list[float] = field(default_factory=list)
    matrices: list[np.ndarray] = field(default_factory=list)


@dataclass(eq=False)
class SkeletonNode:
    """One joint of a skeleton hierarchy from a visual scene."""

    id: str
    name: str
    sid: str
    matrix: np.ndarray
    children: list[SkeletonNode] = field(default_factory=list)


@dataclass(eq=False)
class InstanceGeometry:
    """World transform of a geometry placed in the visual scene."""

    id: str
    name: str
    matrix: np.ndarray


@dataclass
class InstanceController:
    """A scene node that instantiates a skin controller."""

    id: str
    name: str
    url: str


@dataclass(eq=False)
class PhysicsData:
    """Per-object physical attributes read from a physics description file."""

    names: list[str] = field(default_factory=list)
    masses: list[float] = field(default_factory=list)
    inertia_tensors: list[np.ndarray] = field(default_factory=list)


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    return (child for child in element if _local_name(child.tag) == name)


def _find(element: ET.Element, name: str) -> ET.Element | None:
    return next(_children(element, name), None)


def _first(element: ET.Element, name: str) -> ET.Element:
    child = _find(element, name)
    if child is None:
        raise ValueError(f"<{_local_name(element.tag)}> has no <{name}> child")
    return child


def _attr(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ValueError(f"<{_local_name(element.tag)}> has no {name!r} attribute")
    return value


def _text(element: ET.Element) -> str:
    return element.text or ""


def _matrices(values: list[float]) -> list[np.ndarray]:
    """Group a flat row-major float list into 4x4 matrices."""
    if len(values) % _MATRIX_SIZE:
        raise ValueError(f"{len(values)} floats do not make whole 4x4 matrices")
    return [
        np.array(values[start : start + _MATRIX_SIZE], dtype=float).reshape(4, 4)
        for start in range(0, len(values), _MATRIX_SIZE)
    ]


def _node_matrix(node: ET.Element) -> np.ndarray:
    (matrix,) = _matrices(split_floats(_text(_first(node, "matrix"))))
    return matrix


def _visual_scene_nodes(library_visual_scenes: ET.Element) -> Iterator[ET.Element]:
    return _children(_first(library_visual_scenes, "visual_scene"), "node")


def parse_animations(library_animations: ET.Element) -> dict[str, AnimationNode]:
    """Parse every ``<animation>`` of a ``<library_animations>``, keyed by id."""
    result: dict[str, AnimationNode] = {}
    for animation in _children(library_animations, "animation"):
        input_id = output_id = None
        for inp in _children(_first(animation, "sampler"), "input"):
            semantic = _attr(inp, "semantic")
            if semantic == ANIMATION_INPUT:
                input_id = _attr(inp, "source")[1:]
            elif semantic == ANIMATION_OUTPUT:
                output_id = _attr(inp, "source")[1:]

        time_stamps: list[float] = []
        matrices: list[np.ndarray] = []
        for source in _children(animation, "source"):
            source_id = _attr(source, "id")
            if source_id == input_id:
                time_stamps = split_floats(_text(_first(source, "float_array")))
            elif source_id == output_id:
                matrices = _matrices(split_floats(_text(_first(source, "float_array"))))

        animation_id = _attr(animation, "id")
        result[animation_id] = AnimationNode(animation_id, time_stamps, matrices)
    return result


def parse_visual_scenes_static(
    library_visual_scenes: ET.Element,
) -> dict[str, InstanceGeometry]:
    """Collect the world matrix of each node holding an ``<instance_geometry>``.

    The key is the geometry url without its ``#`` and ``-mesh`` suffix.
    """
    result: dict[str, InstanceGeometry] = {}
    for node in _visual_scene_nodes(library_visual_scenes):
        instance = _find(node, "instance_geometry")
        if instance is None:
            continue
        geometry_id = _attr(instance, "url")[1:].partition("-mesh")[0]
        name = _attr(instance, "name")
        result[geometry_id] = InstanceGeometry(geometry_id, name, _node_matrix(node))
    return result


def parse_visual_scenes_animated(
    library_visual_scenes: ET.Element,
) -> dict[str, InstanceController]:
    """Collect every node holding an ``<instance_controller>``, keyed by node id."""
    result: dict[str, InstanceController] = {}
    for node in _visual_scene_nodes(library_visual_scenes):
        instance = _find(node, "instance_controller")
        if instance is None:
            continue
        node_id = _attr(node, "id")
        result[node_id] = InstanceController(
            node_id, _attr(node, "name"), _attr(instance, "url")[1:]
        )
    return result


def parse_visual_scenes_skeletons(
    library_visual_scenes: ET.Element,
) -> dict[str, SkeletonNode]:
    """Build a skeleton tree for each top-level node without geometry or controller."""
    result: dict[str, SkeletonNode] = {}
    for node in _visual_scene_nodes(library_visual_scenes):
        if _find(node, "instance_geometry") is not None:
            continue
        if _find(node, "instance_controller") is not None:
            continue
        node_id = _attr(node, "id")
        children = [parse_skeleton_node(child) for child in _children(node, "node")]
        result[node_id] = SkeletonNode(
            node_id, _attr(node, "name"), "", _node_matrix(node), children
        )
    return result


def parse_skeleton_node(node: ET.Element) -> SkeletonNode:
    """Parse a joint ``<node>`` and, recursively, its child joints."""
    children = [parse_skeleton_node(child) for child in _children(node, "node")]
    return SkeletonNode(
        _attr(node, "id"),
        _attr(node, "name"),
        _attr(node, "sid"),
        _node_matrix(node),
        children,
    )


def load_physics_data(filename) -> PhysicsData:
    """Read a ``<physics>`` document listing objects and their attributes.

    Raises OSError if the file cannot be read, ``xml.etree.ElementTree.ParseError``
    if it is not XML, and ValueError if the root is not ``<physics>``.
    """
    root = ET.parse(filename).getroot()
    if _local_name(root.tag) != "physics":
        raise ValueError(f"{filename}: root element is <{root.tag}>, not <physics>")
    data = PhysicsData()
    for obj in _children(root, "object"):
        data.names.append(_attr(obj, "name"))
        for attribute in _children(obj, "attribute"):
            if _attr(attribute, "name") == MASS:
                data.masses.append(float(_text(attribute).strip()))
    return data