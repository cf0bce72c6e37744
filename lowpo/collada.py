"""Reading meshes and skin controllers from COLLADA documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterator

POSITION = "POSITION"
TEXCOORD = "TEXCOORD"
JOINT = "JOINT"
WEIGHT = "WEIGHT"

_MAX_INFLUENCES = 4


@dataclass
class Geometry:
    """Parsed contents of a ``<geometry>`` element.

    ``stride`` is the number of inputs per index group in ``<triangles>``
    (VERTEX / NORMAL / TEXCOORD gives 3).
    """

    id: str
    name: str
    stride: int
    indices: list[int] = field(default_factory=list)
    vertices: list[float] = field(default_factory=list)
    tex_coords: list[float] = field(default_factory=list)


@dataclass
class Controller:
    """Parsed skin of a ``<controller>``: four bone indices and weights per vertex."""

    id: str
    name: str
    indices: list[int] = field(default_factory=list)
    weights: list[float] = field(default_factory=list)


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    return (child for child in element if _local_name(child.tag) == name)


def _first(element: ET.Element, name: str) -> ET.Element:
    for child in _children(element, name):
        return child
    raise ValueError(f"<{_local_name(element.tag)}> has no <{name}> child")


def _attr(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ValueError(f"<{_local_name(element.tag)}> has no {name!r} attribute")
    return value


def _text(element: ET.Element) -> str:
    return element.text or ""


def _source_ref(element: ET.Element) -> str:
    """Return the ``source`` attribute without its leading ``#``."""
    return _attr(element, "source")[1:]


def _sources_by_semantic(element: ET.Element) -> dict[str, str]:
    return {
        _attr(inp, "semantic"): _source_ref(inp) for inp in _children(element, "input")
    }


def split_floats(text: str) -> list[float]:
    """Split a whitespace separated list of numbers into floats."""
    return [float(token) for token in text.split()]


def split_ints(text: str) -> list[int]:
    """Split a whitespace separated list of numbers into integers."""
    return [int(token) for token in text.split()]


def split_strings(text: str) -> list[str]:
    """Split a whitespace separated list of names."""
    return text.split()


def load_collada(filename) -> ET.Element:
    """Load a COLLADA file and return its root element with namespaces removed.

    Raises OSError if the file cannot be read, ``xml.etree.ElementTree.ParseError``
    if it is not XML, and ValueError if the root is not ``<COLLADA>``.
    """
    root = ET.parse(filename).getroot()
    for element in root.iter():
        element.tag = _local_name(element.tag)
    if root.tag != "COLLADA":
        raise ValueError(f"{filename}: root element is <{root.tag}>, not <COLLADA>")
    return root


def parse_geometry(library_geometries: ET.Element) -> dict[str, Geometry]:
    """Parse every ``<geometry>`` of a ``<library_geometries>``, keyed by id.

    The key drops the ``-mesh`` suffix so that it matches the node ids of the
    visual scene.
    """
    result: dict[str, Geometry] = {}
    for node in _children(library_geometries, "geometry"):
        name = _attr(node, "name")
        geometry_id = _attr(node, "id").partition("-mesh")[0]
        mesh = _first(node, "mesh")

        vertices_id = None
        for inp in _children(_first(mesh, "vertices"), "input"):
            if _attr(inp, "semantic") == POSITION:
                vertices_id = _source_ref(inp)

        triangles = _first(mesh, "triangles")
        tex_coords_id = None
        stride = 0
        for inp in _children(triangles, "input"):
            if _attr(inp, "semantic") == TEXCOORD:
                tex_coords_id = _source_ref(inp)
            stride += 1

        vertices: list[float] = []
        tex_coords: list[float] = []
        for source in _children(mesh, "source"):
            source_id = _attr(source, "id")
            if source_id == vertices_id:
                vertices = split_floats(_text(_first(source, "float_array")))
            elif source_id == tex_coords_id:
                tex_coords = split_floats(_text(_first(source, "float_array")))

        indices = split_ints(_text(_first(triangles, "p")))
        result[geometry_id] = Geometry(
            geometry_id, name, stride, indices, vertices, tex_coords
        )
    return result


def _vertex_influences(
    pairs: list[tuple[int, int]], weights: list[float]
) -> tuple[list[int], list[float]]:
    """Pick up to four strongest bone influences, normalised and zero padded."""
    bone_to_weight: dict[int, float] = {}
    chosen: list[float] = []
    for bone, weight_index in pairs:
        weight = weights[weight_index]
        bone_to_weight[bone] = weight
        chosen.append(weight)
    if len(chosen) > _MAX_INFLUENCES:
        chosen = sorted(chosen, reverse=True)[:_MAX_INFLUENCES]

    bones: list[int] = []
    for weight in chosen:
        for bone, bone_weight in bone_to_weight.items():
            if bone_weight == weight:
                bones.append(bone)
                break

    total = sum(chosen)
    if total:
        chosen = [weight / total for weight in chosen]

    padding = _MAX_INFLUENCES - len(chosen)
    if padding > 0:
        chosen.extend([0.0] * padding)
        bones.extend([0] * padding)
    pairs_out = list(zip(bones, chosen))
    return [b for b, _ in pairs_out], [w for _, w in pairs_out]


def parse_controllers(library_controllers: ET.Element) -> dict[str, Controller]:
    """Parse every ``<controller>`` of a ``<library_controllers>``, keyed by name."""
    result: dict[str, Controller] = {}
    for controller in _children(library_controllers, "controller"):
        skin = _first(controller, "skin")
        vertex_weights = _first(skin, "vertex_weights")
        weights_id = _sources_by_semantic(vertex_weights).get(WEIGHT)

        counts = split_ints(_text(_first(vertex_weights, "vcount")))
        values = split_ints(_text(_first(vertex_weights, "v")))

        weights: list[float] = []
        for source in _children(skin, "source"):
            if _attr(source, "id") == weights_id:
                weights = split_floats(_text(_first(source, "float_array")))

        final_indices: list[int] = []
        final_weights: list[float] = []
        position = 0
        for count in counts:
            chunk = values[position : position + 2 * count]
            position += 2 * count
            pairs = list(zip(chunk[0::2], chunk[1::2]))
            bones, vertex_weights_out = _vertex_influences(pairs, weights)
            final_indices.extend(bones)
            final_weights.extend(vertex_weights_out)

        controller_id = _attr(controller, "id")
        name = _attr(controller, "name")
        result[name] = Controller(controller_id, name, final_indices, final_weights)
    return result


def _cross(a, b) -> tuple[float, float, float]:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def build_buffer_data(geometry: Geometry) -> list[float]:
    """Expand indexed triangles into interleaved position, normal, uv floats.

    Each vertex contributes eight floats; every vertex of a triangle shares
    the face normal ``(v0 - v1) x (v2 - v1)``.
    """
    stride = geometry.stride
    idx = geometry.indices
    buffer: list[float] = []
    for start in range(0, len(idx), stride * 3):
        corners = [start, start + stride, start + 2 * stride]
        points = []
        uvs = []
        for corner in corners:
            v = idx[corner] * 3
            t = idx[corner + 2] * 2
            points.append(tuple(geometry.vertices[v : v + 3]))
            uvs.append(tuple(geometry.tex_coords[t : t + 2]))
            if len(points[-1]) != 3 or len(uvs[-1]) != 2:
                raise IndexError(f"index out of range in geometry {geometry.id!r}")
        p0, p1, p2 = points
        normal = _cross(
            [a - b for a, b in zip(p0, p1)], [a - b for a, b in zip(p2, p1)]
        )
        for point, uv in zip(points, uvs):
            buffer.extend(point)
            buffer.extend(normal)
            buffer.extend(uv)
    return buffer