# lowpo

The engine-independent core of a small low-poly 3D game. It provides an
entity–component model, skeletal animation, and loaders for COLLADA (`.dae`)
scenes and physics data files.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

numpy is the only runtime dependency.

## Modules

### `lowpo.mathutil`

- `Quat(w, x, y, z)` is a frozen quaternion with three methods:
  - `normalized()`: a normalized copy. A zero quaternion becomes the identity.
  - `conjugate()`
  - `to_matrix()`: a 4x4 numpy rotation matrix.
- `slerp(a, b, t)` interpolates along the shortest path.
- `translation_matrix(x, y, z)` returns a 4x4 translation matrix.

### `lowpo.components`

- `ComponentType` is an `IntFlag`. Its members are `TRANSFORM`, `PHYSICS`,
  `RENDERING`, `INPUT` and `ANIMATED`.
- The enums `Action`, `DynamicType` and `ShaderType`.
- `Component` is the base class. It stores `component_type`.
- `InputComponent` holds `last_x` and `last_y`.
- `PhysicsComponent(mass, position, orientation, inertia_tensor, dynamic_type)`
  stores rigid-body state: the inverse mass, velocities, accumulators, the
  inverse inertia tensor and a `colliders` list. A mass of zero raises
  `ValueError`.
- `RenderingComponent(vertex_array, vertex_buffer, vertex_count, texture_id, shader)`
  holds the drawing handles.
- `TransformComponent(position, orientation)`. Its `world_transform()` returns
  translation @ rotation as a 4x4 matrix.

### `lowpo.entity`

`Entity(entity_id)` holds at most one component of each type, and keeps a
bitset of the types it holds. It has four methods:

- `add_component(component)`
- `get_component(component_type)`: raises `KeyError` if the entity has no
  component of that type.
- `has_component(component_type)`
- `is_eligible_for_system(system_bitset)`

### `lowpo.animation`

- `Bone` is one joint of a skeleton.
- `BoneAnimation` holds the keyframes of one bone: `start_times`, `scales`,
  `rotations` and `translations`. `transform_at_tick(tick)` interpolates
  between the keyframes either side of the tick.
- `Animation` is a clip made of bone tracks. `tick_for_time(time)` converts a
  time into a tick and wraps it around the clip's `duration`.
- `AnimationComponent` holds `bones`, `animations` and `current`. A `current`
  of `-1` means no clip is active, and `current_animation()` then raises
  `LookupError`.

### `lowpo.animation_system`

`AnimationSystem().update(delta_time, entities)` acts on every entity that has
an active clip. For each one it:

1. advances the clip time,
2. sets the local transform of each animated bone,
3. propagates the transforms from parent to child, starting from bone 1.

### `lowpo.collada`

- `load_collada(filename)` returns the `<COLLADA>` root element with
  namespaces stripped. It raises `OSError` if the file cannot be read,
  `ParseError` if the file is not XML, and `ValueError` for any other root
  element.
- `parse_geometry(library_geometries)` returns `Geometry` objects keyed by
  geometry id, with the `-mesh` suffix removed.
- `parse_controllers(library_controllers)` returns `Controller` objects keyed
  by name. Each vertex gets four bone indices and four weights: the strongest
  influences, normalised and padded with zeros.
- `build_buffer_data(geometry)` expands indexed triangles into an interleaved
  float list. Each vertex is eight floats: position (x, y, z), the face normal
  (x, y, z) and the texture coordinates (s, t).
- `split_floats`, `split_ints` and `split_strings` split whitespace-separated
  text.

### `lowpo.scenes`

- `parse_animations(library_animations)` returns `AnimationNode` objects
  keyed by animation id. Each one has time stamps and 4x4 matrices.
- `parse_visual_scenes_static(library_visual_scenes)` returns an
  `InstanceGeometry` for each node that holds an `<instance_geometry>`.
- `parse_visual_scenes_animated(library_visual_scenes)` returns an
  `InstanceController` for each node that holds an `<instance_controller>`.
- `parse_visual_scenes_skeletons(library_visual_scenes)` and
  `parse_skeleton_node(node)` build trees of `SkeletonNode`.
- `load_physics_data(filename)` reads a `<physics>` document into
  `PhysicsData`, which has `names`, `masses` and `inertia_tensors`.

All matrices are numpy 4x4 arrays, in the row order they have in the file.

## Example

```python
from lowpo.collada import load_collada, parse_geometry, build_buffer_data

collada = load_collada("scene.dae")
geometries = parse_geometry(collada.find("library_geometries"))
for geometry_id, geometry in geometries.items():
    buffer = build_buffer_data(geometry)
    print(geometry_id, len(buffer) // 8, "vertices")
```

```python
from lowpo.animation_system import AnimationSystem
from lowpo.entity import Entity

entities = [Entity(1)]
AnimationSystem().update(1 / 60, entities)
```

## What it does not do

lowpo is a library and has no command to run. It does not provide any of the
following:

- a window or a renderer: `RenderingComponent` only stores handles,
- keyboard or mouse handling: `InputComponent` only stores the cursor
  position,
- physics simulation or collision detection: `PhysicsComponent` only stores
  state and colliders,
- a game loop.

## Running the tests

```
pytest
```