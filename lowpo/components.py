"""Component kinds attached to entities."""

from __future__ import annotations

import enum

import numpy as np

from .mathutil import Quat, translation_matrix


class ComponentType(enum.IntFlag):
    """Bit flags identifying component kinds."""

    TRANSFORM = 1 << 0
    PHYSICS = 1 << 1
    RENDERING = 1 << 2
    INPUT = 1 << 3
    ANIMATED = 1 << 4


class Action(enum.IntEnum):
    """Player actions driven by input."""

    MOVE_FORWARD = 0
    MOVE_BACKWARD = 1
    MOVE_LEFT = 2
    MOVE_RIGHT = 3
    JUMP = 4
    DANCE = 5


class DynamicType(enum.Enum):
    """How an object takes part in physics."""

    STATIC = 0
    DYNAMIC = 1
    WITH_PHYSICS = 2


class ShaderType(enum.Enum):
    """Shader used to draw a component."""

    NORMAL = 0
    ANIMATED = 1


class Component:
    """Base of all components; carries its type flag."""

    def __init__(self, component_type) -> None:
        self.component_type = ComponentType(component_type)


class InputComponent(Component):
    """Remembers the last cursor position for an input-driven entity."""

    def __init__(self) -> None:
        super().__init__(ComponentType.INPUT)
        self.last_x = 0.0
        self.last_y = 0.0


class PhysicsComponent(Component):
    """Linear and angular rigid-body state plus attached colliders."""

    def __init__(self, mass, position, orientation, inertia_tensor, dynamic_type) -> None:
        super().__init__(ComponentType.PHYSICS)
        if mass == 0:
            raise ValueError("mass must be non-zero")
        self.inverse_mass = 1.0 / mass
        self.acceleration = np.zeros(3)
        self.velocity = np.zeros(3)
        self.position = np.asarray(position, dtype=float).copy()
        self.force_accumulator = np.zeros(3)

        self.angular_acc = np.zeros(3)
        self.angular_vel = np.zeros(3)
        self.orientation: Quat = orientation
        self.torque_accumulator = np.zeros(3)
        self.inv_inertia_tensor = np.linalg.inv(np.asarray(inertia_tensor, dtype=float))
        self.inv_inertia_tensor_local = np.zeros((3, 3))

        self.colliders: list = []
        self.dynamic_type = DynamicType(dynamic_type)


class RenderingComponent(Component):
    """GPU handles and shader choice for drawing an entity."""

    def __init__(self, vertex_array, vertex_buffer, vertex_count, texture_id, shader) -> None:
        super().__init__(ComponentType.RENDERING)
        self.vertex_array_id = vertex_array
        self.vertex_buffer_id = vertex_buffer
        self.vertex_count = vertex_count
        self.texture_id = texture_id
        self.shader = ShaderType(shader)


class TransformComponent(Component):
    """Position and orientation of an entity in the world."""

    def __init__(self, position, orientation) -> None:
        super().__init__(ComponentType.TRANSFORM)
        self.position = np.asarray(position, dtype=float).copy()
        self.orientation: Quat = orientation

    def world_transform(self) -> np.ndarray:
        """Return the 4x4 model matrix: translation after rotation."""
        translation = translation_matrix(*self.position)
        return translation @ self.orientation.to_matrix()