"""Entities: identifiers holding a set of components."""

from __future__ import annotations

from .components import Component, ComponentType


class Entity:
    """A game object whose components are processed by systems."""

    def __init__(self, entity_id: int) -> None:
        self.id = entity_id
        self._component_bitset = ComponentType(0)
        self._components: dict[ComponentType, Component] = {}

    def add_component(self, component: Component) -> None:
        """Attach a component, replacing any earlier one of the same type."""
        self._component_bitset |= component.component_type
        self._components[component.component_type] = component

    def get_component(self, component_type) -> Component:
        """Return the component of the given type; raise KeyError if absent."""
        try:
            return self._components[ComponentType(component_type)]
        except KeyError:
            raise KeyError(f"entity {self.id} has no {component_type!r} component") from None

    def has_component(self, component_type) -> bool:
        """Whether the entity holds a component of the given type."""
        return bool(self._component_bitset & component_type)

    def is_eligible_for_system(self, system_bitset) -> bool:
        """Whether any of the system's component bits is present."""
        return bool(self._component_bitset & system_bitset)