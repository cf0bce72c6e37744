import numpy as np
import pytest

from lowpo.components import ComponentType, InputComponent, TransformComponent
from lowpo.entity import Entity
from lowpo.mathutil import Quat


def test_get_component_returns_added_instance():
    entity = Entity(12)
    component = InputComponent()
    entity.add_component(component)
    assert entity.get_component(ComponentType.INPUT) is component
    assert entity.id == 12


def test_get_missing_component_raises():
    entity = Entity(1)
    entity.add_component(InputComponent())
    with pytest.raises(KeyError):
        entity.get_component(ComponentType.PHYSICS)


def test_has_component():
    entity = Entity(2)
    entity.add_component(TransformComponent(np.zeros(3), Quat()))
    assert entity.has_component(ComponentType.TRANSFORM)
    assert not entity.has_component(ComponentType.INPUT)


def test_eligibility_uses_any_matching_bit():
    entity = Entity(3)
    entity.add_component(InputComponent())
    assert entity.is_eligible_for_system(ComponentType.INPUT | ComponentType.PHYSICS)
    assert not entity.is_eligible_for_system(ComponentType.ANIMATED)


def test_empty_entity_is_not_eligible():
    assert not Entity(4).is_eligible_for_system(ComponentType.TRANSFORM)