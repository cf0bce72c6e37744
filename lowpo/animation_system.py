"""System that advances skeletal animations each frame."""

from __future__ import annotations

from .components import ComponentType


class AnimationSystem:
    """Advances the active clip of every animated entity."""

    def __init__(self) -> None:
        self.primary_bitset = ComponentType.ANIMATED

    def update(self, delta_time: float, entities) -> None:
        """Advance time and recompute bone transforms for each entity."""
        for entity in entities:
            if not entity.is_eligible_for_system(self.primary_bitset):
                continue
            component = entity.get_component(ComponentType.ANIMATED)
            if component.current == -1:
                continue
            animation = component.current_animation()
            component.animation_time += component.speed_multiplier * delta_time
            tick = animation.tick_for_time(component.animation_time)
            for track in animation.bone_animations:
                bone = component.bone(track.bone_index)
                bone.local_animation_transform = track.transform_at_tick(tick)
            for bone in component.bones[1:]:
                parent = component.bone(bone.parent_index)
                bone.animation_transform = parent.animation_transform @ bone.local_animation_transform