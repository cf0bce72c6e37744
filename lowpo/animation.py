"""Skeletal animation data: bones, keyframed bone tracks and clips."""

from __future__ import annotations

import math

import numpy as np

from .components import Component, ComponentType
from .mathutil import Quat, slerp


class Bone:
    """One joint of a skeleton and its current animation transforms."""

    def __init__(self, parent_index, offset_matrix, to_parent_space, name) -> None:
        self.parent_index = parent_index
        self.offset_matrix = np.asarray(offset_matrix, dtype=float)
        self.to_parent_space = np.asarray(to_parent_space, dtype=float)
        self.local_animation_transform = np.eye(4)
        self.animation_transform = np.eye(4)
        self.name = name


class BoneAnimation:
    """Keyframes (time, scale, rotation, translation) for one bone."""

    def __init__(self, name, bone_index) -> None:
        self.name = name
        self.bone_index = bone_index
        self.start_times: list[float] = []
        self.scales: list = []
        self.rotations: list[Quat] = []
        self.translations: list = []

    def _frames_around(self, tick: float) -> tuple[int, int]:
        first = second = 0
        for i, start in enumerate(self.start_times):
            first, second = second, i
            if start > tick:
                break
        return first, second

    def transform_at_tick(self, tick: float) -> np.ndarray:
        """Interpolate the keyframes around ``tick`` into a 4x4 matrix."""
        if not self.start_times:
            raise ValueError(f"bone animation {self.name!r} has no keyframes")
        first, second = self._frames_around(tick)
        start_a = self.start_times[first]
        dt = self.start_times[second] - start_a
        # Coincident keyframes: hold the first frame.
        t = (tick - start_a) / dt if dt else 0.0

        trans_a = np.asarray(self.translations[first], dtype=float)
        trans_b = np.asarray(self.translations[second], dtype=float)
        scale_a = np.asarray(self.scales[first], dtype=float)
        scale_b = np.asarray(self.scales[second], dtype=float)
        interp_t = (1 - t) * trans_a + t * trans_b
        interp_s = (1 - t) * scale_a + t * scale_b
        interp_r = slerp(self.rotations[first], self.rotations[second], t).normalized()

        scale = np.diag([*interp_s, 1.0])
        translation = np.diag([*interp_s, 1.0])
        translation[:3, 3] = interp_t
        return translation @ interp_r.to_matrix() @ scale


class Animation:
    """A named clip made of per-bone tracks."""

    def __init__(self, name, tick_duration, ticks_per_second, duration, bone_animations) -> None:
        self.name = name
        self.tick_duration = tick_duration
        self.ticks_per_second = ticks_per_second
        self.duration = duration
        self.bone_animations: list[BoneAnimation] = list(bone_animations)

    def tick_for_time(self, time: float) -> float:
        """Convert seconds into a tick, wrapping around the clip length."""
        return math.fmod(time * self.ticks_per_second, self.duration)

    def bone_animation(self, index: int) -> BoneAnimation:
        return self.bone_animations[index]


class AnimationComponent(Component):
    """Skeleton, clips and playback state of an animated entity."""

    def __init__(self) -> None:
        super().__init__(ComponentType.ANIMATED)
        # -1 means that no animation is currently active.
        self.current = -1
        self.animation_time = 0.0
        self.speed_multiplier = 1.0
        self.bones: list[Bone] = []
        self.animations: list[Animation] = []
        self.action_to_animation: dict[int, int] = {}

    def current_animation(self) -> Animation:
        """Return the active clip; raise LookupError if none is active."""
        if self.current < 0:
            raise LookupError("no animation is active")
        return self.animations[self.current]

    def bone(self, index: int) -> Bone:
        return self.bones[index]