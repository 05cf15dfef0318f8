"""Keyframe animation of object attributes.

An :class:`AnimProperty` holds keyframes for one attribute of an object.
An :class:`AnimController` knows how to interpolate and copy the values
of that attribute. :class:`AnimationInfo` groups the animated attributes
of one object.
"""

from __future__ import annotations

import copy as _copy
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Tuple

__all__ = [
    "EPSILON",
    "AnimKeyType",
    "AnimController",
    "FloatController",
    "EulerAngleController",
    "AnimKey",
    "Evaluation",
    "AnimProperty",
    "AnimationInfo",
    "AnimationSequence",
    "cubic_hermite_weights",
    "float_controller",
    "euler_angle_controller",
]

EPSILON = 1e-4
"""Keys closer together in time than this are treated as the same key."""


def cubic_hermite_weights(t: float) -> Tuple[float, float, float, float]:
    """Weights of start point, start tangent, end point and end tangent at ``t``."""
    tt = t * t
    return (
        tt * (2.0 * t - 3.0) + 1.0,
        tt * (t - 2.0) + t,
        tt * (-2.0 * t + 3.0),
        tt * (t - 1.0),
    )


class AnimKeyType(Enum):
    """The value types that scripts know about."""

    FLOAT = 0
    VECTOR3 = 1
    QUAT = 2
    OTHER = 3


class AnimController(ABC):
    """Interpolates and copies values of one type."""

    key_type: AnimKeyType = AnimKeyType.OTHER

    @abstractmethod
    def interpolate(self, a: Any, b: Any, x: float) -> Any:
        """Value a fraction ``x`` of the way from ``a`` to ``b``."""

    def copy(self, value: Any) -> Any:
        return _copy.copy(value)

    def can_convert_to_float(self) -> bool:
        return False

    def to_float(self, value: Any) -> float:
        return 0.0

    def member_count(self) -> int:
        return 0

    def member_controller(self, index: int) -> "AnimController":
        """Controller for member ``index``; a value without members is its own member."""
        if self.member_count() == 0 and index < 0:
            return self
        raise IndexError(f"{type(self).__name__} has no member {index}")

    def member_name(self, index: int) -> Optional[str]:
        return None


class FloatController(AnimController):
    """Linear interpolation of plain numbers."""

    key_type = AnimKeyType.FLOAT

    def interpolate(self, a: float, b: float, x: float) -> float:
        return a * (1.0 - x) + b * x

    def copy(self, value: float) -> float:
        return value

    def can_convert_to_float(self) -> bool:
        return True

    def to_float(self, value: float) -> float:
        return float(value)


class EulerAngleController(FloatController):
    """Interpolates angles in radians along the shorter way round."""

    def interpolate(self, a: float, b: float, x: float) -> float:
        if a > math.tau:
            a -= math.tau
        if a < 0.0:
            a += math.tau
        if b > math.tau:
            b -= math.tau
        if b < 0.0:
            b += math.tau
        v = b - a
        if abs(v) > math.pi:
            v += -math.tau if v > 0 else math.tau
        return a + v * x


_FLOAT_CONTROLLER = FloatController()
_EULER_CONTROLLER = EulerAngleController()


def float_controller() -> FloatController:
    return _FLOAT_CONTROLLER


def euler_angle_controller() -> EulerAngleController:
    return _EULER_CONTROLLER


@dataclass
class AnimKey:
    time: float
    value: Any


class Evaluation(NamedTuple):
    """An evaluated value and the index of the key at or before the time."""

    value: Any
    key: Optional[int]


class AnimProperty:
    """Keyframes for one attribute of an object, ordered by time."""

    def __init__(self, controller: AnimController, name: str = "", attribute: Optional[str] = None) -> None:
        self.controller = controller
        self.name = name
        self.attribute = attribute if attribute is not None else name
        self.keys: List[AnimKey] = []

    def key_count(self) -> int:
        return len(self.keys)

    def key_time(self, index: int) -> float:
        return self.keys[index].time

    def set_key_time(self, index: int, time: float) -> None:
        self.keys[index].time = time

    def key_value(self, index: int) -> Any:
        return self.keys[index].value

    def key_index(self, time: float, last_key: Optional[int] = None) -> int:
        """Index of the last key not after ``time``, or -1 if all keys come later.

        The search starts at ``last_key`` when it is given and not negative.
        """
        start = last_key if last_key is not None and last_key >= 0 else 0
        for index in range(start, len(self.keys)):
            if self.keys[index].time > time:
                return index - 1
        return len(self.keys) - 1

    def evaluate(self, time: float, last_key: Optional[int] = None) -> Evaluation:
        """Value at ``time``; the value is None when there are no keys."""
        if not self.keys:
            return Evaluation(None, last_key)
        index = self.key_index(time, last_key)
        if index < 0:
            value = self.controller.copy(self.keys[0].value)
        elif index + 1 < len(self.keys):
            ka, kb = self.keys[index], self.keys[index + 1]
            x = (time - ka.time) / (kb.time - ka.time)
            value = self.controller.interpolate(ka.value, kb.value, x)
        else:
            value = self.controller.copy(self.keys[index].value)
        return Evaluation(value, index)

    def insert_key(self, value: Any, time: float) -> None:
        """Add a key at ``time``, or replace the value of a key already there."""
        index = self.key_index(time)
        if index >= 0 and abs(self.keys[index].time - time) < EPSILON:
            self.keys[index].value = self.controller.copy(value)
        else:
            self.keys.insert(index + 1, AnimKey(time, self.controller.copy(value)))

    def chop(self, end_time: float) -> None:
        """Remove every key after ``end_time``."""
        for index, key in enumerate(self.keys):
            if key.time > end_time:
                del self.keys[index:]
                break

    def clear(self) -> None:
        self.keys.clear()

    def clone(self) -> "AnimProperty":
        cp = AnimProperty(self.controller, self.name, self.attribute)
        cp.keys = [AnimKey(k.time, self.controller.copy(k.value)) for k in self.keys]
        return cp


@dataclass
class AnimationInfo:
    """The animated attributes of one object."""

    properties: List[AnimProperty] = field(default_factory=list)

    def add_property(self, controller: AnimController, name: str, attribute: Optional[str] = None) -> AnimProperty:
        prop = AnimProperty(controller, name, attribute)
        self.properties.append(prop)
        return prop

    def evaluate(self, obj: Any, time: float) -> None:
        """Set the animated attributes of ``obj`` to their values at ``time``."""
        for prop in self.properties:
            if prop.keys:
                setattr(obj, prop.attribute, prop.evaluate(time).value)

    def insert_key_frames(self, obj: Any, time: float) -> None:
        """Add keys for attributes whose current value differs from the animation."""
        for prop in self.properties:
            current = getattr(obj, prop.attribute)
            if not prop.keys or prop.keys[0].time > time or prop.keys[-1].time < time:
                edited = True
            else:
                edited = prop.evaluate(time).value != current
            if edited:
                prop.insert_key(current, time)

    def clear_anim_data(self) -> None:
        for prop in self.properties:
            prop.clear()

    def copy_to(self, other: "AnimationInfo") -> None:
        """Replace the properties of ``other`` with copies of these."""
        other.properties = [prop.clone() for prop in self.properties]


@dataclass
class AnimationSequence:
    """Animation data for a set of objects."""

    name: str = ""
    objects: List[AnimationInfo] = field(default_factory=list)