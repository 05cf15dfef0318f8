"""Keyframe track view: plots animated properties of objects over time.

The view keeps a time range and a value range, turns property curves into
pixel coordinates and handles key selection, panning and zooming from
mouse input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple

from .animation import AnimationInfo, AnimProperty

__all__ = [
    "MouseButton",
    "TrackProperty",
    "TrackObject",
    "CurveMarker",
    "Curve",
    "TrackView",
]

_SELECT_EPSILON = 0.5


class MouseButton(IntEnum):
    LEFT = 1
    MIDDLE = 2
    RIGHT = 3


@dataclass(eq=False)
class TrackProperty:
    """One plottable curve: a property, or one member of a property."""

    prop: AnimProperty
    member: int = -1
    display: bool = False
    selected: bool = False
    open: bool = False
    key_sel: List[bool] = field(default_factory=list)

    def evaluate_y(self, time: float, last_key: Optional[int] = None) -> Tuple[float, Optional[int]]:
        """Plotted value at ``time`` and the index of the key at or before it.

        Values that cannot be shown as a number plot as 0.
        """
        ctl = self.prop.controller.member_controller(self.member)
        if not ctl.can_convert_to_float():
            return 0.0, last_key
        value, key = self.prop.evaluate(time, last_key)
        if value is None:
            return 0.0, key
        return ctl.to_float(value), key

    def label(self) -> str:
        text = self.prop.name
        if self.member >= 0:
            text += "." + (self.prop.controller.member_name(self.member) or "")
        return text


@dataclass(eq=False)
class TrackObject:
    """An object shown in the track view with its plottable properties."""

    name: str
    animation: AnimationInfo
    props: List[TrackProperty] = field(default_factory=list)
    selected: bool = False
    open: bool = False


class CurveMarker(NamedTuple):
    x: int
    y: int
    key: int
    selected: bool


class Curve(NamedTuple):
    points: List[Tuple[int, int]]
    markers: List[CurveMarker]


class TrackView:
    """Time/value view over the displayed properties of a set of objects."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.min_time = 0.0
        self.max_time = 5.0
        self.min_y = 0.0
        self.max_y = 360.0
        self.cur_time = 0.0
        self.objects: List[TrackObject] = []
        self.moving_view = False
        self.moving_keys = False
        self.zooming = False
        self.xpos = self.ypos = 0
        self.click_x = self.click_y = 0
        self.needs_redraw = False

    @property
    def caption(self) -> str:
        return "Time=[%3.2f,%3.2f], Y=[%4.4f,%4.4f]" % (
            self.min_time, self.max_time, self.min_y, self.max_y)

    def _displayed(self) -> Iterable[TrackProperty]:
        for obj in self.objects:
            yield from (p for p in obj.props if p.display)

    def add_object(self, name: str, animation: AnimationInfo) -> TrackObject:
        obj = TrackObject(name, animation)
        for prop in animation.properties:
            count = prop.controller.member_count()
            if count > 0:
                obj.props.extend(TrackProperty(prop, member) for member in range(count))
            else:
                obj.props.append(TrackProperty(prop, -1))
        self.objects.append(obj)
        return obj

    def sync_objects(self, objects: Iterable[Tuple[str, AnimationInfo]], locked: bool) -> None:
        """Match the shown objects to ``objects``, given as (name, animation) pairs.

        When locked, objects that have gone away are dropped and nothing is
        added; otherwise ``objects`` is the selection and new ones are added.
        """
        wanted = list(objects)
        self.objects = [o for o in self.objects if any(o.animation is a for _, a in wanted)]
        if locked:
            return
        for name, animation in wanted:
            if not any(o.animation is animation for o in self.objects):
                self.add_object(name, animation)

    def toggle_display(self, prop: TrackProperty) -> None:
        prop.display = not prop.display
        self.update_key_selection()
        self.needs_redraw = True

    def update_key_selection(self) -> None:
        """Give each displayed property one selection flag per key."""
        for p in self._displayed():
            count = p.prop.key_count()
            if len(p.key_sel) != count:
                p.key_sel = [False] * count
                self.needs_redraw = True

    def auto_fit_view(self) -> None:
        """Fit the value range to the displayed curves, with a 10% margin."""
        max_y = -100000.0
        min_y = -max_y
        for p in self._displayed():
            step = (self.max_time - self.min_time) / self.width
            time = self.min_time
            last_key: Optional[int] = None
            for _ in range(self.width):
                y, last_key = p.evaluate_y(time, last_key)
                min_y = min(min_y, y)
                max_y = max(max_y, y)
                time += step
        d = max_y - min_y
        if d == 0.0:
            d = 1.0
        d *= 0.1
        self.min_y = min_y - d
        self.max_y = max_y + d
        self.needs_redraw = True

    def auto_fit_time(self) -> None:
        """Fit the time range to the keys of the displayed properties."""
        min_time = 10000.0
        max_time = -10000.0
        found = False
        for p in self._displayed():
            count = p.prop.key_count()
            if count > 0:
                found = True
                min_time = min(min_time, p.prop.key_time(0))
                max_time = max(max_time, p.prop.key_time(count - 1))
        if not found:
            return
        d = max_time - min_time
        if d == 0.0:
            d = 1.0
        d *= 0.1
        self.min_time = min_time - d
        self.max_time = max_time + d
        self.needs_redraw = True

    def select_keys(self, x: int, y: int) -> int:
        """Select keys near view position (x, y); return how many were selected."""
        time = x * (self.max_time - self.min_time) / self.width + self.min_time
        value = y * (self.max_y - self.min_y) / self.height + self.min_y
        self.update_key_selection()
        count = 0
        for p in self._displayed():
            for index, key in enumerate(p.prop.keys):
                kt = key.time
                if time - _SELECT_EPSILON < kt < time + _SELECT_EPSILON:
                    ky, _ = p.evaluate_y(kt)
                    if value - _SELECT_EPSILON < ky < value + _SELECT_EPSILON:
                        p.key_sel[index] = True
                        count += 1
                        self.needs_redraw = True
        return count

    def press(self, x: int, y: int, button: int) -> bool:
        self.click_x = self.xpos = x
        self.click_y = self.ypos = y
        if button == MouseButton.MIDDLE:
            self.moving_view = True
        if button == MouseButton.LEFT:
            self.moving_keys = True
        if button == MouseButton.RIGHT:
            self.zooming = True
        return True

    def drag(self, x: int, y: int) -> None:
        dx = x - self.xpos
        dy = y - self.ypos
        self.xpos, self.ypos = x, y
        if self.moving_view:
            ts = dx * (self.max_time - self.min_time) / self.width
            self.min_time -= ts
            self.max_time -= ts
            ys = dy * (self.max_y - self.min_y) / self.height
            self.min_y += ys
            self.max_y += ys
            self.needs_redraw = True
        if self.zooming:
            xs = 1.0 + dx * 0.01
            ys = 1.0 - dy * 0.01
            mid_time = (self.min_time + self.max_time) * 0.5
            self.min_time = mid_time + (self.min_time - mid_time) * xs
            self.max_time = mid_time + (self.max_time - mid_time) * xs
            mid_y = (self.min_y + self.max_y) * 0.5
            self.min_y = mid_y + (self.min_y - mid_y) * ys
            self.max_y = mid_y + (self.max_y - mid_y) * ys
            self.needs_redraw = True

    def release(self, x: int, y: int) -> None:
        if x == self.click_x and y == self.click_y:
            self.select_keys(self.click_x, self.click_y)
        self.leave()

    def leave(self) -> None:
        self.moving_view = self.moving_keys = self.zooming = False

    def _to_pixel_y(self, value: float) -> int:
        return int(self.height * (1.0 - (value - self.min_y) / (self.max_y - self.min_y)))

    def curve_points(self, prop: TrackProperty) -> Curve:
        """Pixel polyline of ``prop`` across the view, with key markers."""
        if self.width < 1:
            return Curve([], [])
        step = (self.max_time - self.min_time) / self.width
        first, last_key = prop.evaluate_y(self.min_time)
        points = [(1, self._to_pixel_y(first))]
        markers: List[CurveMarker] = []
        shown_key: Optional[int] = -1
        time = self.min_time + step
        for x in range(1, self.width):
            y, last_key = prop.evaluate_y(time, last_key)
            cury = self._to_pixel_y(y)
            points.append((x + 1, cury))
            if last_key is not None and last_key != shown_key:
                if last_key >= 0:
                    sel = last_key < len(prop.key_sel) and prop.key_sel[last_key]
                    markers.append(CurveMarker(x + 1, cury, last_key, sel))
                shown_key = last_key
            time += step
        return Curve(points, markers)