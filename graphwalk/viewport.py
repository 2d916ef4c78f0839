from __future__ import annotations

import math

from .config import ViewportLimits


def clamp(low, high, value):
    return max(low, min(high, value))


class ViewportTransform:
    """Uniform scale plus translation; no rotation or skew."""

    def __init__(self, tx: float = 0.0, ty: float = 0.0, scale: float = 1.0, limits: ViewportLimits | None = None):
        self.limits = limits or ViewportLimits()
        self.tx = tx
        self.ty = ty
        self.scale = scale

    def __repr__(self) -> str:
        return "ViewportTransform(tx={:.2f}, ty={:.2f}, scale={:.3f})".format(self.tx, self.ty, self.scale)

    def world_to_screen(self, wx, wy):
        return self.tx + self.scale * wx, self.ty + self.scale * wy

    def screen_to_world(self, sx, sy):
        return (sx - self.tx) / self.scale, (sy - self.ty) / self.scale

    def clamp_scale(self, scale):
        return clamp(self.limits.min_scale, self.limits.max_scale, scale)

    def zoom_at(self, sx, sy, new_scale):
        wx, wy = self.screen_to_world(sx, sy)
        self.scale = self.clamp_scale(new_scale)
        self.tx = sx - self.scale * wx
        self.ty = sy - self.scale * wy

    def zoom_by_wheel(self, delta_y, sx, sy):
        factor = math.exp(-delta_y * self.limits.wheel_rate)
        self.zoom_at(sx, sy, self.scale * factor)

    def pan(self, dx, dy):
        self.tx += dx
        self.ty += dy

    def snapshot(self):
        return {"tx": self.tx, "ty": self.ty, "scale": self.scale}
