from dataclasses import dataclass
from typing import Tuple

from pyrr import Matrix44

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Transform:
    """Position, Euler rotation (radians) and per-axis scale of a model."""
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)

    @classmethod
    def identity(cls):
        return cls()

    def to_matrix(self) -> Matrix44:
        # pyrr composes right to left: scale, rotate X, Y, Z, then translate.
        # pyrr rotations turn row vectors clockwise, hence the negated angles.
        rx, ry, rz = self.rotation
        model = Matrix44.from_translation(self.position) \
            * Matrix44.from_z_rotation(-rz) \
            * Matrix44.from_y_rotation(-ry) \
            * Matrix44.from_x_rotation(-rx) \
            * Matrix44.from_scale(self.scale)
        return model
