"""Mesh assets: a small OBJ reader plus a few built-in meshes."""

import logging
import os
from dataclasses import dataclass

import numpy as np

from .errors import AssetError

logger = logging.getLogger(__name__)

BUILTIN_PREFIX = "builtin:"


@dataclass
class Mesh:
    """Triangle list, interleaved as [x, y, z, nx, ny, nz] per vertex."""
    name: str
    vertex_data: np.ndarray

    @property
    def vertex_count(self):
        return int(len(self.vertex_data) // 6)


def _face_normal(a, b, c):
    normal = np.cross(b - a, c - a)
    length = np.linalg.norm(normal)
    if length == 0:
        return np.array([0.0, 0.0, 1.0], dtype=np.float32)
    return (normal / length).astype(np.float32)


def _resolve(idx, count):
    # OBJ indices are 1-based, negatives count back from the latest element
    if idx == 0 or idx < -count:
        raise AssetError(f"OBJ index {idx} is out of range for {count} elements")
    if idx < 0:
        return count + idx
    return idx - 1


class OBJLoader:
    def __init__(self, obj_text=None):
        self.vertices = np.zeros((0, 3), dtype=np.float32)
        self.normals = np.zeros((0, 3), dtype=np.float32)
        if obj_text:
            self.load_from_string(obj_text)

    def load(self, path):
        try:
            with open(path, 'r', encoding='utf-8', errors='ignore') as f:
                text = f.read()
        except OSError as exc:
            raise AssetError(f"Cannot read OBJ file {path}: {exc}") from exc
        return self.load_from_string(text)

    def load_from_string(self, text):
        verts = []
        norms = []
        faces = []
        for lineno, line in enumerate(text.splitlines(), 1):
            parts = line.strip().split()
            if not parts or parts[0].startswith('#'):
                continue
            try:
                if parts[0] == 'v':
                    verts.append(tuple(map(float, parts[1:4])))
                elif parts[0] == 'vn':
                    norms.append(tuple(map(float, parts[1:4])))
                elif parts[0] == 'f':
                    face = []
                    for v in parts[1:]:
                        vals = v.split('/')
                        v_idx = _resolve(int(vals[0]), len(verts))
                        vn_idx = _resolve(int(vals[2]), len(norms)) if len(vals) > 2 and vals[2] else None
                        face.append((v_idx, vn_idx))
                    faces.append(face)
            except ValueError as exc:
                raise AssetError(f"Bad OBJ data on line {lineno}: {line.strip()!r}") from exc

        positions = []
        normals = []
        for f in faces:
            if len(f) < 3:
                continue
            # triangulate fan
            for i in range(1, len(f) - 1):
                tri = (f[0], f[i], f[i + 1])
                try:
                    corners = [np.array(verts[v_idx], dtype=np.float32) for v_idx, _ in tri]
                except IndexError as exc:
                    raise AssetError("OBJ face references a missing vertex") from exc
                flat = None
                for (v_idx, vn_idx), corner in zip(tri, corners):
                    positions.append(corner)
                    if vn_idx is not None and 0 <= vn_idx < len(norms):
                        normals.append(np.array(norms[vn_idx], dtype=np.float32))
                    else:
                        if flat is None:
                            flat = _face_normal(*corners)
                        normals.append(flat)
        if positions:
            self.vertices = np.array(positions, dtype=np.float32)
            self.normals = np.array(normals, dtype=np.float32)
        return self

    def to_vbo(self):
        # interleave positions and normals
        if len(self.vertices) == 0:
            return np.array([], dtype=np.float32)
        data = np.hstack([self.vertices, self.normals])
        return data.flatten().astype(np.float32)


CUBE_OBJ = '''
v -1 -1 -1
v 1 -1 -1
v 1 1 -1
v -1 1 -1
v -1 -1 1
v 1 -1 1
v 1 1 1
v -1 1 1
vn 0 0 -1
vn 0 0 1
vn 0 -1 0
vn 0 1 0
vn -1 0 0
vn 1 0 0
f 1//1 4//1 3//1 2//1
f 5//2 6//2 7//2 8//2
f 1//3 2//3 6//3 5//3
f 2//6 3//6 7//6 6//6
f 3//4 4//4 8//4 7//4
f 5//5 8//5 4//5 1//5
'''

# Square pyramid, apex up (+y) so the default up axis is visible
PYRAMID_OBJ = '''
v 0 1 0
v -0.7 -0.5 -0.7
v 0.7 -0.5 -0.7
v 0.7 -0.5 0.7
v -0.7 -0.5 0.7
f 1 5 4
f 1 4 3
f 1 3 2
f 1 2 5
f 2 3 4 5
'''

# Arrow pointing along +y
ARROW_OBJ = '''
v -0.15 -1 0.15
v 0.15 -1 0.15
v 0.15 -1 -0.15
v -0.15 -1 -0.15
v -0.15 0.3 0.15
v 0.15 0.3 0.15
v 0.15 0.3 -0.15
v -0.15 0.3 -0.15
v -0.45 0.3 0.45
v 0.45 0.3 0.45
v 0.45 0.3 -0.45
v -0.45 0.3 -0.45
v 0 1 0
f 1 2 6 5
f 2 3 7 6
f 3 4 8 7
f 4 1 5 8
f 4 3 2 1
f 9 10 13
f 10 11 13
f 11 12 13
f 12 9 13
f 12 11 10 9
'''


def _boxes_obj(boxes):
    """OBJ text for axis-aligned boxes given as (center, size) pairs."""
    corners = [(-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1),
               (-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)]
    # same outward winding as CUBE_OBJ
    quads = [(1, 4, 3, 2), (5, 6, 7, 8), (1, 2, 6, 5), (2, 3, 7, 6), (3, 4, 8, 7), (5, 8, 4, 1)]
    lines = []
    for n, ((cx, cy, cz), (sx, sy, sz)) in enumerate(boxes):
        for dx, dy, dz in corners:
            lines.append(f"v {cx + dx * sx / 2} {cy + dy * sy / 2} {cz + dz * sz / 2}")
        for quad in quads:
            lines.append("f " + " ".join(str(i + 8 * n) for i in quad))
    return "\n".join(lines)


# Low-poly human: stacked boxes (torso, head, legs, arms)
HUMAN_OBJ = _boxes_obj([
    ((0, 0, 0), (0.6, 1.0, 0.3)),
    ((0, 0.9, 0), (0.4, 0.4, 0.4)),
    ((-0.2, -1.0, 0), (0.25, 0.6, 0.25)),
    ((0.2, -1.0, 0), (0.25, 0.6, 0.25)),
    ((-0.6, 0.1, 0), (0.2, 0.8, 0.2)),
    ((0.6, 0.1, 0), (0.2, 0.8, 0.2)),
])


BUILTIN_MESHES = {
    'cube': CUBE_OBJ,
    'pyramid': PYRAMID_OBJ,
    'arrow': ARROW_OBJ,
    'human': HUMAN_OBJ,
}


def load_mesh(asset) -> Mesh:
    """Resolve `builtin:<name>` or a path to an .obj file into a Mesh."""
    if asset.startswith(BUILTIN_PREFIX):
        key = asset[len(BUILTIN_PREFIX):]
        if key not in BUILTIN_MESHES:
            raise AssetError(f"Unknown built-in mesh {key!r}; choose from {sorted(BUILTIN_MESHES)}")
        loader = OBJLoader(BUILTIN_MESHES[key])
    elif asset.lower().endswith('.obj'):
        if not os.path.isfile(asset):
            raise AssetError(f"OBJ file not found: {asset}")
        loader = OBJLoader().load(asset)
    else:
        raise AssetError(f"Unsupported asset {asset!r}: expected builtin:<name> or an .obj file")

    data = loader.to_vbo()
    if data.size == 0:
        raise AssetError(f"Asset {asset!r} has no faces")
    mesh = Mesh(asset, data)
    logger.info("Loaded %s (%d vertices)", asset, mesh.vertex_count)
    return mesh
