from .transform import Transform


class Model:
    """A renderable mesh with its own transform and visibility.

    GPU buffers are attached by the renderer on first draw, so a Model can
    be built and driven without a GL context.
    """
    def __init__(self, name, mesh, color=(0.7, 0.5, 0.3), transform=None):
        self.name = name
        self.mesh = mesh
        self.color = tuple(color)
        self.position = (0.0, 0.0, 0.0)
        self.rotation = (0.0, 0.0, 0.0)
        self.scale = (1.0, 1.0, 1.0)
        self.visible = False
        self.gpu = None
        if transform is not None:
            self.apply(transform)

    def set_position(self, x, y, z):
        self.position = (float(x), float(y), float(z))

    def set_rotation(self, x, y, z):
        self.rotation = (float(x), float(y), float(z))

    def set_scale(self, x, y, z):
        self.scale = (float(x), float(y), float(z))

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False

    def apply(self, transform: Transform):
        self.set_position(*transform.position)
        self.set_rotation(*transform.rotation)
        self.set_scale(*transform.scale)

    @property
    def transform(self):
        return Transform(self.position, self.rotation, self.scale)

    def model_matrix(self):
        return self.transform.to_matrix()

    def __repr__(self):
        state = "visible" if self.visible else "hidden"
        return f"Model({self.name!r}, {state}, position={self.position})"
