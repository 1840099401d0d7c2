import logging

from .assets import load_mesh
from .landmarks import Handedness
from .model import Model
from .transform import Transform

logger = logging.getLogger(__name__)


class ModelBinding:
    """Ties one model to the hand (by handedness) that drives it."""
    def __init__(self, handedness, model: Model, transform=None):
        self.handedness = Handedness.parse(handedness)
        self.model = model
        self.visible = False
        self.transform = transform or Transform.identity()
        self.model.apply(self.transform)
        self.model.hide()

    def apply(self, transform: Transform):
        self.transform = transform
        self.model.apply(transform)

    def show(self):
        if not self.visible:
            logger.debug("%s model %s shown", self.handedness, self.model.name)
        self.visible = True
        self.model.show()

    def hide(self):
        if self.visible:
            logger.debug("%s model %s hidden", self.handedness, self.model.name)
        self.visible = False
        self.model.hide()

    def __repr__(self):
        return f"ModelBinding({self.handedness.value}, {self.model.name!r}, visible={self.visible})"


class ModelRegistry:
    """Ordered bindings, at most one per handedness."""
    def __init__(self, bindings=()):
        self._bindings = []
        for binding in bindings:
            self.add(binding)

    def add(self, binding: ModelBinding):
        if binding.handedness in self:
            raise ValueError(f"A model is already bound to the {binding.handedness.value} hand")
        self._bindings.append(binding)
        return binding

    def remove(self, handedness):
        binding = self.get(handedness)
        if binding is None:
            raise KeyError(handedness)
        self._bindings.remove(binding)
        return binding

    def get(self, handedness):
        try:
            handedness = Handedness.parse(handedness)
        except ValueError:
            return None
        for binding in self._bindings:
            if binding.handedness is handedness:
                return binding
        return None

    def visible(self):
        return [b for b in self._bindings if b.visible]

    def __contains__(self, handedness):
        return self.get(handedness) is not None

    def __iter__(self):
        return iter(list(self._bindings))

    def __len__(self):
        return len(self._bindings)


def build_registry(specs, loader=load_mesh) -> ModelRegistry:
    """Create one binding per ModelSpec, loading each asset with `loader`."""
    registry = ModelRegistry()
    for spec in specs:
        mesh = loader(spec.asset)
        base = Transform(tuple(spec.position), tuple(spec.rotation), tuple(spec.scale))
        model = Model(spec.name or spec.asset, mesh, color=spec.color)
        registry.add(ModelBinding(spec.handedness, model, transform=base))
        logger.info("Bound %s to the %s hand", model.name, spec.handedness)
    return registry
