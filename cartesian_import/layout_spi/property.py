from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from cartesian_import.errors import PropertyDescriptorError
from cartesian_import.graph.model import GraphModel
from cartesian_import.layout_spi.editors import PropertyEditor, editor_for

if TYPE_CHECKING:
    from cartesian_import.layout_spi.layout import Layout


@dataclass
class LayoutProperty:
    name: str
    """Name shown to the user."""
    category: str
    """Group the property is listed under, usually the layout name."""
    description: str
    """Help text shown next to the property."""
    value_type: type
    getter: Callable[[], Any] = field(repr=False)
    setter: Callable[[Any], None] = field(repr=False)
    editor: PropertyEditor = field(default_factory=PropertyEditor)

    @classmethod
    def create(
        cls,
        layout: "Layout",
        value_type: type,
        name: str,
        category: str,
        description: str,
        attribute: str | None = None,
        editor: PropertyEditor | None = None,
    ) -> "LayoutProperty":
        """Describe a settable python property of a layout.

        Raises:
            PropertyDescriptorError: If the layout has no settable property
                named ``attribute`` (defaults to ``name``).
        """
        attribute = attribute or name
        descriptor = getattr(type(layout), attribute, None)
        if not isinstance(descriptor, property) or descriptor.fget is None or descriptor.fset is None:
            raise PropertyDescriptorError(f"{type(layout).__name__} has no settable property {attribute!r}")
        return cls(
            name=name,
            category=category,
            description=description,
            value_type=value_type,
            getter=partial(descriptor.fget, layout),
            setter=partial(descriptor.fset, layout),
            editor=editor or editor_for(value_type),
        )

    @property
    def value(self) -> Any:
        return self.getter()

    def set_value(self, value: Any) -> None:
        self.setter(value)

    def set_as_text(self, text: str, graph_model: GraphModel | None = None) -> None:
        self.setter(self.editor.parse(text, graph_model))

    def as_text(self) -> str:
        return self.editor.format(self.value)
