class CartesianImportError(Exception):
    """Base class for errors raised by cartesian_import."""


class PropertyDescriptorError(CartesianImportError, AttributeError):
    """A layout property refers to an accessor the layout does not have."""


class UnknownLayoutError(CartesianImportError, KeyError):
    """No layout builder is registered under the requested name."""


class UnknownColumnError(CartesianImportError, KeyError):
    """A column id could not be resolved against the node table."""
