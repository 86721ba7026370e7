from typing import Any, TypeVar

T = TypeVar("T", bound="GraphObject")


class GraphObject:
    """Read-only view of a node returned by Graph API."""

    def __init__(self, raw: Any = None):
        if isinstance(raw, dict):
            data = raw.get("data")
            # A single-node list payload is unwrapped to the node itself
            if isinstance(data, list) and len(data) == 1 and isinstance(data[0], dict):
                raw = data[0]
        self._backing_data = raw if isinstance(raw, dict) else {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._backing_data!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphObject):
            return NotImplemented
        return self._backing_data == other._backing_data

    def cast(self, cls: type[T]) -> T:
        return cls(self._backing_data)

    def as_dict(self) -> dict:
        return dict(self._backing_data)

    def get_property(self, name: str, cls: type["GraphObject"] | None = None) -> Any:
        """Return a property; nested objects come back wrapped in ``cls``."""
        if name not in self._backing_data:
            return None
        value = self._backing_data[name]
        if isinstance(value, dict):
            return (cls or GraphObject)(value)
        return value

    def get_property_as_list(self, name: str, cls: type["GraphObject"] | None = None) -> list:
        """Return a list property (or the ``data`` list inside it) as GraphObjects."""
        value = self._backing_data.get(name)
        if isinstance(value, dict):
            value = value.get("data")
        if not isinstance(value, list):
            return []
        wrap = cls or GraphObject
        return [wrap(item) if isinstance(item, dict) else item for item in value]

    def get_property_names(self) -> list[str]:
        return list(self._backing_data)
