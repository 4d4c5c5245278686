from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class Property:
    names: List[str]
    value: Union[str, "Item"]


@dataclass
class Item:
    item_type: Optional[List[str]] = None
    item_id: Optional[str] = None
    properties: List[Property] = field(default_factory=list)

    def values(self, name: str) -> List[Union[str, "Item"]]:
        """All values of the named property, in document order."""
        return [p.value for p in self.properties if name in p.names]

    def get(self, name: str, default=None):
        found = self.values(name)
        return found[0] if found else default

    def to_dict(self) -> Dict[str, Any]:
        """
        Microdata JSON shape: type / id / properties{name: [values]}
        """
        result: Dict[str, Any] = {}

        if self.item_type:
            result["type"] = list(self.item_type)
        if self.item_id:
            result["id"] = self.item_id

        props: Dict[str, List[Any]] = {}
        for prop in self.properties:
            value = prop.value.to_dict() if isinstance(prop.value, Item) else prop.value
            for name in prop.names:
                props.setdefault(name, []).append(value)

        result["properties"] = props
        return result
