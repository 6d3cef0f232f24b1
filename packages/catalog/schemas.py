import math
from dataclasses import dataclass
from typing import Optional, Dict, Union, Any

from pydantic import BaseModel, ConfigDict, Field

JSONScalar = Union[str, float, int, bool, None]

# Keys the store owns; never taken from a request body.
RESERVED_KEYS = ("id", "_id")

class ComponentDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Identity
    type: Optional[str] = None     # cpu, motherboard, psu, ram, gpu, etc.

    # Free-form attributes: socket, memoryType, wattage, ...
    specs: Dict[str, JSONScalar] = Field(default_factory=dict)

class ComponentPatch(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    specs: Optional[Dict[str, JSONScalar]] = None

def strip_reserved(body: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in body.items() if k not in RESERVED_KEYS}

def validate_document(body: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a create payload and return the document to store.

    Values are stored as sent; the model only checks their shape.
    """
    doc = strip_reserved(body)
    ComponentDocument.model_validate(doc)
    return doc

def validate_patch(body: Dict[str, Any]) -> Dict[str, Any]:
    patch = strip_reserved(body)
    ComponentPatch.model_validate(patch)
    return patch

class InvalidFilterValue(ValueError):
    def __init__(self, name: str, value: str):
        super().__init__(f"Invalid {name} value: {value!r}")
        self.name = name
        self.value = value

@dataclass(frozen=True)
class ComponentQuery:
    """Conjunction of optional equality/threshold predicates on components."""
    type: Optional[str] = None
    socket: Optional[str] = None
    memory_type: Optional[str] = None
    min_wattage: Optional[float] = None

    def is_empty(self) -> bool:
        return (self.type is None and self.socket is None
                and self.memory_type is None and self.min_wattage is None)

def _parse_number(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise InvalidFilterValue(name, raw)
    if not math.isfinite(value):
        raise InvalidFilterValue(name, raw)
    return value

def build_component_query(type: Optional[str] = None, socket: Optional[str] = None,
                          memory_type: Optional[str] = None,
                          wattage: Optional[str] = None) -> ComponentQuery:
    """Build a search filter from raw query parameters.

    Empty or blank strings count as absent. ``wattage`` must parse as a finite
    number, otherwise ``InvalidFilterValue`` is raised.
    """
    return ComponentQuery(
        type=type or None,
        socket=socket or None,
        memory_type=memory_type or None,
        min_wattage=_parse_number("wattage", wattage.strip()) if wattage and wattage.strip() else None,
    )
