"""
Structured serialization adapter.

Round-trips kernel values through a generic field tree (plain dicts, lists,
strings and ints) validated by the NumberNode pydantic model. The tree keeps
the representation tag, so a loaded value has the same kind as the dumped
one, not merely the same numeric value.

Example tree for ``3-0.(3)i``::

    {"type": "float", "kind": "complex",
     "real": {"type": "float", "kind": "small", "text": "3.0"},
     "imag": {"type": "float", "kind": "recurring", "text": "-0.3", "period": 1}}
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import InvalidFormatError
from ..core.logging import get_context_logger
from ..math.integer import Int
from ..math.numeric import Float
from ..math.representation import FloatKind, IntKind
from ..math.value import NumberValue

logger = get_context_logger(__name__, component="serialization")


class NumberNode(BaseModel):
    """One node of the serialized field tree."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["int", "float"] = Field(description="Value type")
    kind: str = Field(description="Representation tag (IntKind or FloatKind value)")
    text: Optional[str] = Field(default=None, description="Exact payload text")
    period: Optional[int] = Field(default=None, ge=1, description="Cycle length for recurring values")
    real: Optional[NumberNode] = Field(default=None, description="Real part of a complex value")
    imag: Optional[NumberNode] = Field(default=None, description="Imaginary part of a complex value")


NumberNode.model_rebuild()


class ValueSerializer:
    """
    Converts kernel values to and from NumberNode trees.

    The serializer holds no state; hosts construct one and inject it where
    values cross a storage or wire boundary.
    """

    def to_node(self, value: NumberValue) -> NumberNode:
        if isinstance(value, Int):
            return NumberNode(type="int", kind=value.kind.value, text=value.to_string())
        kind = value.kind
        if kind is FloatKind.COMPLEX:
            return NumberNode(
                type="float",
                kind=kind.value,
                real=self.to_node(value.real),
                imag=self.to_node(value.imag),
            )
        if kind is FloatKind.SMALL:
            return NumberNode(type="float", kind=kind.value, text=repr(value.small))
        if kind is FloatKind.RECURRING:
            return NumberNode(type="float", kind=kind.value, text=str(value.decimal), period=value.period)
        if kind in (FloatKind.BIG, FloatKind.IRRATIONAL):
            return NumberNode(type="float", kind=kind.value, text=str(value.decimal))
        return NumberNode(type="float", kind=kind.value)

    def from_node(self, node: NumberNode) -> NumberValue:
        try:
            if node.type == "int":
                return Int(int(Decimal(self._text(node))), IntKind(node.kind))
            return self._float_from_node(node)
        except InvalidFormatError:
            raise
        except (ValueError, InvalidOperation) as exc:
            raise InvalidFormatError(
                f"Invalid serialized value: {exc}", details={"node": node.model_dump(exclude_none=True)}
            ) from exc

    def _float_from_node(self, node: NumberNode) -> Float:
        kind = FloatKind(node.kind)
        if kind is FloatKind.COMPLEX:
            if node.real is None or node.imag is None:
                raise InvalidFormatError("Complex node needs real and imag parts")
            return Float.complex(self._float_from_node(node.real), self._float_from_node(node.imag))
        if kind is FloatKind.SMALL:
            return Float(kind=kind, small=float(self._text(node)))
        if kind is FloatKind.RECURRING:
            return Float.recurring(Decimal(self._text(node)), node.period or 0)
        if kind in (FloatKind.BIG, FloatKind.IRRATIONAL):
            return Float(kind=kind, decimal=Decimal(self._text(node)))
        return Float(kind=kind)

    @staticmethod
    def _text(node: NumberNode) -> str:
        if node.text is None:
            raise InvalidFormatError(f"Node of kind {node.kind!r} needs a text payload")
        return node.text

    # Field-tree and JSON surfaces

    def dump(self, value: NumberValue) -> Dict[str, Any]:
        """Value -> plain field tree."""
        return self.to_node(value).model_dump(exclude_none=True)

    def load(self, tree: Dict[str, Any]) -> NumberValue:
        """Plain field tree -> value (same kind as dumped)."""
        try:
            node = NumberNode.model_validate(tree)
        except ValidationError as exc:
            logger.warning("Rejected serialized value", extra_data={"errors": exc.errors()})
            raise InvalidFormatError(
                "Serialized value failed validation", details={"errors": exc.errors()}
            ) from exc
        return self.from_node(node)

    def dumps(self, value: NumberValue) -> str:
        return self.to_node(value).model_dump_json(exclude_none=True)

    def loads(self, payload: str) -> NumberValue:
        try:
            node = NumberNode.model_validate_json(payload)
        except ValidationError as exc:
            logger.warning("Rejected serialized value", extra_data={"errors": exc.errors()})
            raise InvalidFormatError(
                "Serialized value failed validation", details={"errors": exc.errors()}
            ) from exc
        return self.from_node(node)
