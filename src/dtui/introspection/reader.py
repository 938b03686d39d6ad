"""Reader for D-Bus introspection XML.

Converts the document returned by ``org.freedesktop.DBus.Introspectable.
Introspect`` into the immutable ``Node`` model.  Argument and property
``type`` attributes are decoded with ``parse_signature`` so a malformed
signature is reported here, not later when an operator starts typing.

Rules follow the introspection DTD:

- a method ``<arg>`` without ``direction`` is an input
- signal arguments are always outputs
- unknown elements are skipped
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from pathlib import Path

from dtui.errors import IntrospectionError, SignatureError
from dtui.introspection.nodes import (
    Annotation,
    Arg,
    ArgDirection,
    Interface,
    Method,
    Node,
    Property,
    PropertyAccess,
    Signal,
)
from dtui.signature.parser import parse_signature
from dtui.signature.types import Signature, UnitSignature

logger = logging.getLogger(__name__)


class IntrospectionReader:
    """Builds ``Node`` trees from introspection XML elements."""

    def read(self, text: str) -> Node:
        """Parse an introspection document.

        Raises
        ------
        IntrospectionError
            If the XML is malformed, the root is not ``<node>``, or an
            argument or property has an invalid type.
        """
        try:
            root = ElementTree.fromstring(text)
        except ElementTree.ParseError as exc:
            raise IntrospectionError(f"Malformed introspection XML: {exc}") from exc
        if root.tag != "node":
            raise IntrospectionError(f"Expected a <node> root element, found <{root.tag}>")
        return self._read_node(root)

    # ------------------------------------------------------------------
    # Element readers
    # ------------------------------------------------------------------

    def _read_node(self, element: ElementTree.Element) -> Node:
        interfaces: list[Interface] = []
        children: list[Node] = []
        for child in element:
            if child.tag == "interface":
                interfaces.append(self._read_interface(child))
            elif child.tag == "node":
                children.append(self._read_node(child))
            else:
                self._skip(child, "node")
        return Node(
            name=element.get("name"),
            interfaces=tuple(interfaces),
            children=tuple(children),
        )

    def _read_interface(self, element: ElementTree.Element) -> Interface:
        name = self._required(element, "name")
        methods: list[Method] = []
        signals: list[Signal] = []
        properties: list[Property] = []
        annotations: list[Annotation] = []
        for child in element:
            if child.tag == "method":
                methods.append(self._read_method(child))
            elif child.tag == "signal":
                signals.append(self._read_signal(child))
            elif child.tag == "property":
                properties.append(self._read_property(child))
            elif child.tag == "annotation":
                annotations.append(self._read_annotation(child))
            else:
                self._skip(child, name)
        return Interface(
            name=name,
            methods=tuple(methods),
            signals=tuple(signals),
            properties=tuple(properties),
            annotations=tuple(annotations),
        )

    def _read_method(self, element: ElementTree.Element) -> Method:
        name = self._required(element, "name")
        args: list[Arg] = []
        annotations: list[Annotation] = []
        for child in element:
            if child.tag == "arg":
                direction = child.get("direction", ArgDirection.IN.value)
                try:
                    arg_direction = ArgDirection(direction)
                except ValueError:
                    raise IntrospectionError(
                        f"Method {name!r}: invalid arg direction {direction!r}"
                    ) from None
                args.append(self._read_arg(child, arg_direction, name))
            elif child.tag == "annotation":
                annotations.append(self._read_annotation(child))
            else:
                self._skip(child, name)
        return Method(name=name, args=tuple(args), annotations=tuple(annotations))

    def _read_signal(self, element: ElementTree.Element) -> Signal:
        name = self._required(element, "name")
        args: list[Arg] = []
        annotations: list[Annotation] = []
        for child in element:
            if child.tag == "arg":
                args.append(self._read_arg(child, ArgDirection.OUT, name))
            elif child.tag == "annotation":
                annotations.append(self._read_annotation(child))
            else:
                self._skip(child, name)
        return Signal(name=name, args=tuple(args), annotations=tuple(annotations))

    def _read_property(self, element: ElementTree.Element) -> Property:
        name = self._required(element, "name")
        access = self._required(element, "access")
        try:
            property_access = PropertyAccess(access)
        except ValueError:
            raise IntrospectionError(
                f"Property {name!r}: invalid access {access!r}"
            ) from None
        return Property(
            name=name,
            signature=self._type_of(element, name),
            access=property_access,
            annotations=tuple(
                self._read_annotation(c) for c in element if c.tag == "annotation"
            ),
        )

    def _read_arg(self, element: ElementTree.Element, direction: ArgDirection, owner: str) -> Arg:
        return Arg(
            signature=self._type_of(element, owner),
            direction=direction,
            name=element.get("name"),
        )

    def _read_annotation(self, element: ElementTree.Element) -> Annotation:
        return Annotation(
            name=self._required(element, "name"),
            value=element.get("value", ""),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _type_of(self, element: ElementTree.Element, owner: str) -> Signature:
        text = self._required(element, "type")
        try:
            signature = parse_signature(text)
        except SignatureError as exc:
            raise IntrospectionError(f"{owner!r}: {exc}") from exc
        if isinstance(signature, UnitSignature):
            raise IntrospectionError(f"{owner!r}: empty type attribute")
        return signature

    @staticmethod
    def _required(element: ElementTree.Element, attribute: str) -> str:
        value = element.get(attribute)
        if value is None:
            raise IntrospectionError(f"<{element.tag}> is missing the {attribute!r} attribute")
        return value

    @staticmethod
    def _skip(element: ElementTree.Element, owner: str) -> None:
        logger.debug("Skipping unknown element <%s> in %s", element.tag, owner)


def read_introspection(text: str) -> Node:
    """Convenience function: parse an introspection XML document.

    Example
    -------
    ::

        from dtui.introspection import read_introspection
        node = read_introspection(xml_text)
        method = node.interface("org.example.Player").method("Seek")
    """
    return IntrospectionReader().read(text)


def read_introspection_file(path: str | Path) -> Node:
    """Read an introspection XML document from a file."""
    return read_introspection(Path(path).read_text(encoding="utf-8"))
