"""Introspection model: objects, interfaces and their members.

Mirrors the D-Bus introspection format.  Every argument and property
carries its decoded ``Signature`` so that a method-call form can compile
one literal parser per argument without touching signature text again.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from dtui.signature.types import Signature


class ArgDirection(Enum):
    """Whether a method argument is sent (``in``) or returned (``out``)."""

    IN = "in"
    OUT = "out"


class PropertyAccess(Enum):
    """Access mode of an interface property."""

    READ = "read"
    WRITE = "write"
    READWRITE = "readwrite"


@dataclass(frozen=True, slots=True)
class Annotation:
    """A ``<annotation name=... value=...>`` element."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class Arg:
    """One method or signal argument."""

    signature: Signature
    direction: ArgDirection
    name: str | None = None

    @property
    def is_input(self) -> bool:
        return self.direction is ArgDirection.IN

    @property
    def display_name(self) -> str:
        return self.name or "(unnamed)"


@dataclass(frozen=True, slots=True)
class Method:
    """A callable member of an interface."""

    name: str
    args: tuple[Arg, ...] = ()
    annotations: tuple[Annotation, ...] = ()

    @property
    def in_args(self) -> tuple[Arg, ...]:
        return tuple(a for a in self.args if a.is_input)

    @property
    def out_args(self) -> tuple[Arg, ...]:
        return tuple(a for a in self.args if not a.is_input)

    @property
    def in_signature(self) -> str:
        """Concatenated signature of the input arguments, e.g. ``"sa{sv}"``."""
        return "".join(str(a.signature) for a in self.in_args)

    @property
    def out_signature(self) -> str:
        return "".join(str(a.signature) for a in self.out_args)


@dataclass(frozen=True, slots=True)
class Signal:
    """A signal emitted by an interface; every argument is outgoing."""

    name: str
    args: tuple[Arg, ...] = ()
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True, slots=True)
class Property:
    """A typed interface property."""

    name: str
    signature: Signature
    access: PropertyAccess
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True, slots=True)
class Interface:
    """A named group of methods, signals and properties."""

    name: str
    methods: tuple[Method, ...] = ()
    signals: tuple[Signal, ...] = ()
    properties: tuple[Property, ...] = ()
    annotations: tuple[Annotation, ...] = ()

    def method(self, name: str) -> Method:
        """Return the method called ``name``.

        Raises
        ------
        KeyError
            If the interface declares no such method.
        """
        for method in self.methods:
            if method.name == name:
                return method
        raise KeyError(f"Interface {self.name!r} has no method {name!r}")


@dataclass(frozen=True, slots=True)
class Node:
    """An object in the tree; children are relative to this node's path."""

    name: str | None = None
    interfaces: tuple[Interface, ...] = ()
    children: tuple["Node", ...] = field(default=())

    def interface(self, name: str) -> Interface:
        """Return the interface called ``name``.

        Raises
        ------
        KeyError
            If the node does not implement the interface.
        """
        for interface in self.interfaces:
            if interface.name == name:
                return interface
        raise KeyError(f"Object does not implement interface {name!r}")

    def walk(self, path: str | None = None) -> Iterator[tuple[str, "Node"]]:
        """Yield ``(object_path, node)`` for this node and every descendant.

        The root path defaults to the node's own name when that is absolute,
        else ``/``.
        """
        if path is None:
            path = self.name if self.name and self.name.startswith("/") else "/"
        yield path, self
        for child in self.children:
            if not child.name:
                continue
            child_path = f"{path.rstrip('/')}/{child.name}"
            yield from child.walk(child_path)
