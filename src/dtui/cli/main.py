"""CLI entry point for dtui.

Invoked as::

    dtui [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m dtui.cli.main

Commands
--------
parse       Parse a literal against a signature
signature   Validate and describe a signature
grammar     Print the literal grammar
methods     List the members of an introspection XML file
call        Validate a method call's arguments (dry run, no bus I/O)
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from dtui.errors import ParseError
    from dtui.introspection.nodes import Node
    from dtui.signature.types import Signature
    from dtui.values.nodes import Value

console = Console()
err_console = Console(stderr=True)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _signature_or_exit(text: str) -> "Signature":
    """Decode a signature argument, printing the problem and exiting on failure."""
    from dtui.errors import SignatureError
    from dtui.signature import UnitSignature, parse_signature

    try:
        signature = parse_signature(text)
    except SignatureError as exc:
        err_console.print(f"[red]Invalid signature[/red] {text!r}: {exc.reason}")
        sys.exit(1)
    if isinstance(signature, UnitSignature):
        err_console.print("[red]Error:[/red] the empty signature has no literals")
        sys.exit(1)
    return signature


def _read_node_or_exit(path: str) -> "Node":
    """Read an introspection XML file, exiting on error."""
    from dtui.errors import IntrospectionError
    from dtui.introspection import read_introspection

    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    try:
        return read_introspection(text)
    except IntrospectionError as exc:
        err_console.print(f"[red]Introspection error[/red] in {path}: {exc}")
        sys.exit(1)


def _error_table(title: str, errors: Sequence["ParseError"]) -> Table:
    table = Table(title=title, show_lines=True)
    table.add_column("Kind", style="bold", min_width=10)
    table.add_column("Offset", min_width=6)
    table.add_column("Expected", min_width=10)
    table.add_column("Message")
    for error in errors:
        table.add_row(
            f"[red]{error.kind.name}[/red]",
            f"{error.span.start}..{error.span.end}",
            escape(error.expected),
            escape(error.message) + (f"\n[dim]found: {escape(repr(error.found))}[/dim]" if error.found else ""),
        )
    return table


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="dtui")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Logging level for diagnostics written to stderr.",
)
def cli(log_level: str) -> None:
    """Typed literal parser and method-call checker for D-Bus."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from dtui import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]dtui[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# grammar command
# ---------------------------------------------------------------------------


@cli.command(name="grammar")
def grammar_command() -> None:
    """Print the literal grammar and an example literal per type code."""
    from dtui.grammar import EXAMPLE_LITERALS, FULL_GRAMMAR

    console.print(Syntax(FULL_GRAMMAR, "text"))
    table = Table(title="Examples")
    table.add_column("Type", style="bold")
    table.add_column("Literal")
    for code, literal in EXAMPLE_LITERALS.items():
        table.add_row(code, literal)
    console.print(table)


# ---------------------------------------------------------------------------
# signature command
# ---------------------------------------------------------------------------


@cli.command(name="signature")
@click.argument("signature")
def signature_command(signature: str) -> None:
    """Validate a signature and show its structure.

    SIGNATURE is D-Bus signature text such as 'a{sv}'.
    """
    from dtui.signature import (
        ArraySignature,
        DictSignature,
        StructureSignature,
    )

    sig = _signature_or_exit(signature)

    def add(tree: Tree, node: "Signature") -> None:
        branch = tree.add(f"[bold]{node}[/bold] [dim]{node.label}[/dim]")
        if isinstance(node, ArraySignature):
            add(branch, node.element)
        elif isinstance(node, DictSignature):
            add(branch, node.key)
            add(branch, node.value)
        elif isinstance(node, StructureSignature):
            for child in node.fields:
                add(branch, child)

    root = Tree(f"[green]OK[/green] {signature}")
    add(root, sig)
    console.print(root)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("signature")
@click.argument("literal")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml"], case_sensitive=False),
    default="text",
    help="Output format for the parsed value",
)
@click.option("--strict-keys", is_flag=True, default=False, help="Reject duplicate dictionary keys")
def parse_command(signature: str, literal: str, output_format: str, strict_keys: bool) -> None:
    """Parse LITERAL as a value of SIGNATURE.

    Examples:

    \b
        dtui parse as '["a", "b"]'
        dtui parse 'a{sv}' '{"volume": "u"->5}' --format yaml
    """
    from dtui.formatter import format_value
    from dtui.parser import DuplicateKeyPolicy, compile
    from dtui.values import ValueSerializer

    sig = _signature_or_exit(signature)
    policy = DuplicateKeyPolicy.REJECT if strict_keys else DuplicateKeyPolicy.LAST_WINS
    result = compile(sig, duplicate_keys=policy).parse(literal)
    if not result.ok:
        err_console.print(_error_table(f"Parse errors: {signature}", result.errors))
        sys.exit(1)

    value = result.unwrap()
    serializer = ValueSerializer()
    if output_format == "json":
        console.print(Syntax(serializer.to_json(value), "json"))
    elif output_format == "yaml":
        console.print(Syntax(serializer.to_yaml(value), "yaml"))
    else:
        console.print(f"[green]OK[/green] {value.signature}: {escape(format_value(value))}", highlight=False)


# ---------------------------------------------------------------------------
# methods command
# ---------------------------------------------------------------------------


@cli.command(name="methods")
@click.argument("file", type=click.Path(exists=False))
def methods_command(file: str) -> None:
    """List the interfaces and members described by an introspection file.

    FILE is an XML document as returned by Introspect().
    """
    node = _read_node_or_exit(file)
    found = False
    for path, obj in node.walk():
        for interface in obj.interfaces:
            found = True
            table = Table(title=f"{path}  {interface.name}", show_lines=False)
            table.add_column("Kind", style="bold", min_width=8)
            table.add_column("Name")
            table.add_column("In")
            table.add_column("Out")
            for method in interface.methods:
                table.add_row("method", method.name, method.in_signature, method.out_signature)
            for signal in interface.signals:
                table.add_row("signal", signal.name, "", "".join(str(a.signature) for a in signal.args))
            for prop in interface.properties:
                table.add_row("property", prop.name, prop.access.value, str(prop.signature))
            console.print(table)
    if not found:
        console.print(f"[yellow]No interfaces found in {file}[/yellow]")


# ---------------------------------------------------------------------------
# call command
# ---------------------------------------------------------------------------


class _PrintingCaller:
    """Stands in for the bus: shows the call it would make."""

    def call_method(
        self,
        service: str,
        object_path: str,
        interface: str,
        method: str,
        args: Sequence["Value"],
    ) -> None:
        from dtui.formatter import format_value

        console.print(f"[bold]Call[/bold] {service} {object_path} {interface}.{method}")
        for position, value in enumerate(args):
            console.print(f"  [{position}] {value.signature}: {escape(format_value(value))}", highlight=False)


@cli.command(name="call")
@click.argument("file", type=click.Path(exists=False))
@click.argument("interface")
@click.argument("method")
@click.argument("args", nargs=-1)
@click.option("--object-path", "object_path", default="/", help="Object that implements INTERFACE")
@click.option("--service", default="(dry-run)", help="Bus name shown in the call summary")
def call_command(
    file: str,
    interface: str,
    method: str,
    args: tuple[str, ...],
    object_path: str,
    service: str,
) -> None:
    """Check the arguments of a method call without sending it.

    FILE is an introspection XML document, ARGS one literal per input
    argument of METHOD, in declared order.

    Examples:

    \b
        dtui call player.xml org.example.Player Seek 5000
    """
    from dtui.call import MethodCallForm
    from dtui.errors import SubmissionBlocked

    node = _read_node_or_exit(file)
    target = dict(node.walk()).get(object_path)
    if target is None:
        err_console.print(f"[red]Error:[/red] No object {object_path!r} in {file}")
        sys.exit(1)
    try:
        declared = target.interface(interface).method(method)
    except KeyError as exc:
        err_console.print(f"[red]Error:[/red] {exc.args[0]}")
        sys.exit(1)

    form = MethodCallForm(service, object_path, interface, declared)
    if len(args) != len(form.inputs):
        err_console.print(
            f"[red]Error:[/red] {method} takes {len(form.inputs)} argument(s) "
            f"({declared.in_signature or 'none'}), got {len(args)}"
        )
        sys.exit(1)
    for field, text in zip(form.inputs, args):
        form.edit(field.position, text)

    try:
        form.submit(_PrintingCaller())
    except SubmissionBlocked as exc:
        for position, errors in exc.failures.items():
            field = form.fields[position]
            title = f"Argument {position} ({field.arg.display_name}: {field.arg.signature})"
            err_console.print(_error_table(title, errors))
        sys.exit(1)


if __name__ == "__main__":
    cli()
