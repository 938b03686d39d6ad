#!/usr/bin/env python3
"""Example: Quickstart — dtui

Minimal working example: decode a signature, parse literals against it
(including a broken one), render a value back, and check a method call
described by introspection XML.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install dtui
"""
from __future__ import annotations

import dtui
from dtui.call import MethodCallForm
from dtui.errors import SubmissionBlocked

INTROSPECTION_XML = '''
<node name="/org/example/Player">
  <interface name="org.example.Player">
    <method name="SetVolume">
      <arg name="level" type="u" direction="in"/>
      <arg name="options" type="a{sv}" direction="in"/>
      <arg name="previous" type="u" direction="out"/>
    </method>
  </interface>
</node>
'''


class EchoCaller:
    """Pretends to be the bus: replies with the first argument."""

    def call_method(self, service, object_path, interface, method, args):
        print(f"  -> {service} {object_path} {interface}.{method}{tuple(dtui.format(a) for a in args)}")
        return [args[0]]


def main() -> None:
    print(f"dtui version: {dtui.__version__}")

    # Step 1: Decode a signature and compile its parser once
    signature = dtui.parse_signature("a{sv}")
    parser = dtui.compile(signature)
    print(f"Compiled {parser!r} for {signature.label}")

    # Step 2: Parse a valid literal
    result = parser.parse('{"volume": "u"->5, "title": "s"->"Intro"}')
    print(f"Valid literal: ok={result.ok}")

    # Step 3: Parse a broken literal and list every error
    result = dtui.compile("as").parse('["a", b, "c", d]')
    print(f"Broken literal: {len(result.errors)} error(s)")
    for error in result.errors:
        print(f"  {error}")

    # Step 4: Render a value back to literal text
    value = dtui.parse("(sad)", '("x",[1, 2.5])')
    print(f"Formatted: {dtui.format(value)}")

    # Step 5: Fill in a method call form and submit it
    node = dtui.read_introspection(INTROSPECTION_XML)
    method = node.interface("org.example.Player").method("SetVolume")
    form = MethodCallForm("org.example", "/org/example/Player", "org.example.Player", method)
    form.edit(0, "70000000000")
    try:
        form.submit(EchoCaller())
    except SubmissionBlocked as exc:
        print(f"Blocked: {exc}")
    form.edit(0, "7")
    form.edit(1, '{"fade": "d"->0.5}')
    form.submit(EchoCaller())
    print(f"Reply: previous={form.outputs[0].text}")


if __name__ == "__main__":
    main()
