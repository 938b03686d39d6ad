"""End-to-end: introspect, type arguments, submit, show the reply."""
from __future__ import annotations

from collections.abc import Sequence

import pytest

from dtui.call import MethodCallForm
from dtui.errors import ErrorKind, SubmissionBlocked
from dtui.introspection import read_introspection
from dtui.signature import TypeCode
from dtui.values import Scalar, StructureValue, Value


class RecordingCaller:
    """Echoes its arguments back as the reply."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str, str, tuple[Value, ...]]] = []

    def call_method(
        self,
        service: str,
        object_path: str,
        interface: str,
        method: str,
        args: Sequence[Value],
    ) -> Sequence[Value]:
        self.calls.append((service, object_path, interface, method, tuple(args)))
        return [StructureValue(tuple(args))]


def test_typing_session_until_submission(player_xml: str) -> None:
    node = read_introspection(player_xml)
    paths = dict(node.walk())
    playlists = paths["/org/example/Player/playlists"]
    method = playlists.interface("org.example.Playlists").method("Activate")
    form = MethodCallForm(
        "org.example", "/org/example/Player/playlists", "org.example.Playlists", method
    )

    # Every keystroke re-parses; intermediate states are invalid
    for prefix in ['"', '"/', '"/pl', '"/pl"']:
        form.edit(0, prefix)
    assert form.fields[0].is_valid

    form.edit(1, '("rock", ')
    assert not form.is_ready
    assert form.fields[1].errors[0].kind is ErrorKind.LEXICAL

    form.edit(1, '("rock", 4294967296)')
    assert form.fields[1].errors[0].kind is ErrorKind.RANGE
    with pytest.raises(SubmissionBlocked):
        form.submit(RecordingCaller())

    form.edit(1, '("rock", 3)')
    caller = RecordingCaller()
    form.submit(caller)

    assert len(caller.calls) == 1
    _, object_path, interface, name, args = caller.calls[0]
    assert object_path == "/org/example/Player/playlists"
    assert (interface, name) == ("org.example.Playlists", "Activate")
    assert args == (
        Scalar(TypeCode.OBJECT_PATH, "/pl"),
        StructureValue((Scalar(TypeCode.STR, "rock"), Scalar(TypeCode.U32, 3))),
    )


def test_reply_round_trips_through_output_field(player_xml: str) -> None:
    node = read_introspection(player_xml)
    method = node.interface("org.example.Player").method("SetVolume")
    form = MethodCallForm("org.example", "/org/example/Player", "org.example.Player", method)
    form.edit(0, "11")
    form.edit(1, '{"fade": "d"->0.25, "mute": "b"->false}')

    class Caller:
        def call_method(self, service, object_path, interface, method, args):  # type: ignore[no-untyped-def]
            return [args[0]]

    form.submit(Caller())
    output = form.outputs[0]
    assert output.text == "11"
    assert output.result.value == Scalar(TypeCode.U32, 11)
