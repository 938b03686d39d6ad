"""Shared test fixtures for dtui.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

PLAYER_XML = """\
<!DOCTYPE node PUBLIC "-//freedesktop//DTD D-BUS Object Introspection 1.0//EN"
 "http://www.freedesktop.org/standards/dbus/1.0/introspect.dtd">
<node name="/org/example/Player">
  <interface name="org.example.Player">
    <method name="Seek">
      <arg name="offset" type="x" direction="in"/>
    </method>
    <method name="SetVolume">
      <arg name="level" type="u"/>
      <arg name="options" type="a{sv}" direction="in"/>
      <arg name="previous" type="u" direction="out"/>
      <annotation name="org.freedesktop.DBus.Method.NoReply" value="false"/>
    </method>
    <method name="Stop"/>
    <signal name="Seeked">
      <arg name="position" type="x"/>
    </signal>
    <property name="Volume" type="d" access="readwrite"/>
    <doc>ignored</doc>
  </interface>
  <node name="tracks"/>
  <node name="playlists">
    <interface name="org.example.Playlists">
      <method name="Activate">
        <arg name="playlist" type="o" direction="in"/>
        <arg name="position" type="(su)" direction="in"/>
      </method>
    </interface>
  </node>
</node>
"""


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "dtui"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def player_xml() -> str:
    """Introspection document for a small media-player object tree."""
    return PLAYER_XML


@pytest.fixture()
def player_xml_file(tmp_path: Path) -> Path:
    """``player_xml`` written to a temporary file."""
    path = tmp_path / "player.xml"
    path.write_text(PLAYER_XML, encoding="utf-8")
    return path
