"""Tests for OS/store inference from the System column and path markers."""

import pytest

from wikimanifest.enums import ErrorKind, Os, Store
from wikimanifest.errors import UnsupportedOsError
from wikimanifest.models import Constraint
from wikimanifest.paths.constraints import (
    constraint_from_path,
    constraint_from_system,
    os_from_path,
    parse_os,
    store_from_path,
)


class TestParseOs:
    @pytest.mark.parametrize("text,expected", [
        ("Windows", Os.WINDOWS),
        ("OS X", Os.MAC),
        ("Linux", Os.LINUX),
        ("DOS", Os.DOS),
    ])
    def test_known(self, text, expected):
        assert parse_os(text) == expected

    def test_unknown(self):
        with pytest.raises(UnsupportedOsError) as exc:
            parse_os("BeOS")
        assert exc.value.kind == ErrorKind.UNSUPPORTED_OS

    def test_exact_names_only(self):
        with pytest.raises(UnsupportedOsError):
            parse_os("windows 10")


class TestFromPath:
    def test_store_from_steam_root(self):
        assert store_from_path("{{P|steam}}\\userdata\\{{P|uid}}") == Store.STEAM

    def test_store_from_uplay_root(self):
        assert store_from_path("{{P|uplay}}\\savegames") == Store.UPLAY

    def test_no_store(self):
        assert store_from_path("{{P|appdata}}\\Game") is None

    def test_os_from_windows_variable(self):
        assert os_from_path("{{P|localappdata}}\\Game") == Os.WINDOWS

    def test_os_from_linux_variable(self):
        assert os_from_path("{{P|xdgdatahome}}/game") == Os.LINUX

    def test_constraint_from_path(self):
        assert constraint_from_path("{{P|game}}\\save") == Constraint()
        assert constraint_from_path("{{P|osxhome}}/Library") == Constraint(os=Os.MAC)


class TestFromSystem:
    def test_steam(self):
        assert constraint_from_system("Steam", "{{P|game}}/save.dat") == Constraint(store=Store.STEAM)

    def test_store_match_is_case_insensitive_substring(self):
        assert constraint_from_system("Steam Play (Linux)", "x").store == Store.STEAM
        assert constraint_from_system("GOG.com", "x") == Constraint(store=Store.GOG)
        assert constraint_from_system("Epic Games Store", "x") == Constraint(store=Store.EPIC)
        assert constraint_from_system("Uplay", "x") == Constraint(store=Store.UPLAY)

    def test_microsoft_store_forces_windows(self):
        assert constraint_from_system("Microsoft Store", "{{P|localappdata}}\\Packages") == Constraint(
            os=Os.WINDOWS, store=Store.MICROSOFT,
        )

    def test_os_with_store_from_path(self):
        assert constraint_from_system("Windows", "{{P|steam}}\\userdata") == Constraint(
            os=Os.WINDOWS, store=Store.STEAM,
        )

    def test_os_only(self):
        assert constraint_from_system("Linux", "{{P|xdgdatahome}}/game") == Constraint(os=Os.LINUX)

    def test_unknown_os(self):
        with pytest.raises(UnsupportedOsError):
            constraint_from_system("PlayStation 4", "{{P|game}}")

    def test_blank_system_uses_path(self):
        assert constraint_from_system("", "{{P|appdata}}\\Game") == Constraint(os=Os.WINDOWS)
        assert constraint_from_system("  ", "{{P|game}}\\save") == Constraint()
        # parse_os on its own still rejects an empty name
        with pytest.raises(UnsupportedOsError):
            parse_os("")


class TestConstraintModel:
    def test_equality_over_both_fields(self):
        assert Constraint(os=Os.WINDOWS) == Constraint(os=Os.WINDOWS, store=None)
        assert Constraint(os=Os.WINDOWS) != Constraint(os=Os.WINDOWS, store=Store.STEAM)
        assert Constraint() == Constraint()

    def test_empty(self):
        assert Constraint().is_empty()
        assert not Constraint(store=Store.EPIC).is_empty()
