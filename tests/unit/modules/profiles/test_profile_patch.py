"""Partial profile updates."""

import pytest

from src.modules.profiles.patch import KEEP, Keep, ProfilePatch, Set


def test_keep_is_a_singleton():
    assert Keep() is KEEP


def test_empty_patch_changes_nothing():
    assert ProfilePatch().updates() == {}


def test_explicit_null_is_an_update():
    patch = ProfilePatch.from_fields({"drone_model": None})

    assert patch.drone_model == Set(None)
    assert patch.bio is KEEP
    assert patch.updates() == {"drone_model": None}


def test_unknown_fields_are_ignored():
    patch = ProfilePatch.from_fields({"bio": "hi", "provider_address": "0xabc"})
    assert patch.updates() == {"bio": "hi"}


def test_patch_is_immutable():
    patch = ProfilePatch()
    with pytest.raises(AttributeError):
        patch.bio = Set("x")
