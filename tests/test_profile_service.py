"""Tests for profile and preference services."""

import json
from datetime import UTC, datetime, timedelta

import pytest

from sun_planner.domain.exposure import SkinType
from sun_planner.domain.preferences import Theme
from sun_planner.domain.profile import SunSession
from sun_planner.services.profiles import (
    PROFILE_KEY,
    THEME_KEY,
    PreferencesService,
    ProfileService,
)
from tests.conftest import InMemoryProfileStore, ReadOnlyAfterSetupStore

FIXED_NOW = datetime(2026, 7, 1, 12, 0, tzinfo=UTC)


def _session(session_id: str, minutes: int, offset_minutes: int = 0) -> SunSession:
    return SunSession(
        id=session_id,
        date=FIXED_NOW + timedelta(minutes=offset_minutes),
        duration_minutes=minutes,
        uv_index=6.0,
        location="My spot",
    )


def test_missing_profile_requires_onboarding() -> None:
    service = ProfileService(InMemoryProfileStore())

    assert service.current() is None
    assert service.history() == []


def test_complete_onboarding_saves_profile() -> None:
    store = InMemoryProfileStore()
    service = ProfileService(store, clock=lambda: FIXED_NOW)

    profile = service.complete_onboarding("Anna Svensson", SkinType.TYPE_2)

    assert profile.id == f"user_{int(FIXED_NOW.timestamp() * 1000)}"
    assert profile.email == "anna.svensson@gmail.com"
    assert profile.avatar_url is not None
    assert "Anna%20Svensson" in profile.avatar_url
    stored = json.loads(store.blobs[PROFILE_KEY])
    assert stored["skin_type"] == "II"
    assert stored["history"] == []


def test_complete_onboarding_rejects_blank_name() -> None:
    service = ProfileService(InMemoryProfileStore())

    with pytest.raises(ValueError):
        service.complete_onboarding("   ", SkinType.TYPE_1)


def test_skip_onboarding_creates_default_profile() -> None:
    service = ProfileService(InMemoryProfileStore())

    profile = service.skip_onboarding()

    assert profile.name == "Sun Lover"
    assert profile.skin_type is SkinType.TYPE_3
    assert profile.email == "user@example.com"


def test_profile_is_loaded_from_store() -> None:
    store = InMemoryProfileStore()
    ProfileService(store).complete_onboarding("Erik", SkinType.TYPE_4)

    reloaded = ProfileService(store).current()

    assert reloaded is not None
    assert reloaded.name == "Erik"
    assert reloaded.skin_type is SkinType.TYPE_4


def test_record_appends_and_history_is_newest_first() -> None:
    store = InMemoryProfileStore()
    service = ProfileService(store)
    service.skip_onboarding()

    service.record(_session("a", 10))
    service.record(_session("b", 20, offset_minutes=60))

    assert [session.id for session in service.history()] == ["b", "a"]
    stored = json.loads(store.blobs[PROFILE_KEY])
    assert [item["id"] for item in stored["history"]] == ["a", "b"]
    reloaded = ProfileService(store).current()
    assert reloaded is not None
    assert reloaded.history[1].date == FIXED_NOW + timedelta(minutes=60)


def test_record_without_profile_is_dropped() -> None:
    store = InMemoryProfileStore()
    service = ProfileService(store)

    service.record(_session("a", 10))

    assert store.blobs == {}


def test_update_skin_type_keeps_history() -> None:
    service = ProfileService(InMemoryProfileStore())
    service.skip_onboarding()
    service.record(_session("a", 10))

    updated = service.update_skin_type(SkinType.TYPE_6)

    assert updated is not None
    assert updated.skin_type is SkinType.TYPE_6
    assert len(updated.history) == 1


def test_update_skin_type_without_profile() -> None:
    service = ProfileService(InMemoryProfileStore())

    assert service.update_skin_type(SkinType.TYPE_1) is None


def test_logout_deletes_profile() -> None:
    store = InMemoryProfileStore()
    service = ProfileService(store)
    service.skip_onboarding()

    service.logout()

    assert service.current() is None
    assert PROFILE_KEY not in store.blobs


def test_theme_defaults_to_light_and_toggles() -> None:
    store = InMemoryProfileStore()
    service = PreferencesService(store)

    assert service.get_theme() is Theme.LIGHT
    assert service.toggle_theme() is Theme.DARK
    assert store.blobs[THEME_KEY] == "dark"
    assert PreferencesService(store).get_theme() is Theme.DARK
    assert service.toggle_theme() is Theme.LIGHT


def test_unknown_theme_value_reads_as_light() -> None:
    store = InMemoryProfileStore(blobs={THEME_KEY: "sepia"})

    assert PreferencesService(store).get_theme() is Theme.LIGHT


def test_record_keeps_session_when_store_write_fails() -> None:
    store = ReadOnlyAfterSetupStore()
    service = ProfileService(store)
    service.skip_onboarding()
    store.read_only = True

    service.record(_session("a", 10))

    assert [session.id for session in service.history()] == ["a"]
    assert json.loads(store.blobs[PROFILE_KEY])["history"] == []
