"""
Unit tests for personality resolution and the avatar catalogue.
"""

from backend.avatar.personalities import AVATARS_3D, PERSONALITIES, resolve_personality


class TestResolvePersonality:
    """Tests for resolve_personality()."""

    def test_default_is_alegra(self) -> None:
        assert resolve_personality().id == "alegra"

    def test_known_id(self) -> None:
        assert resolve_personality("intenso").id == "intenso"

    def test_unknown_id_falls_back_to_alegra(self) -> None:
        assert resolve_personality("pirata").id == "alegra"

    def test_legacy_moods(self) -> None:
        assert resolve_personality(mood="happy").id == "alegra"
        assert resolve_personality(mood="calm").id == "empatico"
        assert resolve_personality(mood="intense").id == "intenso"
        assert resolve_personality(mood="sleepy").id == "alegra"

    def test_personality_id_wins_over_mood(self) -> None:
        assert resolve_personality("empatico", mood="intense").id == "empatico"


def test_every_prompt_forbids_revealing_ai() -> None:
    for personality in PERSONALITIES.values():
        assert "Nunca digas que eres una IA." in personality.system_prompt
        assert personality.system_prompt.strip().startswith(f"Eres {personality.name}")


def test_avatar_catalogue() -> None:
    assert [a["id"] for a in AVATARS_3D] == ["alegra", "bruma", "fuego"]
    assert all(a["modelUrl"].endswith(".glb") for a in AVATARS_3D)
