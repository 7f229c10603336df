"""
Tests for prompt construction and how each prompt routes through the fallback matcher.
"""
from types import SimpleNamespace

import pytest

from fitai.agents.fallbacks import (
    GENERIC_ANSWER,
    NUTRITION_PLAN_FALLBACK,
    PROTEIN_ANSWER,
    SLEEP_PLAN_FALLBACK,
    WORKOUT_PLAN_FALLBACK,
    fallback_response,
)
from fitai.agents.prompts import (
    build_chat_prompt,
    build_nutrition_prompt,
    build_prompt,
    build_schedule_prompt,
    build_sleep_prompt,
    build_workout_prompt,
)
from fitai.models.schemas import Intent


def _profile(goal="bulking"):
    return SimpleNamespace(weight=82, body_fat=21, muscle_mass=37, age=31, goal=goal)


@pytest.mark.parametrize("builder", [build_workout_prompt, build_nutrition_prompt, build_sleep_prompt])
def test_plan_prompts_embed_metrics(builder):
    prompt = builder(_profile())
    assert "82 kg" in prompt
    assert "21%" in prompt
    assert "37%" in prompt
    assert "31 tahun" in prompt


def test_workout_goal_phrases():
    assert "menambah massa otot" in build_workout_prompt(_profile("bulking"))
    assert "menurunkan lemak tubuh" in build_workout_prompt(_profile("cutting"))
    assert "rekomposisi tubuh" in build_workout_prompt(_profile("recomposition"))
    assert "Tujuan: umum" in build_workout_prompt(_profile("something-else"))


def test_workout_prompt_asks_for_day_structure():
    prompt = build_workout_prompt(_profile())
    for day in ("SENIN:", "SELASA:", "RABU:", "KAMIS:", "JUMAT:", "SABTU:", "MINGGU:"):
        assert day in prompt


def test_nutrition_prompt_lists_required_content():
    prompt = build_nutrition_prompt(_profile("cutting"))
    assert "1. Target kalori harian" in prompt
    assert "defisit kalori" in prompt


def test_schedule_prompt_unknown_goal():
    assert "fitness umum" in build_schedule_prompt(_profile(None))


@pytest.mark.parametrize(
    "builder, expected",
    [
        (build_workout_prompt, WORKOUT_PLAN_FALLBACK),
        (build_nutrition_prompt, NUTRITION_PLAN_FALLBACK),
        (build_sleep_prompt, SLEEP_PLAN_FALLBACK),
    ],
)
@pytest.mark.parametrize("goal", ["cutting", "bulking", "recomposition", "unknown"])
def test_plan_prompts_route_to_their_fallback(builder, expected, goal):
    assert fallback_response(builder(_profile(goal))) == expected


def test_chat_prompt_without_profile():
    prompt = build_chat_prompt("Apa itu HIIT?")
    assert '"Apa itu HIIT?"' in prompt
    assert "Context pengguna" not in prompt
    assert "maksimal 100 kata" in prompt


def test_chat_prompt_with_profile_context():
    prompt = build_chat_prompt("Halo", _profile("cutting"))
    assert "Berat: 82kg, Lemak: 21%, Otot: 37%" in prompt
    assert "Usia: 31 tahun, Tujuan: cutting" in prompt


def test_chat_template_itself_triggers_no_rule():
    # only the user's words decide which canned answer a chat gets
    assert fallback_response(build_chat_prompt("Halo", _profile())) == GENERIC_ANSWER
    assert fallback_response(build_chat_prompt("butuh protein berapa?", _profile())) == PROTEIN_ANSWER


def test_build_prompt_dispatch():
    profile = _profile()
    assert build_prompt(Intent.WORKOUT_PLAN, profile) == build_workout_prompt(profile)
    assert build_prompt("weekly-schedule", profile) == build_schedule_prompt(profile)
    assert build_prompt("chat", None, "Halo") == build_chat_prompt("Halo")


def test_build_prompt_requires_inputs():
    with pytest.raises(ValueError):
        build_prompt(Intent.CHAT, _profile())
    with pytest.raises(ValueError):
        build_prompt(Intent.SLEEP_PLAN, None)
