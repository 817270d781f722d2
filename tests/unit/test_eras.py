"""Tests for era_blender.core.eras — era presets and prompt resolution."""

from __future__ import annotations

import pytest

from era_blender.core.eras import (
    SUPPORTED_YEARS,
    TEXT_SCENE_SEPARATOR,
    build_image_prompt,
    build_text_prompt,
    get_era,
    list_eras,
    placeholder_image_url,
    resolve,
)
from era_blender.core.errors import UnsupportedEraError


class TestEraTable:
    def test_four_eras_in_order(self):
        assert [era.year for era in list_eras()] == [1900, 1950, 2000, 2050]
        assert SUPPORTED_YEARS == [1900, 1950, 2000, 2050]

    def test_labels_and_colors(self):
        eras = {era.year: era for era in list_eras()}
        assert eras[1900].label == "1900s"
        assert eras[1900].color == "vintage"
        assert eras[1950].color == "classic"
        assert eras[2000].color == "modern"
        assert eras[2050].color == "future"

    def test_to_dict_omits_template(self):
        data = get_era(1950).to_dict()
        assert set(data) == {"year", "label", "description", "color"}


class TestResolve:
    @pytest.mark.parametrize("year", [1900, 1950, 2000, 2050])
    def test_known_eras_have_templates(self, year):
        template = resolve(year)
        assert template.strip()
        assert f"{year}s" in template

    def test_numeric_string_accepted(self):
        assert resolve("2050") == resolve(2050)

    @pytest.mark.parametrize("value", [1975, "1975", "abc", None, "", 0, True, 2050.5])
    def test_unknown_era_rejected(self, value):
        with pytest.raises(UnsupportedEraError):
            resolve(value)

    def test_error_lists_supported_eras(self):
        with pytest.raises(UnsupportedEraError) as exc_info:
            resolve(1975)
        message = str(exc_info.value)
        assert "1975" in message
        assert "1900, 1950, 2000, 2050" in message
        assert exc_info.value.supported == [1900, 1950, 2000, 2050]


class TestPromptBuilding:
    def test_image_prompt_is_template_alone(self):
        assert build_image_prompt(1900) == resolve(1900)

    def test_text_prompt_appends_user_text(self):
        prompt = build_text_prompt(2050, "a quiet village square")
        assert prompt == resolve(2050) + TEXT_SCENE_SEPARATOR + "a quiet village square"

    def test_text_prompt_is_not_escaped(self):
        text = "<b>{braces}</b> & \"quotes\""
        assert build_text_prompt(1950, text).endswith(text)

    def test_placeholder_url(self):
        url = placeholder_image_url(get_era(2000), "https://example.test/{year}/{label}")
        assert url == "https://example.test/2000/2000s"
