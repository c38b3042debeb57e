"""
Tests for the preset library and the base galaxy config values.
"""

import pytest

from config import galaxy as config
from galaxy import GalaxyConfig, GalaxySimulation, VelocityModel
from tools.presets import CATEGORY_ORDER, PRESETS, get_preset_config, get_preset_list


class TestPresets:

    @pytest.mark.parametrize("key", sorted(PRESETS))
    def test_preset_builds_valid_config(self, key):
        values = get_preset_config(key)
        galaxy_config = GalaxyConfig.from_dict(values).validate()
        assert galaxy_config.count > 0

    @pytest.mark.parametrize("key", sorted(PRESETS))
    def test_preset_metadata(self, key):
        preset = PRESETS[key]
        assert preset["name"]
        assert preset["description"]
        assert preset["category"] in CATEGORY_ORDER

    def test_unknown_preset(self):
        assert get_preset_config("andromeda_xl") is None

    def test_base_values_untouched(self):
        before = dict(config.GALAXY)
        get_preset_config("dark_halo")
        get_preset_config("tiny")
        assert config.GALAXY == before

    def test_dark_halo_enables_halo(self):
        galaxy_config = GalaxyConfig.from_dict(get_preset_config("dark_halo"))
        assert galaxy_config.dark_matter.enabled
        assert galaxy_config.velocity_model is VelocityModel.ACCELERATION

    def test_shell_orbits_model(self):
        galaxy_config = GalaxyConfig.from_dict(get_preset_config("shell_orbits"))
        assert galaxy_config.velocity_model is VelocityModel.SHELL

    def test_list_is_grouped_by_category(self):
        categories = [preset["category"] for _, preset in get_preset_list()]
        ranks = [CATEGORY_ORDER.index(c) for c in categories]
        assert ranks == sorted(ranks)

    def test_tiny_preset_runs(self):
        sim = GalaxySimulation(GalaxyConfig.from_dict(get_preset_config("tiny")), seed=0)
        sim.update(0.01)
        assert sim.num_bodies == 500
