"""Unit tests for profile loader and manager."""

from unittest.mock import patch

import pytest

from fapiao_parser.config.profile_loader import (
    DEFAULT_TOLERANCES,
    ProfileConfig,
    get_default_profile,
    get_profiles_dir,
    list_available_profiles,
    load_profile,
)
from fapiao_parser.config.profile_manager import (
    get_profile,
    get_tolerance,
    reset_profile,
    set_profile,
    use_profile,
)
from fapiao_parser.models.fragment import TextFragment
from fapiao_parser.pipeline.proximity import extract_nearby_text


class TestProfileConfig:
    """Test ProfileConfig dataclass."""

    def test_profile_config_from_dict(self):
        config = ProfileConfig.from_dict({
            "name": "scanned",
            "description": "Looser tolerances",
            "tolerances": {"line_y": 14, "item_row_y": "3.5"},
            "export": {"with_details": True},
        })

        assert config.name == "scanned"
        assert config.tolerances == {"line_y": 14.0, "item_row_y": 3.5}
        assert config.export["with_details"] is True

    def test_to_dict_round_trip(self):
        config = ProfileConfig(name="x", tolerances={"line_y": 12.0})

        assert ProfileConfig.from_dict(config.to_dict()) == config

    def test_missing_tolerance_falls_back_to_default(self):
        config = ProfileConfig(name="partial", tolerances={"line_y": 20.0})

        assert config.tolerance("line_y") == 20.0
        assert config.tolerance("remark_below") == DEFAULT_TOLERANCES["remark_below"]

    def test_unknown_tolerance_key(self):
        with pytest.raises(KeyError):
            ProfileConfig(name="x").tolerance("no_such_key")


class TestLoadProfile:
    """Loading profiles from YAML."""

    def test_shipped_default_profile(self):
        profile = load_profile("default")

        assert profile.name == "default"
        for key, value in DEFAULT_TOLERANCES.items():
            assert profile.tolerance(key) == value
        assert "default" in list_available_profiles()
        assert (get_profiles_dir() / "default.yaml").exists()

    def test_missing_profile(self):
        with pytest.raises(FileNotFoundError, match="Profile not found"):
            load_profile("does_not_exist")

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("tolerances: [unclosed", encoding="utf-8")

        with patch("fapiao_parser.config.profile_loader.get_profiles_dir", return_value=tmp_path):
            with pytest.raises(ValueError, match="Invalid YAML"):
                load_profile("broken")

    def test_empty_profile(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("", encoding="utf-8")

        with patch("fapiao_parser.config.profile_loader.get_profiles_dir", return_value=tmp_path):
            with pytest.raises(ValueError, match="empty"):
                load_profile("empty")

    def test_non_numeric_tolerance(self, tmp_path):
        (tmp_path / "bad.yaml").write_text("name: bad\ntolerances:\n  line_y: wide\n", encoding="utf-8")

        with patch("fapiao_parser.config.profile_loader.get_profiles_dir", return_value=tmp_path):
            with pytest.raises(ValueError, match="Error loading profile"):
                load_profile("bad")

    def test_default_profile_without_files(self, tmp_path):
        with patch("fapiao_parser.config.profile_loader.get_profiles_dir", return_value=tmp_path):
            profile = get_default_profile()
            assert list_available_profiles() == ["default"]

        assert profile.tolerances == {}
        assert profile.tolerance("line_y") == DEFAULT_TOLERANCES["line_y"]


class TestProfileManager:
    """Active profile used by the extractors."""

    def test_get_profile_defaults(self):
        assert get_profile().name == "default"
        assert get_tolerance("item_row_y") == DEFAULT_TOLERANCES["item_row_y"]

    def test_set_profile(self, tmp_path):
        (tmp_path / "wide.yaml").write_text("name: wide\ntolerances:\n  line_y: 30\n", encoding="utf-8")

        with patch("fapiao_parser.config.profile_loader.get_profiles_dir", return_value=tmp_path):
            set_profile("wide")

        assert get_profile().name == "wide"
        assert get_tolerance("line_y") == 30.0

        reset_profile()
        assert get_profile().name == "default"

    def test_tolerance_changes_extraction(self):
        fragments = [
            TextFragment(text="发票号码:", x=400, y=55, width=50, height=10),
            TextFragment(text="12345678", x=455, y=67, width=45, height=10),
        ]

        assert extract_nearby_text(fragments, r"发票号码", "right", 100) == ""

        use_profile(ProfileConfig(name="loose", tolerances={"line_y": 15.0}))

        assert extract_nearby_text(fragments, r"发票号码", "right", 100) == "12345678"
