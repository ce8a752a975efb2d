"""
Tests for the application icon generator
"""

import pytest

pytest.importorskip("PIL")

from xse_preloader_config.assets.icon_generator import create_app_icon, generate_all_icons


class TestIconGenerator:
    """Test icon creation."""

    @pytest.mark.parametrize("size", [16, 32, 256])
    def test_icon_size(self, size):
        icon = create_app_icon(size)
        assert icon.size == (size, size)
        assert icon.mode == "RGBA"

    def test_generate_all_icons(self, tmp_path):
        written = generate_all_icons(tmp_path / "icons")

        assert [path.name for path in written] == ["app_icon.png", "app_icon.ico"]
        assert all(path.exists() for path in written)
