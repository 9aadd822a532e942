"""Tests for template catalog loading."""
import pytest

from create_xeiculy_app.core.errors import ConfigurationError
from create_xeiculy_app.core.template_catalog import TemplateCatalog


class TestTemplateCatalog:

    def test_bundled_catalog(self):
        catalog = TemplateCatalog.load()
        assert "nuxt3" in catalog.values()
        assert catalog.get("nuxt3").label == "Nuxt3"
        assert catalog.get("missing") is None

    def test_custom_catalog(self, tmp_path):
        path = tmp_path / "catalog.yml"
        path.write_text(
            "templates:\n"
            "  - value: nuxt3\n    label: Nuxt3\n"
            "  - value: vue/vite\n    label: Vue\n    hint: Vite + Vue\n"
        )
        catalog = TemplateCatalog.load(path)
        assert catalog.values() == ["nuxt3", "vue/vite"]
        assert catalog.get("vue/vite").hint == "Vite + Vue"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            TemplateCatalog.load(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "catalog.yml"
        path.write_text("templates: [\n")
        with pytest.raises(ConfigurationError):
            TemplateCatalog.load(path)

    @pytest.mark.parametrize("content", [
        "templates: []\n",
        "templates:\n  - value: ../etc\n    label: Bad\n",
        "templates:\n  - value: nuxt3\n    label: A\n  - value: nuxt3\n    label: B\n",
        "templates:\n  - value: nuxt3\n    label: A\n    extra: 1\n",
        "",
    ])
    def test_invalid_catalog(self, tmp_path, content):
        path = tmp_path / "catalog.yml"
        path.write_text(content)
        with pytest.raises(ConfigurationError):
            TemplateCatalog.load(path)
