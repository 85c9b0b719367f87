"""Shared fixtures building a small two-locale documentation site on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from docpages.config import SiteConfig, load_site_config

MENU_YAML = """
- url: /index.html
  label: Introduction
- url: /installation.html
  label: Installation
  meta:
    title: Installing docpages
    keywords: install, setup
- url: /ui/index.html
  label: Ui
  folder: ui
  children:
    - url: /ui/resources.html
      label: Resources
    - url: /ui/getting-started.html
      label: Getting Started
- url: /changelog.html
  label: Changelog
""".lstrip()

PAGES = {
    "index.md": "# Welcome\n\nStart with [installation](installation.md).\n",
    "installation.md": (
        "# Installation\n\n"
        "## Requirements\n\nPython and a shell.\n\n"
        "## Install the package\n\n"
        "```bash data-line=\"2\"\npip install docpages\n```\n\n"
        "> [!NOTE]\n> Use a virtual environment.\n"
    ),
    "changelog.md": "# Changelog\n\n## 1.0\n\nFirst release.\n",
    "ui/index.md": "# Ui\n\n## Overview\n\nThe ui folder.\n",
    "ui/resources.md": (
        "# Resources\n\n## Images\n\n![Logo](logo.png)\n\n"
        "| a | b |\n|---|---|\n| 1 | 2 |\n"
    ),
    "ui/getting-started.md": "# Getting Started\n\n## First steps\n\nConcatenate the cats.\n",
}


def write_site(tmp_path: Path, *, extra_site: str = "") -> Path:
    """Write a site config, menu and Markdown sources below ``tmp_path``."""
    for locale in ("en", "tr"):
        root = tmp_path / "data" / "docs" / "1.0" / locale
        for relative, text in PAGES.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
    menu = tmp_path / "config" / "docs" / "1.0" / "navigation.yaml"
    menu.parent.mkdir(parents=True, exist_ok=True)
    menu.write_text(MENU_YAML, encoding="utf-8")
    (tmp_path / "public" / "images").mkdir(parents=True, exist_ok=True)

    config_path = tmp_path / "docpages.yaml"
    config_path.write_text(
        (
            "site:\n"
            "  html_path: data/docs\n"
            "  config_path: config/docs\n"
            "  http_prefix: \"https://\"\n"
            "  base_url: \"{locale}.example.com/docs/\"\n"
            "  images_folder: public/images\n"
            "  available_versions: [\"1.0\"]\n"
            "  default_version: \"1.0\"\n"
            "  available_locales: [en, tr]\n"
            "  default_locale: en\n"
            "  remove_default_locale: true\n"
            "  build_sitemap: true\n"
            "  xml_path: public/sitemap.xml\n"
        )
        + extra_site,
        encoding="utf-8",
    )
    return config_path


@pytest.fixture
def site_config_path(tmp_path: Path) -> Path:
    """Return the path of a freshly written site config."""
    return write_site(tmp_path)


@pytest.fixture
def site_config(site_config_path: Path) -> SiteConfig:
    """Return the loaded configuration of the sample site."""
    return load_site_config(site_config_path)
