"""
Shared pytest fixtures for the chat_formatting test suite.

This module provides fixtures that are automatically available to all test files:
- A Translator loaded with the sample table
- The same table written to temporary JSON and YAML files
- A clean configuration environment (no CHATFMT_* variables)
"""

import json
from pathlib import Path

import pytest
import yaml

from chat_formatting.translator import Translator
from tests.constants import SAMPLE_TRANSLATIONS

# ============================================================================
# TRANSLATION FIXTURES
# ============================================================================


@pytest.fixture
def translator() -> Translator:
    """Translator holding SAMPLE_TRANSLATIONS."""
    return Translator(SAMPLE_TRANSLATIONS)


@pytest.fixture
def translations_json(tmp_path: Path) -> Path:
    """SAMPLE_TRANSLATIONS written to a JSON language file."""
    path = tmp_path / "en_us.json"
    path.write_text(json.dumps(SAMPLE_TRANSLATIONS), encoding="utf-8")
    return path


@pytest.fixture
def translations_yaml(tmp_path: Path) -> Path:
    """SAMPLE_TRANSLATIONS written to a YAML language file."""
    path = tmp_path / "en_us.yaml"
    path.write_text(yaml.safe_dump(SAMPLE_TRANSLATIONS, allow_unicode=True), encoding="utf-8")
    return path


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every CHATFMT_* override for the duration of a test."""
    for name in ("CHATFMT_TRANSLATIONS", "CHATFMT_OUTPUT", "CHATFMT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
