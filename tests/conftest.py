from __future__ import annotations

import json
from pathlib import Path

import pytest

from navgen.introspection import DeclaredCapabilities
from navgen.model import Annotation, ClassDescriptor, ConstructorParam


NON_NULL = Annotation("android.support.annotation.NonNull")
NULLABLE = Annotation("android.support.annotation.Nullable")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep settings from picking up the host environment or a stray .env."""
    for env_name in ("KAPT_KOTLIN_GENERATED", "NAVGEN_TYPE_MAP", "NAVGEN_NAVIGATOR_CLASS"):
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def capabilities():
    return DeclaredCapabilities({"com.example.User", "com.example.Address"})


@pytest.fixture
def detail_activity():
    return ClassDescriptor(
        qualified_name="com.example.DetailActivity",
        params=(
            ConstructorParam(name="id", type="int", annotations=(NON_NULL,)),
            ConstructorParam(name="label", type="java.lang.String", annotations=(NULLABLE,)),
        ),
    )


@pytest.fixture
def empty_activity():
    return ClassDescriptor(qualified_name="com.example.EmptyActivity")


@pytest.fixture
def manifest_path(tmp_path) -> Path:
    document = {
        "parcelables": ["com.example.User"],
        "extras": {
            "com.example.DetailActivity": [
                {"name": "id", "type": "int", "annotations": ["android.support.annotation.NonNull"]},
                {"name": "users", "type": "java.util.ArrayList<com.example.User>"},
            ],
            "com.example.settings.SettingsFragment": [],
        },
    }
    path = tmp_path / "extras.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path
