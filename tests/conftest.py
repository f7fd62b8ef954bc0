from __future__ import annotations

from pathlib import Path

import django
import pytest
from django.conf import settings
from django.template import Engine

from tagstack.compiler import TemplateCompiler
from tagstack.engine import DelimiterStackEngine

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def pytest_configure(config: pytest.Config) -> None:
    if not settings.configured:
        settings.configure(
            DEBUG=False,
            INSTALLED_APPS=[],
            TEMPLATES=[],
        )
        django.setup()


@pytest.fixture
def compiler() -> TemplateCompiler:
    return TemplateCompiler()


@pytest.fixture
def engine(compiler: TemplateCompiler) -> DelimiterStackEngine:
    return DelimiterStackEngine(compiler)


@pytest.fixture
def template_dir() -> Path:
    return FIXTURES / "templates"


@pytest.fixture
def make_django_engine():
    """Build a Django engine whose templates go through `tagstack.loaders.Loader`."""

    def _make(*, templates: dict[str, str] | None = None, dirs=None) -> Engine:
        if templates is not None:
            child = ("django.template.loaders.locmem.Loader", templates)
        else:
            child = "django.template.loaders.filesystem.Loader"
        return Engine(
            dirs=[str(d) for d in (dirs or [])],
            loaders=[("tagstack.loaders.Loader", [child])],
            autoescape=True,
        )

    return _make
