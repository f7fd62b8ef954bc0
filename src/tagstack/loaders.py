"""
Django template loader that compiles sources through a delimiter stack engine.

Wraps other loaders the same way Django's cached loader does:

    TEMPLATES = [
        {
            "BACKEND": "django.template.backends.django.DjangoTemplates",
            "DIRS": [BASE_DIR / "templates"],
            "OPTIONS": {
                "loaders": [
                    (
                        "tagstack.loaders.Loader",
                        ["django.template.loaders.filesystem.Loader"],
                    ),
                ],
            },
        },
    ]

One engine lives per Django `Engine`, so templates pulled in with
`{% include %}` or `{% extends %}` share its delimiter stacks.
"""

from __future__ import annotations

import logging

from django.template.loaders.base import Loader as BaseLoader

from .conf import TagstackSettings

logger = logging.getLogger(__name__)


class Loader(BaseLoader):
    def __init__(self, engine, loaders, settings: TagstackSettings | None = None):
        super().__init__(engine)
        self.loaders = engine.get_template_loaders(loaders)
        self.settings = settings or TagstackSettings.from_django()
        self.tag_engine = self.settings.build_engine()

    def get_dirs(self):
        for loader in self.loaders:
            if hasattr(loader, "get_dirs"):
                yield from loader.get_dirs()

    def get_contents(self, origin):
        contents = origin.loader.get_contents(origin)
        if self.settings.revert_tags:
            self.tag_engine.request_revert_to_defaults()
        logger.debug("compiling %s", origin.name)
        return self.tag_engine.compile_template(contents)

    def get_template_sources(self, template_name):
        for loader in self.loaders:
            yield from loader.get_template_sources(template_name)

    def reset(self):
        for loader in self.loaders:
            loader.reset()
