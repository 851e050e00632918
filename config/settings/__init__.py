# config/settings/__init__.py
# `config.settings` picks an overlay from DJANGO_ENV; the test suite points
# DJANGO_SETTINGS_MODULE at config.settings.test directly.
import os

DJANGO_ENV = os.getenv("DJANGO_ENV", "local").strip().lower()

if DJANGO_ENV in {"prod", "production"}:
    from .prod import *  # noqa
else:
    from .local import *  # noqa
