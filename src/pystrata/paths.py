from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir as _uc

APP_NAME_ENV = "PYSTRATA_APP_NAME"


def _app_name(default: str) -> str:
    return os.getenv(APP_NAME_ENV, default)


def user_config_dir(app_name: str = "pystrata") -> Path:
    app = _app_name(app_name)
    return Path(_uc(appname=app)).resolve()


def user_settings_file(app_name: str, filename: str = "settings.xml") -> Path:
    """Return the user-level settings file for ``app_name``.

    The file is not created; sources treat it as optional.
    """
    return user_config_dir(app_name) / filename
