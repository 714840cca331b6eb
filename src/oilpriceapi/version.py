"""SDK identity sent with every request."""

from __future__ import annotations

import platform

SDK_NAME = "oilpriceapi-python"
SDK_VERSION = "0.7.0"


def build_user_agent() -> str:
    """Return ``<sdk>/<version> python/<runtime version>``."""
    return f"{SDK_NAME}/{SDK_VERSION} python/{platform.python_version()}"
