"""Conftest for tests.

Ensure beartype runtime checking is enabled before importing the package.

This module sets MESA_DISCRETE_RUNTIME_TYPECHECKING=1 at import time so every
call made by the tests is also checked against the package's type hints.
"""

import os

os.environ.setdefault("MESA_DISCRETE_RUNTIME_TYPECHECKING", "1")
