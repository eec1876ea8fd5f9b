"""The lifecycle core imports without configuring the web app or database."""

import os
import subprocess
import sys
from pathlib import Path

import lifecycle

BACKEND_DIR = Path(lifecycle.__file__).resolve().parents[1]

CHECK = """
import sys
import lifecycle
import lifecycle.enums
loaded = sorted(name for name in sys.modules if name == "desk" or name.startswith("desk."))
print(",".join(loaded))
print("sqlalchemy" in sys.modules)
"""


def test_importing_lifecycle_leaves_database_unconfigured() -> None:
    env = {**os.environ, "PYTHONPATH": str(BACKEND_DIR)}
    result = subprocess.run(
        [sys.executable, "-c", CHECK],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )

    desk_modules, sqlalchemy_loaded = result.stdout.splitlines()
    assert desk_modules == ""
    assert sqlalchemy_loaded == "False"


def test_desk_enums_are_the_lifecycle_enums() -> None:
    from desk.models import enums as desk_enums
    from lifecycle import enums as core_enums

    assert desk_enums.RequestStatus is core_enums.RequestStatus
    assert desk_enums.Priority is core_enums.Priority
    assert desk_enums.UpdatedByRole is core_enums.UpdatedByRole
    assert desk_enums.UserRole is core_enums.UserRole


def test_models_share_the_lifecycle_clock() -> None:
    from desk.models import base
    from lifecycle import store

    assert base.utc_now is store.utc_now
