"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

# Insert local src directory at the beginning of sys.path
# This ensures that the local sigdrift package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

_tests_dir = Path(__file__).parent
if str(_tests_dir) not in sys.path:
    sys.path.insert(0, str(_tests_dir))

# Force reimport of sigdrift modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("sigdrift"):
        del sys.modules[module_name]

import pytest  # noqa: E402
from builders import fn, param, snapshot_of  # noqa: E402

from sigdrift.symbols.models import ProjectSnapshot  # noqa: E402


@pytest.fixture
def greet_v1() -> ProjectSnapshot:
    """greet(name: string): string"""
    return snapshot_of(fn("greet", param("name"), returns="string"))


@pytest.fixture
def greet_v2() -> ProjectSnapshot:
    """greet(name: string, greeting?: string): string"""
    return snapshot_of(
        fn("greet", param("name"), param("greeting", optional=True), returns="string")
    )
