"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application settings at a throwaway SQLite database before anything imports them.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

_db_dir = tempfile.mkdtemp(prefix="mealledger-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_db_dir}/app.db")
os.environ.setdefault("ENVIRONMENT", "testing")


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio only"""
    return "asyncio"
