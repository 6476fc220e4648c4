"""Shared pytest fixtures for stringbird tests.

This module provides common fixtures used across unit and integration tests:
- Temporary project directories and source file factories
- Sample marked sources
- A FastMCP stand-in that records registered tools
- Module state reset between tests
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import structlog

# Add the src directory to the path so tests run from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ============================================================================
# Directory Fixtures
# ============================================================================

@pytest.fixture
def project_dir(tmp_path, monkeypatch) -> Path:
    """Temporary working directory; the default store file lands here."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STRINGBIRD_CONFIG", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    return tmp_path


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


# ============================================================================
# File Creation Helpers
# ============================================================================

@pytest.fixture
def create_source(project_dir) -> Callable[..., str]:
    """Factory fixture for creating source files.

    Returns:
        Callable: Function taking (filename, content) and returning the path
    """
    def _create_source(filename: str, content: str, subdir: str = "") -> str:
        dir_path = project_dir / subdir if subdir else project_dir
        dir_path.mkdir(parents=True, exist_ok=True)
        file_path = dir_path / filename
        # newline="" keeps CRLF content byte for byte
        with open(file_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return str(file_path)

    return _create_source


@pytest.fixture
def read_file() -> Callable[[str], str]:
    def _read_file(path: str) -> str:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    return _read_file


# ============================================================================
# Sample Sources
# ============================================================================

@pytest.fixture
def sample_tsx() -> str:
    """A small component with one marked string and one marked template."""
    return (
        "export function Greeting({ name }: { name: string }) {\n"
        "  const title = /*#greeting.title*/\"Welcome\";\n"
        "  const body = /*#greeting.body*/`Hello ${name}`;\n"
        "  return <h1 title={title}>{body}</h1>;\n"
        "}\n"
    )


# ============================================================================
# MCP Fixtures
# ============================================================================

class MockFastMCP:
    """Records tools registered with @mcp.tool()."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.tools: Dict[str, Any] = {}

    def tool(self, **kwargs: Any) -> Any:
        def decorator(func: Any) -> Any:
            self.tools[func.__name__] = func
            return func
        return decorator

    def run(self, **kwargs: Any) -> None:
        pass


@pytest.fixture
def mock_mcp_instance() -> MockFastMCP:
    return MockFastMCP("stringbird-test")


# ============================================================================
# Auto-use Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset logging configuration between tests (auto-used).

    The CLI binds structlog to the stderr stream that is current when it
    runs, which pytest closes after capturing a test.
    """
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
