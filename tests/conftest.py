"""Shared fixtures for token index tests."""

import pytest

from search.config import IndexConfig


@pytest.fixture
def css_workspace(tmp_path):
    """A temporary source root plus a helper that writes stylesheets into it."""

    def write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    write.root = tmp_path
    return write


@pytest.fixture
def workspace_config(css_workspace):
    return IndexConfig(sources=["**/*.css"], roots=[str(css_workspace.root)])


TAILWIND_GLOBALS_CSS = """@import "tailwindcss";
@import "tw-animate-css";

@custom-variant dark (&:is(.dark *));

@theme inline {
  --color-background: var(--background);
  --radius-lg: var(--radius);
}

:root {
  --radius: 0.625rem;
  --background: oklch(1 0 0);
}

.dark {
  --background: oklch(0.145 0 0);
}

@layer base {
  * {
    @apply border-border outline-ring/50;
  }
  body {
    @apply bg-background text-foreground;
  }
}
"""


@pytest.fixture
def tailwind_globals_css():
    """A shadcn-style Tailwind v4 globals.css with constructs the CSS grammar only recovers from."""
    return TAILWIND_GLOBALS_CSS
