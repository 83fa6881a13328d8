"""Shared fixtures."""

import pytest

APP_YAML = """
name: demo
root: page
options:
  strict: true
data:
  title: Demo
components:
  - name: badge
    template: <span class="badge">{{ label }}</span>
    props: [label]
  - name: page
    template: |
      <main>
        <h1>{{ title }}</h1>
        <badge v-for="t in tags" v-bind:label="t"></badge>
      </main>
    data:
      title: Untitled
      tags: [new, hot]
    subs:
      badge: badge
"""


@pytest.fixture
def app_file(tmp_path):
    """A vmark.yaml with a page rendering a badge per tag."""
    path = tmp_path / "vmark.yaml"
    path.write_text(APP_YAML)
    return path
