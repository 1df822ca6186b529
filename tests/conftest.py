"""Shared pytest fixtures for erdsl tests."""

from pathlib import Path

import pytest

from erdsl.core import ir

BLOG_DSL = """\
erd blog {
  users {
    id int PK
    `uuid` uuid
    email text
  }

  posts {
    id int PK
    title text
    created_by int FK
  }

  // edges
  posts.created_by o--o users.id
}
"""


@pytest.fixture
def corpora_dir() -> Path:
    """Return path to the DSL corpora directory."""
    return Path(__file__).parent / "corpora"


@pytest.fixture
def blog_dsl() -> str:
    """Return a small well-formed document."""
    return BLOG_DSL


@pytest.fixture
def users_entity() -> ir.EntitySpec:
    """Return a parsed-looking users entity."""
    return ir.EntitySpec(
        name="users",
        fields=[
            ir.FieldSpec(name="id", type="int", modifiers=[ir.FieldModifier.PK]),
            ir.FieldSpec(name="email", type="text"),
        ],
        location=ir.SourceLocation(line=2, column=3),
    )
