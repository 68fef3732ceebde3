"""Shared pytest fixtures and configuration."""

import pytest

from nest_repl.config import Settings
from nest_repl.parser.source_tree import SourceTree

# Line numbers in the comments on the right are referenced by the tests.
USERS_SERVICE = "\n".join(
    [
        "import { Injectable } from '@nestjs/common';",  # 1
        "",  # 2
        "@Injectable()",  # 3
        "export class UsersService {",  # 4
        "  constructor(private readonly repo: UsersRepository) {}",  # 5
        "",  # 6
        "  async findOne(id: number, name?: string) {",  # 7
        "    const users = await this.repo.find();",  # 8
        "    return users.filter((user) => {",  # 9
        "      return user.id === id;",  # 10
        "    });",  # 11
        "  }",  # 12
        "",  # 13
        "  count() {",  # 14
        "    return 42;",  # 15
        "  }",  # 16
        "",  # 17
        "  handler = async (x: number) => {",  # 18
        "    return x * 2;",  # 19
        "  };",  # 20
        "",  # 21
        "  private _internal(value) {",  # 22
        "    return value;",  # 23
        "  }",  # 24
        "}",  # 25
        "",
    ]
)


@pytest.fixture
def users_service_source() -> str:
    """NestJS provider with a nested callback, an arrow field and a private method."""
    return USERS_SERVICE


@pytest.fixture
def users_service_tree(users_service_source: str) -> SourceTree:
    """Parsed UsersService."""
    return SourceTree.build(users_service_source, "typescript")


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def users_service_file(tmp_path, users_service_source):
    """UsersService written to a .ts file."""
    path = tmp_path / "users.service.ts"
    path.write_text(users_service_source, encoding="utf-8")
    return path
