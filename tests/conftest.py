"""Shared fixtures: small skill trees on disk."""

from __future__ import annotations

from pathlib import Path

import pytest


def write_skill(base: Path, folder: str, header: str, body: str = "# Body\n") -> Path:
    """Write <base>/<folder>/SKILL.md with the given front-matter lines."""
    skill = base / folder
    skill.mkdir(parents=True, exist_ok=True)
    path = skill / "SKILL.md"
    path.write_text(f"---\n{header}---\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def skill_tree(tmp_path: Path) -> Path:
    """Two valid skills, one malformed document and one plain README."""
    write_skill(
        tmp_path, "docker",
        "name: docker\n"
        "domain: devops\n"
        "description: Containerize applications with multi-stage builds.\n"
        "tags: [containers, devops]\n",
        "# Docker\n\nUse small base images.\n",
    )
    write_skill(
        tmp_path, "ci-cd",
        "name: ci-cd\n"
        "domain: devops\n"
        "description: Build, test and deploy with GitHub Actions.\n"
        "tags: [pipelines, devops]\n"
        "references:\n"
        "  - name: Actions docs\n"
        "    url: https://docs.github.com/actions\n"
        "  - https://github.com/actions/starter-workflows\n",
        "# CI/CD\n\nCache dependencies between jobs.\n",
    )
    refs = tmp_path / "ci-cd" / "references"
    refs.mkdir()
    (refs / "workflows.md").write_text("# Workflows\nNo header here.\n", encoding="utf-8")

    broken = tmp_path / "broken"
    broken.mkdir()
    (broken / "SKILL.md").write_text(
        "---\nname: broken\ntags: [oops\n", encoding="utf-8"
    )

    (tmp_path / "README.md").write_text("# Skills\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_skill():
    return write_skill
