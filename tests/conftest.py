from __future__ import annotations

from pathlib import Path

import pytest


def write_java(root: Path, package: str | None, name: str, imports=()) -> Path:
    """Write ``<root>/<package dirs>/<name>.java`` with the given imports."""
    directory = root / "src" / "main" / "java"
    if package:
        directory = directory.joinpath(*package.split("."))
    directory.mkdir(parents=True, exist_ok=True)

    lines = []
    if package:
        lines.append(f"package {package};")
        lines.append("")
    lines.extend(f"import {imp};" for imp in imports)
    lines.append("")
    lines.append(f"public class {name} {{")
    lines.append("}")

    path = directory / f"{name}.java"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """A small project with one cycle (app <-> service) and an outside user."""
    write_java(tmp_path, "com.acme.app", "App", ["com.acme.service.Service", "java.util.List"])
    write_java(tmp_path, "com.acme.app", "Main", ["com.acme.service.Service"])
    write_java(tmp_path, "com.acme.service", "Service", ["com.acme.app.App"])
    write_java(tmp_path, "com.acme.cli", "Cli", ["com.acme.app.App", "com.acme.service.*"])
    write_java(tmp_path, None, "Scratch", ["com.acme.app.App"])
    return tmp_path
