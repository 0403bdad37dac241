"""Import guard for the dinedash domain layer.

Aggregation rules and entities must stay importable without the web stack,
the database driver, the cache or any outer dinedash package.
"""

from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

THIRD_PARTY_PREFIXES = (
    "fastapi",
    "starlette",
    "pydantic",
    "sqlalchemy",
    "psycopg",
    "alembic",
    "redis",
    "httpx",
    "opentelemetry",
    "prometheus_client",
)
OUTER_LAYER_PREFIXES = (
    "dinedash.api",
    "dinedash.application",
    "dinedash.client",
    "dinedash.infrastructure",
    "dinedash.tools",
)

DOMAIN_ROOT = Path(__file__).resolve().parents[1] / "src" / "dinedash" / "domain"


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str

    def render(self) -> str:
        return f"{self.file_path}:{self.line} imports {self.module}"


def is_disallowed(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in THIRD_PARTY_PREFIXES + OUTER_LAYER_PREFIXES
    )


def _imported_modules(tree: ast.AST) -> Iterator[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def _source_files(target: Path) -> list[Path]:
    if target.is_dir():
        return sorted(target.rglob("*.py"))
    if target.suffix == ".py" and target.is_file():
        return [target]
    return []


def find_violations(targets: Sequence[Path]) -> list[Violation]:
    found: list[Violation] = []
    for target in targets:
        for source in _source_files(target):
            tree = ast.parse(source.read_text(encoding="utf-8"), filename=str(source))
            found.extend(
                Violation(file_path=source, line=line, module=module)
                for line, module in _imported_modules(tree)
                if is_disallowed(module)
            )
    return found


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Fail when the dinedash domain layer imports a framework or an outer layer."
    )
    parser.add_argument(
        "--path",
        dest="paths",
        action="append",
        type=Path,
        default=[],
        help="File or directory to check; may be given more than once. "
        "Checks the bundled domain package when omitted.",
    )
    args = parser.parse_args(argv)

    violations = find_violations(args.paths or [DOMAIN_ROOT])
    if violations:
        print(f"depcheck failed: {len(violations)} disallowed import(s) in the domain layer")
        for violation in violations:
            print(violation.render())
        return 1

    print("depcheck passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
