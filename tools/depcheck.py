from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

DEFAULT_ROOT = Path(__file__).resolve().parents[1] / "src"

_FRAMEWORKS = frozenset({"pydantic", "prometheus_client", "opentelemetry"})


@dataclass(frozen=True)
class LayerRule:
    """Modules under ``package`` must not import anything under ``forbidden``."""

    package: str
    forbidden: frozenset[str]


LAYER_RULES: tuple[LayerRule, ...] = (
    LayerRule(
        package="bistro.domain",
        forbidden=_FRAMEWORKS
        | {"bistro.application", "bistro.infrastructure", "bistro.tools"},
    ),
    # Dishes are priced and described without knowing who orders them.
    LayerRule(
        package="bistro.domain.menu",
        forbidden=frozenset(
            {
                "bistro.domain.order",
                "bistro.domain.customer",
                "bistro.domain.kitchen",
                "bistro.domain.pricing",
            }
        ),
    ),
    LayerRule(package="bistro.application", forbidden=frozenset({"bistro.tools"})),
)

# Imports that close a cycle with the order aggregate; allowed only under TYPE_CHECKING.
TYPE_ONLY_IMPORTS: dict[str, frozenset[str]] = {
    "bistro.domain.order.updater": frozenset({"bistro.domain.order.entities"}),
    "bistro.domain.order.observers": frozenset({"bistro.domain.order.entities"}),
    "bistro.domain.pricing.discounts": frozenset({"bistro.domain.order.entities"}),
    "bistro.domain.order.entities": frozenset(
        {"bistro.domain.customer.entities", "bistro.domain.pricing.discounts"}
    ),
}


@dataclass(frozen=True)
class ImportSite:
    module: str
    line: int
    type_only: bool


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str
    reason: str


def _within(module: str, package: str) -> bool:
    return module == package or module.startswith(f"{package}.")


def _module_name(file_path: Path, root: Path) -> str:
    parts = list(file_path.relative_to(root).with_suffix("").parts)
    return ".".join(parts)


def _is_type_checking_guard(node: ast.If) -> bool:
    test = node.test
    if isinstance(test, ast.Name):
        return test.id == "TYPE_CHECKING"
    return isinstance(test, ast.Attribute) and test.attr == "TYPE_CHECKING"


def _import_sites(tree: ast.Module) -> Iterator[ImportSite]:
    guarded: set[int] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.If) and _is_type_checking_guard(node):
            for child in node.body:
                guarded.update(id(inner) for inner in ast.walk(child))

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield ImportSite(alias.name, node.lineno, id(node) in guarded)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield ImportSite(node.module, node.lineno, id(node) in guarded)


def check_module(module: str, file_path: Path, tree: ast.Module) -> list[Violation]:
    rules = [rule for rule in LAYER_RULES if _within(module, rule.package)]
    type_only = TYPE_ONLY_IMPORTS.get(module, frozenset())
    violations: list[Violation] = []

    for site in _import_sites(tree):
        for rule in rules:
            if any(_within(site.module, forbidden) for forbidden in rule.forbidden):
                violations.append(
                    Violation(file_path, site.line, site.module, f"forbidden in {rule.package}")
                )
        if not site.type_only and any(_within(site.module, target) for target in type_only):
            violations.append(
                Violation(file_path, site.line, site.module, "must be imported under TYPE_CHECKING")
            )

    return violations


def find_violations(root: Path) -> list[Violation]:
    violations: list[Violation] = []
    for file_path in sorted(root.rglob("*.py")):
        tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
        violations.extend(check_module(_module_name(file_path, root), file_path, tree))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import policy check for the bistro layers and the order cycle."
    )
    parser.add_argument(
        "--root",
        default=str(DEFAULT_ROOT),
        help="Source root holding the bistro package. Defaults to src/.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    violations = find_violations(Path(args.root))
    if not violations:
        print("depcheck passed")
        return 0

    print(f"depcheck failed: {len(violations)} import policy violation(s)")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module} ({violation.reason})")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
