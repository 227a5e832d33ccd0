#!/usr/bin/env python3
"""Safe math linting script for the liquidity pool.

Pool accounting must stay in FixedPointDecimal end to end. This script parses
every module under liquidity/ and reports expressions that would bring binary
floating point or tolerance-based comparisons into financial calculations:

- CRITICAL: isclose()/approx() calls and abs(a - b) < tolerance comparisons
- HIGH: true division or float() on names that look like financial values

Usage:
    python scripts/check_safe_math.py [--verbose]

Exit codes:
    0 - No blocking issues
    1 - CRITICAL or HIGH issues found
"""

import argparse
import ast
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

SCAN_DIRS = ["liquidity"]

# "/" between FixedPointDecimal operands is the checked, truncating division
DIVISION_ALLOWLIST = {"fees.py", "liquidity_pool.py"}

FINANCIAL_KEYWORDS = ("amount", "price", "fee", "reserve", "liquidity", "value", "share")

SEVERITIES = ("CRITICAL", "HIGH")


@dataclass(frozen=True)
class Finding:
    """An unsafe math expression."""

    path: Path
    line_num: int
    severity: str
    kind: str
    source: str


def _mentions_money(node: ast.AST) -> bool:
    text = ast.unparse(node).lower()
    return any(keyword in text for keyword in FINANCIAL_KEYWORDS)


def _call_name(node: ast.Call) -> str | None:
    if isinstance(node.func, ast.Name):
        return node.func.id
    if isinstance(node.func, ast.Attribute):
        return node.func.attr
    return None


def _is_tolerance_compare(node: ast.Compare) -> bool:
    """abs(x - y) < 0.5 style comparisons; a zero or one-unit bound is exact enough."""
    left = node.left
    if not (isinstance(left, ast.Call) and _call_name(left) == "abs"):
        return False
    bound = node.comparators[0]
    if not isinstance(bound, ast.Constant) or not isinstance(bound.value, (int, float)):
        return False
    return bound.value not in (0, 1)


def iter_findings(path: Path, tree: ast.AST) -> Iterator[Finding]:
    division_allowed = path.name in DIVISION_ALLOWLIST

    for node in ast.walk(tree):
        if isinstance(node, ast.BinOp) and isinstance(node.op, ast.Div):
            if not division_allowed and _mentions_money(node):
                yield Finding(path, node.lineno, "HIGH", "true division", ast.unparse(node))
        elif isinstance(node, ast.Call):
            name = _call_name(node)
            if name in ("isclose", "approx"):
                yield Finding(
                    path, node.lineno, "CRITICAL", "approximate comparison", ast.unparse(node)
                )
            elif (
                isinstance(node.func, ast.Name)
                and name == "float"
                and node.args
                and _mentions_money(node.args[0])
            ):
                yield Finding(path, node.lineno, "HIGH", "float conversion", ast.unparse(node))
        elif isinstance(node, ast.Compare) and _is_tolerance_compare(node):
            yield Finding(path, node.lineno, "CRITICAL", "abs() tolerance", ast.unparse(node))


def scan_file(path: Path) -> list[Finding]:
    """Parse one module and return its findings in line order."""
    try:
        tree = ast.parse(path.read_text(), filename=str(path))
    except (OSError, SyntaxError) as e:
        print(f"Warning: Could not parse {path}: {e}", file=sys.stderr)
        return []
    return sorted(iter_findings(path, tree), key=lambda f: f.line_num)


def scan_package(base_dir: Path) -> list[Finding]:
    """Scan every module under SCAN_DIRS."""
    findings = []
    for scan_dir in SCAN_DIRS:
        for py_file in sorted((base_dir / scan_dir).rglob("*.py")):
            findings.extend(scan_file(py_file))
    return findings


def print_report(findings: list[Finding], verbose: bool) -> None:
    if not findings:
        print("✓ No unsafe math patterns found!")
        return

    for severity in SEVERITIES:
        matching = [f for f in findings if f.severity == severity]
        if not matching:
            continue
        print(f"\n[{severity}] {len(matching)} issue(s):")
        for finding in matching:
            print(f"  {finding.path}:{finding.line_num}  {finding.kind}")
            if verbose:
                print(f"    > {finding.source[:70]}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Safe math linter for the liquidity pool")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    findings = scan_package(Path(__file__).parent.parent)
    print_report(findings, args.verbose)
    return 1 if findings else 0


if __name__ == "__main__":
    sys.exit(main())
