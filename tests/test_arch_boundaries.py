from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# Registration / orchestration modules.
# LOW-level code (core codecs, errors, result, sql_types) must NEVER import these.
ORCH_PREFIXES: tuple[str, ...] = (
    "varbin.cli",
    "varbin.call_spec",
    "varbin.registry",
    "varbin.functions",
)

# Core codecs are pure: no I/O, no process or environment access.
CORE_PREFIX = "varbin.core"
CORE_FORBIDDEN_STDLIB = frozenset(
    {"os", "sys", "io", "pathlib", "json", "subprocess", "socket", "threading", "logging", "random", "time"}
)

PACKAGE_ROOT = "varbin"
SRC_DIR = Path(__file__).resolve().parents[1] / "src"


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _has_prefix(mod: str, prefixes: Iterable[str]) -> bool:
    return any(mod == p or mod.startswith(p + ".") for p in prefixes)


def _module_name(py_file: Path) -> str | None:
    rel = py_file.relative_to(SRC_DIR)
    parts = list(rel.parts)
    if not parts or parts[0] != PACKAGE_ROOT:
        return None
    if py_file.name == "__init__.py":
        parts = parts[:-1]
    else:
        parts[-1] = py_file.stem
    return ".".join(parts) or None


def _iter_imports(py: Path, mod: str) -> Iterable[ImportEdge]:
    """All absolute imports of `py`; `from pkg import name` also yields pkg.name."""
    tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
    pkg = mod.rsplit(".", 1)[0]
    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", 0)
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield ImportEdge(src=mod, dst=alias.name, file=py, lineno=lineno)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = ".".join(pkg.split(".")[: max(0, pkg.count(".") + 2 - node.level)])
                target = f"{base}.{node.module}" if node.module else base
            else:
                target = node.module or ""
            if not target:
                continue
            yield ImportEdge(src=mod, dst=target, file=py, lineno=lineno)
            for alias in node.names:
                yield ImportEdge(src=mod, dst=f"{target}.{alias.name}", file=py, lineno=lineno)


def _all_edges() -> list[ImportEdge]:
    if not SRC_DIR.is_dir():
        raise AssertionError(f"Expected src/ directory at: {SRC_DIR}")
    edges: list[ImportEdge] = []
    for py in sorted(SRC_DIR.rglob("*.py")):
        mod = _module_name(py)
        if mod:
            edges.extend(_iter_imports(py, mod))
    return edges


def _report(title: str, violations: list[ImportEdge]) -> None:
    if not violations:
        return
    lines = [title]
    for v in sorted(violations, key=lambda e: (str(e.file), e.lineno, e.dst)):
        lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
    raise AssertionError("\n".join(lines))


def test_no_low_level_imports_orchestrator() -> None:
    """
    Hard dependency direction:
      ORCH (registry, functions, call_spec, cli) -> may depend on LOW
      LOW                                        -> must NOT depend on ORCH
    """
    violations = [
        e
        for e in _all_edges()
        if e.src != e.dst and not _has_prefix(e.src, ORCH_PREFIXES) and _has_prefix(e.dst, ORCH_PREFIXES)
    ]
    _report("Forbidden imports detected (LOW -> ORCH):", violations)


def test_core_codecs_do_no_io() -> None:
    violations = [
        e
        for e in _all_edges()
        if _has_prefix(e.src, (CORE_PREFIX,)) and e.dst.split(".")[0] in CORE_FORBIDDEN_STDLIB
    ]
    _report("Core codecs must stay pure (no I/O / process imports):", violations)


def test_core_has_no_third_party_imports() -> None:
    allowed_roots = {PACKAGE_ROOT, "__future__", "base64", "binascii", "hashlib", "struct", "dataclasses", "collections", "typing"}
    violations = [
        e
        for e in _all_edges()
        if _has_prefix(e.src, (CORE_PREFIX,)) and e.dst.split(".")[0] not in allowed_roots
    ]
    _report("Unexpected imports in core codecs:", violations)
