#!/usr/bin/env python3
"""Generate docs/exit_codes.md from src/varbin/errors.py (single source of truth).

--check exits 1 when the committed file is stale (used in CI).
"""

from __future__ import annotations

import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    repo = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo / "src"))

    from varbin import errors  # noqa: E402

    out = repo / "docs" / "exit_codes.md"
    want = errors.render_exit_codes_markdown()

    if "--check" in args:
        have = out.read_text(encoding="utf-8") if out.is_file() else ""
        if have != want:
            print(f"[varbin] {out} is stale; run scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print(f"[varbin] {out} up to date")
        return 0

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(want, encoding="utf-8")
    print(f"[varbin] wrote {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
