#!/usr/bin/env python3
"""
Quick syntax validation for the importer, its runner and its tests
"""

import ast
import sys
from pathlib import Path

PROJECT_DIR = Path(__file__).parent


def project_sources():
    """Python files that ship with the project"""
    yield PROJECT_DIR / "bookmark_importer.py"
    yield PROJECT_DIR / "run_tests.py"
    yield from sorted((PROJECT_DIR / "tests").glob("test_*.py"))


def validate_syntax(path: Path) -> bool:
    """Validate Python syntax without executing"""
    try:
        ast.parse(path.read_text(encoding='utf-8'), filename=str(path))
    except SyntaxError as e:
        print(f"[FAIL] Syntax error in {path.name}:")
        print(f"  Line {e.lineno}: {e.msg}")
        if e.text:
            print(f"  Code: {e.text.strip()}")
        return False
    except OSError as e:
        print(f"[ERROR] Error reading {path}: {e}")
        return False

    print(f"[PASS] {path.relative_to(PROJECT_DIR)}")
    return True


if __name__ == "__main__":
    results = [validate_syntax(path) for path in project_sources()]
    sys.exit(0 if all(results) else 1)
