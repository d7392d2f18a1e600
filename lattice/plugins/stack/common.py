"""
Shared helpers for stack plugins.
"""

from __future__ import annotations

import json
from typing import Any

from lattice.core.context import GenerationContext
from lattice.plugins.base import ValidationResult


def json_bytes(data: Any) -> bytes:
    """Pretty JSON (2-space indent) with a trailing newline."""
    return (json.dumps(data, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


def text_bytes(text: str) -> bytes:
    return text.encode("utf-8")


def eslint_config(ignores: list[str]) -> str:
    """Flat ESLint config for TypeScript + JSX sources."""
    ignore_list = ", ".join(f"'{pattern}'" for pattern in ignores)
    return f"""\
import tseslint from '@typescript-eslint/eslint-plugin';
import tsparser from '@typescript-eslint/parser';

export default [
  {{
    ignores: [{ignore_list}],
  }},
  {{
    files: ['**/*.{{js,jsx,ts,tsx}}'],
    languageOptions: {{
      parser: tsparser,
      parserOptions: {{
        ecmaVersion: 'latest',
        sourceType: 'module',
        ecmaFeatures: {{
          jsx: true,
        }},
      }},
    }},
    plugins: {{
      '@typescript-eslint': tseslint,
    }},
    rules: {{
      '@typescript-eslint/no-unused-vars': 'warn',
    }},
  }},
];
"""


def check_scripts(
    context: GenerationContext,
    scripts_for: dict[str, str],
) -> ValidationResult:
    """Verify package.json exposes an npm script for every required check.

    Args:
        context: Generation context after all phases ran.
        scripts_for: Policy check name → npm script name. Checks not
            listed here are not enforced through package.json.
    """
    raw = context.get_file("package.json")
    if raw is None:
        return ValidationResult.failure("package.json was not generated")

    try:
        package = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return ValidationResult.failure(f"package.json is not valid JSON: {e}")
    if not isinstance(package, dict):
        return ValidationResult.failure("package.json must be a JSON object")

    scripts = package.get("scripts") or {}

    errors = [
        f"required check '{check}' has no '{script}' script in package.json"
        for check, script in scripts_for.items()
        if context.policy.requires(check) and script not in scripts
    ]
    return ValidationResult(valid=not errors, errors=errors)
