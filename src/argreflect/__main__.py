"""Allow ``python -m argreflect`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m argreflect`` behaves identically to the ``argreflect``
console script.
"""

from __future__ import annotations

from argreflect.cli.app import cli

if __name__ == "__main__":
    cli()
