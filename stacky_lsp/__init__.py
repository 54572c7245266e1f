"""Language server for the Stacky stack-based scripting language.

The package is organised into a few modules:

* ``catalog`` – the reference table of instructions with their
  descriptions and stack effects.
* ``parser`` – a line oriented validator that reports every source error
  in a document with its line and column.
* ``lsp`` – the pygls server: a per-document store, the completion and
  hover analysis, and the translation of parser errors into diagnostics.
* ``cli`` – the ``stacky-lsp`` command that starts the server over stdio.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("stacky-lsp")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

__all__ = ["__version__"]
