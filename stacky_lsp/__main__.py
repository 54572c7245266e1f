"""Allow ``python -m stacky_lsp`` to start the language server."""

from .cli import main

if __name__ == "__main__":
    main()
