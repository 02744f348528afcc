"""Package entry point for ``python -m fused_reader``.

Delegates to the CLI's main() function.
"""

from fused_reader.cli import main

if __name__ == "__main__":
    main()
