"""Allow ``python -m mediascan``."""

from mediascan.cli.commands import main

if __name__ == "__main__":
    main()
