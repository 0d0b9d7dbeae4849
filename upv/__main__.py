"""Allow running the CLI with ``python -m upv``."""

from upv.cli.app import main

if __name__ == "__main__":
    main()
