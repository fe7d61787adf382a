"""Allow running as ``python -m vcel``."""

from .cli import main

if __name__ == "__main__":
    main()
