"""Module entrypoint for ``python -m lazydiff``."""

from .cli import main


if __name__ == "__main__":
    main()
