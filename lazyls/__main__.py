"""Module entrypoint for ``python -m lazyls``.

Argument parsing and exit statuses are handled in ``lazyls.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
