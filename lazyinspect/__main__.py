"""Module entrypoint for ``python -m lazyinspect``.

All argument parsing and runtime setup happen in ``lazyinspect.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
