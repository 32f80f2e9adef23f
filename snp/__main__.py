"""Module entrypoint for ``python -m snp``.

Module-mode execution behaves exactly like the ``snp`` console script.
All argument parsing and runtime setup happen in ``snp.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
