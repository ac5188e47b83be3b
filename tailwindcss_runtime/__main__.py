"""Module entrypoint for running as ``python -m tailwindcss_runtime``."""

from __future__ import annotations

from tailwindcss_runtime.cli import main


if __name__ == "__main__":
    main()
