"""`python -m main` for the installed package; same CLI as `closing-demo`."""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
