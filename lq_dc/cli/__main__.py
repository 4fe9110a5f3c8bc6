"""Entry point for `python -m lq_dc.cli` and the `lq-dc` console script."""

from __future__ import annotations

from lq_dc.cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
