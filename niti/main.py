from __future__ import annotations

import sys

from niti.app import run_app


def main() -> int:
    """Entrypoint for `python -m niti` and the `niti` console script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
