"""Entry point for `python -m themeforge`."""

import sys


def main():
    from themeforge.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
