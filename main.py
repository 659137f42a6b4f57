"""main.py for the EV target scenario converter"""

from cli.run import app

__all__ = ['main']


def main() -> None:
    """Execute the conversion command defined in :mod:`cli.run`."""

    app()


if __name__ == '__main__':
    main()
