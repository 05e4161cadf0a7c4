"""Module entrypoint for `python -m coffee_focus`."""

from coffee_focus.host import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
