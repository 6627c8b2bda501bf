"""Module entry point for `python -m yaml_schema_ls`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
