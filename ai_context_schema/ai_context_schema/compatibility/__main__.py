"""Module entrypoint for `python -m ai_context_schema.compatibility`."""

from .run_check import main


if __name__ == "__main__":
    main()
