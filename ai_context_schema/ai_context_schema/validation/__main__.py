"""Module entrypoint for `python -m ai_context_schema.validation`.

Delegates to the validator CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
