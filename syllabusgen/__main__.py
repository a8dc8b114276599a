"""
Package entry point.

Allows running the application via:

    python -m syllabusgen

This simply forwards execution to syllabusgen.cli.main().
"""

from syllabusgen.cli import main

if __name__ == "__main__":
    main()
