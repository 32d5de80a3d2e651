"""Allow ``python -m stackforge``."""

from stackforge.cli import main

main()
