"""Allow ``python -m doccomment_checker``."""

from .cli import main

main()
