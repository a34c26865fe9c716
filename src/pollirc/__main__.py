"""Allow ``python -m pollirc``."""

from .cli import main

raise SystemExit(main())
