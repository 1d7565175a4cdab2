"""Allow ``python -m mdreport``."""

import sys

from .cli import main

sys.exit(main())
