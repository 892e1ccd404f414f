"""Allow ``python -m table_explorer``."""

import sys

from .launch import main

sys.exit(main())
