"""Allow ``python -m exprcc EXPR``."""

import sys

from exprcc.cli import main

sys.exit(main())
