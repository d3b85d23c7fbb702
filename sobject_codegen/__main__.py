"""Allow running with ``python -m sobject_codegen``."""

import sys

from .cli import main

sys.exit(main())
