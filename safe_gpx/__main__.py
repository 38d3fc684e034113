"""Allow ``python -m safe_gpx``."""

import sys

from safe_gpx.cli import main

sys.exit(main())
