"""Allow ``python -m markovnames``."""

import sys

from markovnames.cli import main

sys.exit(main())
