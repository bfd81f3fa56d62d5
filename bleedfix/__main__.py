"""Allow ``python -m bleedfix``."""
import sys

from bleedfix.cli import main

sys.exit(main())
