"""Allow running lesson2html with python -m lesson2html."""

import sys

from lesson2html.cli import main

sys.exit(main())
