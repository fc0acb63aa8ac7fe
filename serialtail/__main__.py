"""Allow `python -m serialtail`."""

import sys

from serialtail import main

sys.exit(main())
