#!/usr/bin/env python3
"""Allow running as: python3 -m loopbar.progress [options]"""

import sys

from loopbar.progress.demo import main

sys.exit(main() or 0)
