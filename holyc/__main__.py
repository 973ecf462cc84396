"""Allow ``python -m holyc``.


File: __main__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import sys

from holyc.cli import main

sys.exit(main())
