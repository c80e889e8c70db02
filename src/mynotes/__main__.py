# src/mynotes/__main__.py

import sys

from .cli.main import main

sys.exit(main())
