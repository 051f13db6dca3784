import sys

from ed_engine.cli import main

sys.exit(main())
