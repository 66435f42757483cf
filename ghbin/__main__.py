import sys

from ghbin.cli import main

sys.exit(main())
