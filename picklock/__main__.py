import sys

from picklock.cli import main

sys.exit(main())
