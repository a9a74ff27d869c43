import sys

from .desktop import main

sys.exit(main())
