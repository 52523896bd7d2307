import sys

from onlinestats.bot import main

sys.exit(main())
