import sys

from playtracks.cli.main import main

sys.exit(main())
