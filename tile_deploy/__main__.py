import sys

from tile_deploy.cli import main

sys.exit(main())
