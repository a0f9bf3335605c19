import sys

from pacman_ipfs_sync.cli_main import main

sys.exit(main())
