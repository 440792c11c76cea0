import sys

from playlist_seeder.cli import main

sys.exit(main())
