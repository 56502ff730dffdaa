import sys

from indexer_healthcheck.main import main

sys.exit(main())
