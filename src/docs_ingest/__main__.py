import sys

from docs_ingest.pipeline import main

sys.exit(main())
