import sys

from exswallow.cli import main

sys.exit(main())
