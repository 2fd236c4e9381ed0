import sys

from floral.cli import main

sys.exit(main())
