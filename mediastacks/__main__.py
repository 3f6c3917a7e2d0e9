import sys

from mediastacks.cli import main

sys.exit(main())
