import sys

from hifld.cli import main

sys.exit(main())
