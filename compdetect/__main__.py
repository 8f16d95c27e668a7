import sys

from compdetect.cli import main

sys.exit(main())
