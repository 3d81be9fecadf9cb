import sys

from taximeter.main import main

sys.exit(main())
