import sys

from apf_planner.main import main

sys.exit(main())
