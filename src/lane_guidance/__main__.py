import sys

from src.lane_guidance.cli import main

sys.exit(main())
