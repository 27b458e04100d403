import sys

from gitlab_smoke.cli import main

sys.exit(main())
