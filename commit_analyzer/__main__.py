import sys

from commit_analyzer.cli.main import main

sys.exit(main())
