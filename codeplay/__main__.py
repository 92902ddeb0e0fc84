import sys

from codeplay.cli import main

sys.exit(main())
