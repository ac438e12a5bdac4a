import sys

from minicpp.compiler import main

sys.exit(main())
