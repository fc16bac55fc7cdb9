import sys

from example_package.main import main

sys.exit(main())
