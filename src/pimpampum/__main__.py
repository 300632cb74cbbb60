import sys

from pimpampum.cli import main


sys.exit(main())
