import sys

from netcup_acme_auth.cli import main

sys.exit(main())
