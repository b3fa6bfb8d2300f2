import sys

from okgroups.digest import main

sys.exit(main())
