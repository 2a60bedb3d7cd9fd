from followfeed.cli import main

raise SystemExit(main())
