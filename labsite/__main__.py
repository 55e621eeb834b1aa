from labsite.cli import main

raise SystemExit(main())
