from factordb.cli import main

raise SystemExit(main())
