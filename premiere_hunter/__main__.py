from premiere_hunter.cli import main

raise SystemExit(main())
