from sugardiff.tui import main

raise SystemExit(main())
