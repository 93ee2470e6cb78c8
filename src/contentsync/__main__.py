from contentsync.cli import main

raise SystemExit(main())
