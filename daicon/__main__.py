from daicon.cli import main

raise SystemExit(main())
